"""Reset token issuance and validation.

Token format: <base64(JSON{"email","exp"})>.<signature>, exp in epoch ms.
Validation is stateless; a token is valid until exp, with no revocation.
issue() always writes an integer exp. validate() also accepts a finite
fractional exp, which the web client produces for some fractional TTLs;
its signature uses the shortest decimal form, as JavaScript prints it.
The secret is injected so tests can use a fixed value.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Any

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from pydantic import SecretStr

from app.application.dtos.reset import TokenValidation
from app.core.constants import (
    DEFAULT_TOKEN_TTL_HOURS,
    MAX_TOKEN_PAYLOAD_LENGTH,
    MS_PER_HOUR,
    RESET_TOKEN_KEY_INFO,
    TOKEN_SEGMENT_SEP,
)
from app.domain.enums import SignatureScheme, TokenError
from app.domain.exceptions import ValidationException
from app.shared.utils.datetime import to_timestamp_ms, utc_now


def _canonical_payload(email: str, exp: int | float) -> str:
    """Compact JSON with email then exp (same bytes as JSON.stringify)."""
    return json.dumps({"email": email, "exp": exp}, separators=(",", ":"), ensure_ascii=False)


class TokenSigner(ABC):
    """Computes and checks the signature segment of a reset token."""

    scheme: SignatureScheme

    @abstractmethod
    def sign(self, email: str, exp: int | float) -> str:
        """Return the signature segment for email and exp."""
        ...

    @abstractmethod
    def verify(self, signature: str, email: str, exp: int | float) -> bool:
        """Return True if signature matches email and exp."""
        ...


class LegacySigner(TokenSigner):
    """base64(email + secret + exp) with '=' padding removed.

    NOT a MAC. The encoding is reversible, so the secret can be recovered
    from any issued token, and comparison is plain equality. Exists only
    so tokens issued by the web client keep validating.
    """

    scheme = SignatureScheme.LEGACY

    def __init__(self, secret: str) -> None:
        self._secret = secret

    def sign(self, email: str, exp: int | float) -> str:
        raw = f"{email}{self._secret}{exp}".encode()
        return base64.b64encode(raw).decode("ascii").replace("=", "")

    def verify(self, signature: str, email: str, exp: int | float) -> bool:
        return signature == self.sign(email, exp)


class HmacSigner(TokenSigner):
    """HMAC-SHA256 over the canonical payload, unpadded urlsafe base64."""

    scheme = SignatureScheme.HMAC

    def __init__(self, secret: str) -> None:
        self._signing_key = self._derive_signing_key(secret)

    @staticmethod
    def _derive_signing_key(secret: str) -> bytes:
        """Derive a purpose-specific HMAC key from the shared secret (domain separation)."""
        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=32,
            salt=None,
            info=RESET_TOKEN_KEY_INFO,
        )
        return hkdf.derive(secret.encode())

    def sign(self, email: str, exp: int | float) -> str:
        digest = hmac.new(
            self._signing_key,
            _canonical_payload(email, exp).encode(),
            hashlib.sha256,
        ).digest()
        return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")

    def verify(self, signature: str, email: str, exp: int | float) -> bool:
        return hmac.compare_digest(self.sign(email, exp), signature)


def build_signer(scheme: SignatureScheme | str, secret: str) -> TokenSigner:
    """Return the signer for scheme.

    Raises:
        ValueError: Unknown scheme.
    """
    scheme = SignatureScheme(scheme)
    if scheme is SignatureScheme.HMAC:
        return HmacSigner(secret)
    return LegacySigner(secret)


class ResetTokenCodec:
    """Issues and validates expiring reset tokens bound to an email address."""

    def __init__(
        self,
        secret: SecretStr | str,
        scheme: SignatureScheme | str = SignatureScheme.LEGACY,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the codec.

        Args:
            secret: Shared secret; must match on every issuing/validating process.
            scheme: Signature scheme for the second segment.
            clock: Returns the current time (injected for tests).

        Raises:
            ValueError: Empty secret or unknown scheme.
        """
        raw = secret.get_secret_value() if isinstance(secret, SecretStr) else secret
        if not raw:
            raise ValueError("Reset token secret must not be empty")
        self._signer = build_signer(scheme, raw)
        self._clock = clock

    @property
    def scheme(self) -> SignatureScheme:
        return self._signer.scheme

    def _now_ms(self) -> int:
        return to_timestamp_ms(self._clock())

    def issue(self, email: str, ttl_hours: float = DEFAULT_TOKEN_TTL_HOURS) -> str:
        """Return a token for email that expires ttl_hours from now.

        ttl_hours=0 yields a token that is already expired.

        Raises:
            ValidationException: Empty email or negative ttl_hours.
        """
        if not isinstance(email, str) or not email.strip():
            raise ValidationException("Email is required", field="email")
        if ttl_hours < 0:
            raise ValidationException("ttl_hours must not be negative", field="ttl_hours")
        exp = self._now_ms() + int(ttl_hours * MS_PER_HOUR)
        payload = base64.b64encode(_canonical_payload(email, exp).encode()).decode("ascii")
        return f"{payload}{TOKEN_SEGMENT_SEP}{self._signer.sign(email, exp)}"

    def validate(self, token: Any) -> TokenValidation:
        """Check format, payload, expiry, then signature. Never raises."""
        if not isinstance(token, str):
            return TokenValidation.failed(TokenError.FORMAT)
        payload, _, signature = token.partition(TOKEN_SEGMENT_SEP)
        if not payload or not signature:
            return TokenValidation.failed(TokenError.FORMAT)
        try:
            email, exp = self._decode_payload(payload)
        except (ValueError, TypeError, RecursionError):
            return TokenValidation.failed(TokenError.INVALID_TOKEN)
        if exp <= self._now_ms():
            return TokenValidation.failed(TokenError.EXPIRED)
        if not self._signer.verify(signature, email, exp):
            return TokenValidation.failed(TokenError.INVALID_SIGNATURE)
        return TokenValidation.ok(email)

    @staticmethod
    def _decode_payload(segment: str) -> tuple[str, int | float]:
        """Decode the payload segment into (email, exp).

        Missing base64 padding is tolerated, as atob() does. An integral
        float exp is returned as int so it signs like the JavaScript number.

        Raises:
            ValueError: Oversized segment, bad base64, bad JSON, or wrong
                payload shape.
            RecursionError: JSON nested too deeply.
        """
        if len(segment) > MAX_TOKEN_PAYLOAD_LENGTH:
            raise ValueError("Token payload too long")
        padded = segment + "=" * (-len(segment) % 4)
        data = json.loads(base64.b64decode(padded, validate=True).decode("utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Token payload must be an object")
        email = data.get("email")
        exp = data.get("exp")
        if not isinstance(email, str) or not email:
            raise ValueError("Token payload email missing")
        # Lone surrogates decode from JSON escapes but cannot be signed
        email.encode("utf-8")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise ValueError("Token payload exp must be a number")
        if isinstance(exp, float):
            if not math.isfinite(exp):
                raise ValueError("Token payload exp must be finite")
            if exp.is_integer():
                exp = int(exp)
        return email, exp
