"""Domain enumerations for the password reset flow.

Enums represent fixed sets of domain values (token failure kinds,
signature schemes, staging slot policies).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class TokenError(_ValuesMixin, str, Enum):
    """Why a reset token failed validation.

    Checked in this order: format, decode, expiry, signature.
    """

    FORMAT = "format_error"
    INVALID_TOKEN = "invalid_token_error"
    EXPIRED = "expired_error"
    INVALID_SIGNATURE = "invalid_signature_error"

    @property
    def message(self) -> str:
        """Human-readable message shown to the user."""
        return _TOKEN_ERROR_MESSAGES[self]


_TOKEN_ERROR_MESSAGES = {
    TokenError.FORMAT: "Invalid token format",
    TokenError.INVALID_TOKEN: "Invalid token",
    TokenError.EXPIRED: "Token has expired",
    TokenError.INVALID_SIGNATURE: "Invalid token signature",
}


class SignatureScheme(_ValuesMixin, str, Enum):
    """Signature segment algorithm for reset tokens.

    LEGACY is base64(email + secret + exp) with padding stripped. It is a
    reversible encoding, not a MAC: anyone holding a token can read the
    secret back out of it. Kept only for compatibility with tokens issued
    by the web client. HMAC signs the payload segment with HMAC-SHA256.
    """

    LEGACY = "legacy"
    HMAC = "hmac"


class MismatchPolicy(_ValuesMixin, str, Enum):
    """What a retrieve for a different email does to the staged record.

    KEEP leaves it in place so a later matching retrieve still succeeds
    (web client behaviour). CLEAR discards it.
    """

    KEEP = "keep"
    CLEAR = "clear"
