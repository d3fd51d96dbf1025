"""Password reset flow: mail a signed link, then apply the new password.

Composes the token codec, the pending reset store, the identity provider
and the reset email sender. When the identity provider cannot be reached
the new password is staged locally and applied later from sign-in via
complete_pending_reset().
"""

from __future__ import annotations

from urllib.parse import quote

from app.application.dtos.reset import ResetResult, TokenValidation
from app.application.interfaces.services import (
    IIdentityProvider,
    IResetEmailSender,
    IResetTokenCodec,
)
from app.application.services.pending_reset_store import PendingResetStore
from app.core.constants import DEFAULT_TOKEN_TTL_HOURS, RESET_LINK_PATH
from app.core.limiter import ResetRateLimiter
from app.domain.exceptions import (
    EmailDeliveryException,
    IdentityProviderUnavailableException,
    PasswordUpdateRejectedException,
    ValidationException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_event, traced

logger = get_logger(__name__)

EMAIL_MISMATCH_ERROR = (
    "Email mismatch. Please use the same email you requested the reset for."
)
UPDATED_MESSAGE = (
    "Password updated successfully! You can now sign in with your new password."
)
STAGED_MESSAGE = (
    "Password reset successful! Your new password has been saved. "
    "Please go to the sign-in page and it will be used automatically."
)
STAGING_FAILED_ERROR = (
    "Failed to update password. Please try again or contact support."
)
NO_PENDING_ERROR = "No pending password reset"


class PasswordResetService:
    """Drives the reset flow end to end. Every outcome is a ResetResult."""

    def __init__(
        self,
        codec: IResetTokenCodec,
        staging: PendingResetStore,
        identity_provider: IIdentityProvider,
        email_sender: IResetEmailSender,
        rate_limiter: ResetRateLimiter | None = None,
        *,
        reset_link_base: str = "http://localhost:5173",
        token_ttl_hours: float = DEFAULT_TOKEN_TTL_HOURS,
    ) -> None:
        self.codec = codec
        self.staging = staging
        self.identity_provider = identity_provider
        self.email_sender = email_sender
        self.rate_limiter = rate_limiter or ResetRateLimiter()
        self.reset_link_base = reset_link_base.rstrip("/")
        self.token_ttl_hours = token_ttl_hours

    def validate_token(self, token: str) -> TokenValidation:
        return self.codec.validate(token)

    def build_reset_link(self, token: str) -> str:
        """Link the user follows from the email."""
        return f"{self.reset_link_base}{RESET_LINK_PATH}?token={quote(token, safe='')}"

    @traced("password_reset.request_reset")
    def request_reset(self, email: str) -> ResetResult:
        """Issue a token for email and send the reset link."""
        try:
            token = self.codec.issue(email, self.token_ttl_hours)
        except ValidationException as e:
            return ResetResult(success=False, error=e.message)
        try:
            self.email_sender.send_password_reset(email, self.build_reset_link(token))
        except EmailDeliveryException as e:
            logger.error("Failed to send password reset email to %s: %s", email, e.message)
            return ResetResult(success=False, error=e.message)
        return ResetResult(success=True, message="Password reset email sent")

    @traced("password_reset.reset_password")
    def reset_password(
        self,
        email: str,
        password: str,
        token: str,
        bypass_rate_limit: bool = False,
    ) -> ResetResult:
        """Apply a new password for email, authorized by token.

        Falls back to staging the password when the identity provider is
        unreachable. A provider that answers with an error is final.
        """
        error = self._check_token(email, token)
        if error:
            return ResetResult(success=False, error=error)

        if not bypass_rate_limit:
            wait = self.rate_limiter.wait_seconds(email)
            if wait > 0:
                return ResetResult(
                    success=False,
                    error=f"For security purposes, you can only request this after {wait} seconds.",
                )
        self.rate_limiter.record(email)

        try:
            self.identity_provider.update_password(email.strip(), password, token)
        except PasswordUpdateRejectedException as e:
            return ResetResult(success=False, error=e.message)
        except IdentityProviderUnavailableException as e:
            logger.warning("Identity provider unavailable (%s); staging password for %s", e.message, email)
            add_span_event("password_reset.staged")
            self.staging.store(email, password)
            if not self.staging.has_pending(email):
                return ResetResult(success=False, error=STAGING_FAILED_ERROR)
            return ResetResult(success=True, message=STAGED_MESSAGE, staged=True)
        return ResetResult(success=True, message=UPDATED_MESSAGE)

    @traced("password_reset.complete_pending_reset")
    def complete_pending_reset(self, email: str, token: str) -> ResetResult:
        """Apply a staged password at sign-in. The staged record is consumed either way."""
        error = self._check_token(email, token)
        if error:
            return ResetResult(success=False, error=error)
        password = self.staging.retrieve(email)
        if password is None:
            return ResetResult(success=False, error=NO_PENDING_ERROR)
        try:
            self.identity_provider.update_password(email.strip(), password, token)
        except (PasswordUpdateRejectedException, IdentityProviderUnavailableException) as e:
            logger.error("Failed to apply pending password reset for %s: %s", email, e.message)
            return ResetResult(success=False, error=e.message)
        return ResetResult(success=True, message=UPDATED_MESSAGE)

    def _check_token(self, email: str, token: str) -> str | None:
        """Return an error message if token is invalid or issued for another email."""
        validation = self.codec.validate(token)
        if not validation.valid or not validation.email:
            return validation.message or "Invalid or expired token"
        if validation.email != email:
            return EMAIL_MISMATCH_ERROR
        return None
