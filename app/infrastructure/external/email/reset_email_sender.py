"""Reset email adapter: hands the reset link to the send-email endpoint."""

from __future__ import annotations

import httpx

from app.domain.exceptions import EmailDeliveryException
from app.infrastructure.external.http_json import build_client, error_message
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

SEND_EMAIL_PATH = "/api/send-email"
PASSWORD_RESET_EMAIL_TYPE = "password-reset"


class HttpResetEmailSender:
    """IResetEmailSender over POST /api/send-email (branded template rendered server-side)."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._client = http_client or build_client(base_url, timeout)

    def send_password_reset(self, to: str, reset_link: str) -> None:
        """Send the reset email.

        Raises:
            EmailDeliveryException: Network failure or non-2xx response.
        """
        logger.info("Sending password reset email to %s", to)
        try:
            response = self._client.post(
                SEND_EMAIL_PATH,
                json={
                    "type": PASSWORD_RESET_EMAIL_TYPE,
                    "data": {"to": to, "resetLink": reset_link},
                },
            )
        except httpx.TransportError as e:
            logger.error("Failed to send password reset email: %s", e)
            raise EmailDeliveryException(f"Failed to send email: {e}") from e
        if not response.is_success:
            message = error_message(response, "Failed to send email")
            logger.error("Send email API error (%s): %s", response.status_code, message)
            raise EmailDeliveryException(message, status_code=response.status_code)
        logger.info("Password reset email sent to %s", to)

    def close(self) -> None:
        self._client.close()
