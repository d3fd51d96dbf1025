"""Identity provider adapter: asks the backend's secure-reset endpoint to change a password."""

from __future__ import annotations

import httpx

from app.domain.exceptions import (
    IdentityProviderUnavailableException,
    PasswordUpdateRejectedException,
)
from app.infrastructure.external.http_json import build_client, error_message
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

SECURE_RESET_PATH = "/api/secure-reset"


class HttpIdentityProvider:
    """IIdentityProvider over POST /api/secure-reset.

    The endpoint re-validates the token server-side and applies the new
    password with admin credentials.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            base_url: Origin serving /api/secure-reset.
            timeout: Request timeout in seconds (ignored when http_client is given).
            http_client: Optional shared httpx.Client (tests inject a MockTransport).
        """
        self._client = http_client or build_client(base_url, timeout)

    def update_password(self, email: str, password: str, token: str) -> None:
        """Change the password for email.

        Raises:
            IdentityProviderUnavailableException: Network or timeout failure.
            PasswordUpdateRejectedException: Non-2xx response.
        """
        try:
            response = self._client.post(
                SECURE_RESET_PATH,
                json={"email": email, "password": password, "token": token},
            )
        except httpx.TransportError as e:
            logger.error("Password update request failed: %s", e)
            raise IdentityProviderUnavailableException(
                f"Identity provider unavailable: {e}"
            ) from e
        if not response.is_success:
            message = error_message(response, "Failed to update password")
            logger.error("Password update API error (%s): %s", response.status_code, message)
            raise PasswordUpdateRejectedException(message, status_code=response.status_code)
        logger.info("Password updated successfully for %s", email)

    def close(self) -> None:
        self._client.close()
