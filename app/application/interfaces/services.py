"""Service interfaces (ports) for the application layer.

Protocols define contracts for the collaborators of the reset flow (DIP).
Infrastructure provides the implementations; tests provide fakes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.reset import TokenValidation


# Key-value store interface
class IKeyValueStore(Protocol):
    """Minimal keyed storage for the pending reset slot (DIP).

    Backends raise StorageUnavailableException when the store cannot be used.
    """

    def get(self, key: str) -> str | None:
        """Return the stored string or None if the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""

    def delete(self, key: str) -> None:
        """Remove key. No-op if absent."""


# Reset token codec interface
class IResetTokenCodec(Protocol):
    """Protocol for issuing and validating reset tokens."""

    def issue(self, email: str, ttl_hours: float = 24) -> str:
        """Return a signed token for email expiring ttl_hours from now."""

    def validate(self, token: str) -> TokenValidation:
        """Return the validation outcome; never raises."""


# Identity provider interface
class IIdentityProvider(Protocol):
    """Protocol for the external service that actually changes a password."""

    def update_password(self, email: str, password: str, token: str) -> None:
        """Change the password for email.

        Raises IdentityProviderUnavailableException when the provider cannot be
        reached and PasswordUpdateRejectedException when it refuses the change.
        """


# Reset email sender interface
class IResetEmailSender(Protocol):
    """Protocol for delivering the reset link to the user."""

    def send_password_reset(self, to: str, reset_link: str) -> None:
        """Send the reset link. Raises EmailDeliveryException on failure."""
