"""Pending password reset domain entity.

A new password chosen by the user and held briefly until the identity
provider accepts it. Independent of the storage backend.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from app.domain.exceptions import ValidationException
from app.shared.utils.datetime import from_timestamp_ms_utc, to_timestamp_ms


@dataclass(frozen=True)
class PendingResetEntity:
    """Domain entity for the staged (email, password) pair.

    Replaced wholesale, never updated in place. Serialized as
    {"email", "password", "timestamp"} with timestamp in epoch ms.
    """

    email: str
    password: str
    stored_at: datetime

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        """Return True when the record is strictly older than ttl."""
        return now - self.stored_at > ttl

    def belongs_to(self, email: str) -> bool:
        """Return True when the record was staged for exactly this email."""
        return self.email == email

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-serializable storage record."""
        return {
            "email": self.email,
            "password": self.password,
            "timestamp": to_timestamp_ms(self.stored_at),
        }

    @classmethod
    def from_record(cls, data: Any) -> "PendingResetEntity":
        """Build from a decoded storage record.

        Raises:
            ValidationException: If the record does not have the expected shape.
        """
        if not isinstance(data, dict):
            raise ValidationException("Pending reset record must be an object")
        email = data.get("email")
        password = data.get("password")
        timestamp = data.get("timestamp")
        if not isinstance(email, str):
            raise ValidationException("Pending reset email must be a string", field="email")
        if not isinstance(password, str):
            raise ValidationException(
                "Pending reset password must be a string", field="password"
            )
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise ValidationException(
                "Pending reset timestamp must be a number", field="timestamp"
            )
        return cls(
            email=email,
            password=password,
            stored_at=from_timestamp_ms_utc(int(timestamp)),
        )
