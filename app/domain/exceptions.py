"""Domain exceptions for the password reset flow.

Defines domain-level exceptions that represent business rule violations
and unavailable collaborators. These exceptions are independent of
infrastructure concerns; adapters translate library errors into them.
"""

from typing import Any


class ScribeResetException(Exception):
    """Base exception for all password reset errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, status_code).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(ScribeResetException):
    """Raised when input validation fails (e.g. empty email or negative TTL)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class StorageUnavailableException(ScribeResetException):
    """Raised by a key-value backend when a read or write cannot complete."""

    def __init__(self, operation: str, key: str, reason: str | None = None) -> None:
        """Initialize with the failed operation and key.

        Args:
            operation: Backend operation ('get', 'set', 'delete').
            key: Key being accessed.
            reason: Optional underlying error text.
        """
        message = f"Storage {operation} failed for key {key!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            "STORAGE_UNAVAILABLE",
            {"operation": operation, "key": key},
        )


class IdentityProviderUnavailableException(ScribeResetException):
    """Raised when the identity provider cannot be reached."""

    def __init__(self, message: str = "Identity provider unavailable") -> None:
        super().__init__(message, "IDENTITY_PROVIDER_UNAVAILABLE")


class PasswordUpdateRejectedException(ScribeResetException):
    """Raised when the identity provider answers but refuses the password change."""

    def __init__(
        self,
        message: str = "Failed to update password",
        status_code: int | None = None,
    ) -> None:
        """Initialize with the provider's message and optional HTTP status.

        Args:
            message: Error text returned by the provider.
            status_code: Optional HTTP status code of the response.
        """
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(message, "PASSWORD_UPDATE_REJECTED", details)


class EmailDeliveryException(ScribeResetException):
    """Raised when the reset email could not be sent."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(message, "EMAIL_DELIVERY_FAILED", details)
