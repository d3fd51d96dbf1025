"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or configuration. Used by application
and infrastructure layers.
"""

from app.domain.entities import PendingResetEntity
from app.domain.enums import MismatchPolicy, SignatureScheme, TokenError
from app.domain.exceptions import (
    EmailDeliveryException,
    IdentityProviderUnavailableException,
    PasswordUpdateRejectedException,
    ScribeResetException,
    StorageUnavailableException,
    ValidationException,
)

__all__ = [
    "PendingResetEntity",
    "MismatchPolicy",
    "SignatureScheme",
    "TokenError",
    "ScribeResetException",
    "ValidationException",
    "StorageUnavailableException",
    "IdentityProviderUnavailableException",
    "PasswordUpdateRejectedException",
    "EmailDeliveryException",
]
