"""Application layer: interfaces, DTOs, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (storage, identity, email).
"""

from app.application.dtos import ResetResult, TokenValidation
from app.application.interfaces import (
    IIdentityProvider,
    IKeyValueStore,
    IResetEmailSender,
    IResetTokenCodec,
)
from app.application.services import PasswordResetService, PendingResetStore

__all__ = [
    "IIdentityProvider",
    "IKeyValueStore",
    "IResetEmailSender",
    "IResetTokenCodec",
    "PasswordResetService",
    "PendingResetStore",
    "ResetResult",
    "TokenValidation",
]
