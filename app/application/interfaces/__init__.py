"""Application interfaces (ports) for the reset flow."""

from app.application.interfaces.services import (
    IIdentityProvider,
    IKeyValueStore,
    IResetEmailSender,
    IResetTokenCodec,
)

__all__ = [
    "IIdentityProvider",
    "IKeyValueStore",
    "IResetEmailSender",
    "IResetTokenCodec",
]
