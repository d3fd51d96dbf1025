"""Application services: pending reset staging and the reset flow."""

from app.application.services.password_reset_service import PasswordResetService
from app.application.services.pending_reset_store import PendingResetStore

__all__ = [
    "PasswordResetService",
    "PendingResetStore",
]
