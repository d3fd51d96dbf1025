"""Domain entities.

Pure domain models; no storage or transport concerns.
"""

from app.domain.entities.pending_reset import PendingResetEntity

__all__ = [
    "PendingResetEntity",
]
