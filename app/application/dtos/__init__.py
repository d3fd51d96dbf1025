"""Application DTOs (no transport dependency)."""

from app.application.dtos.reset import ResetResult, TokenValidation

__all__ = [
    "ResetResult",
    "TokenValidation",
]
