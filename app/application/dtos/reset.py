"""DTOs for the password reset use cases (no transport dependency)."""

from __future__ import annotations

from dataclasses import dataclass

from app.domain.enums import TokenError


@dataclass(frozen=True)
class TokenValidation:
    """Outcome of validating a reset token. Failures are values, not exceptions."""

    valid: bool
    email: str | None = None
    error: TokenError | None = None

    @classmethod
    def ok(cls, email: str) -> TokenValidation:
        return cls(valid=True, email=email)

    @classmethod
    def failed(cls, error: TokenError) -> TokenValidation:
        return cls(valid=False, error=error)

    @property
    def message(self) -> str | None:
        """User-facing error text, or None when valid."""
        return self.error.message if self.error else None


@dataclass(frozen=True)
class ResetResult:
    """Outcome of a reset flow step (request, reset, complete)."""

    success: bool
    message: str | None = None
    error: str | None = None
    # True when the identity provider was unreachable and the password was staged.
    staged: bool = False
