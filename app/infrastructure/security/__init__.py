"""Security: reset token signing and validation."""

from app.infrastructure.security.reset_token import (
    HmacSigner,
    LegacySigner,
    ResetTokenCodec,
    TokenSigner,
    build_signer,
)

__all__ = [
    "HmacSigner",
    "LegacySigner",
    "ResetTokenCodec",
    "TokenSigner",
    "build_signer",
]
