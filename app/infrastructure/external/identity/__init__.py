"""Identity provider adapters."""

from app.infrastructure.external.identity.http_identity_provider import (
    HttpIdentityProvider,
)

__all__ = ["HttpIdentityProvider"]
