"""Composition root: builds reset flow components from settings.

Entry points (scripts, a host application) call these; components never
read settings themselves, so tests construct them directly.
"""

from __future__ import annotations

from datetime import timedelta

from app.application.interfaces.services import IKeyValueStore
from app.application.services.password_reset_service import PasswordResetService
from app.application.services.pending_reset_store import PendingResetStore
from app.core.config import Settings, get_settings
from app.core.limiter import ResetRateLimiter
from app.infrastructure.cache.factory import KeyValueStoreFactory
from app.infrastructure.cache.keys import pending_reset_key
from app.infrastructure.external.email.reset_email_sender import HttpResetEmailSender
from app.infrastructure.external.identity.http_identity_provider import (
    HttpIdentityProvider,
)
from app.infrastructure.security.reset_token import ResetTokenCodec


def build_token_codec(settings: Settings | None = None) -> ResetTokenCodec:
    s = settings or get_settings()
    return ResetTokenCodec(s.reset_token_secret, scheme=s.reset_token_signature)


def build_pending_reset_store(
    settings: Settings | None = None,
    storage: IKeyValueStore | None = None,
) -> PendingResetStore:
    """Staging store on the configured backend (or the given one)."""
    s = settings or get_settings()
    backend = storage if storage is not None else KeyValueStoreFactory.create_store(s)
    key = pending_reset_key(s.redis_key_prefix if s.pending_reset_backend == "redis" else None)
    return PendingResetStore(
        backend,
        ttl=timedelta(seconds=s.pending_reset_ttl_seconds),
        mismatch_policy=s.pending_reset_mismatch_policy,
        key=key,
    )


def build_password_reset_service(settings: Settings | None = None) -> PasswordResetService:
    """Full reset flow wired to the HTTP identity provider and email endpoint."""
    s = settings or get_settings()
    return PasswordResetService(
        codec=build_token_codec(s),
        staging=build_pending_reset_store(s),
        identity_provider=HttpIdentityProvider(
            s.identity_api_base_url, timeout=s.http_timeout_seconds
        ),
        email_sender=HttpResetEmailSender(
            s.email_api_base_url, timeout=s.http_timeout_seconds
        ),
        rate_limiter=ResetRateLimiter(cooldown_seconds=s.reset_rate_limit_seconds),
        reset_link_base=s.frontend_base_url,
        token_ttl_hours=s.reset_token_ttl_hours,
    )
