"""Key-value store factory: creates the memory or Redis backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.interfaces.services import IKeyValueStore

if TYPE_CHECKING:
    from app.core.config import Settings


class KeyValueStoreFactory:
    """Factory for pending reset slot backends based on configuration."""

    @staticmethod
    def create_store(settings: "Settings | None" = None) -> IKeyValueStore:
        """Create the key-value store from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            InMemoryKeyValueStore or RedisKeyValueStore.

        Raises:
            ValueError: Unknown backend.
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        backend = s.pending_reset_backend.lower()

        if backend == "memory":
            from app.infrastructure.cache.memory_store import InMemoryKeyValueStore

            return InMemoryKeyValueStore()
        if backend == "redis":
            from app.infrastructure.cache.redis_store import RedisKeyValueStore

            return RedisKeyValueStore(
                host=s.redis_host,
                port=s.redis_port,
                db=s.redis_db,
                password=s.redis_password.get_secret_value() if s.redis_password else None,
                # Backstop only; never shorter than the logical TTL.
                expire_seconds=s.pending_reset_ttl_seconds * 2,
            )
        raise ValueError(
            f"Unknown pending reset backend: {backend}. Supported: 'memory', 'redis'"
        )
