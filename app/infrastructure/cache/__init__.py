"""Keyed storage for the pending reset slot: memory and Redis backends.

Backends implement app.application.interfaces.IKeyValueStore; key format
is in keys.py (DRY).
"""

from app.infrastructure.cache.factory import KeyValueStoreFactory
from app.infrastructure.cache.keys import pending_reset_key
from app.infrastructure.cache.memory_store import InMemoryKeyValueStore
from app.infrastructure.cache.redis_store import RedisKeyValueStore

__all__ = [
    "InMemoryKeyValueStore",
    "KeyValueStoreFactory",
    "RedisKeyValueStore",
    "pending_reset_key",
]
