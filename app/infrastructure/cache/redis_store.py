"""Redis-backed key-value store for the pending reset slot.

Synchronous redis-py client. Connection and command errors are retried
once after reconnecting, then surfaced as StorageUnavailableException so
the staging store can log and degrade.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

import redis

from app.domain.exceptions import StorageUnavailableException

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RedisKeyValueStore:
    """IKeyValueStore over Redis strings.

    When expire_seconds is set, values are written with SET ... EX as a
    backstop so an abandoned slot does not live forever. Logical expiry is
    still decided by the caller.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        *,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: str | None = None,
        expire_seconds: int | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            redis_client: Optional Redis client for testing or DI.
            host: Redis host when no client is given.
            port: Redis port when no client is given.
            db: Redis database index when no client is given.
            password: Optional Redis password when no client is given.
            expire_seconds: Optional physical TTL for written values.
        """
        self._connection_kwargs = {
            "host": host,
            "port": port,
            "db": db,
            "password": password,
            "decode_responses": True,
            "socket_connect_timeout": 5,
            "socket_keepalive": True,
        }
        self.redis = redis_client if redis_client is not None else self._new_client()
        self.expire_seconds = expire_seconds

    def _new_client(self) -> redis.Redis:
        return redis.Redis(**self._connection_kwargs)

    def _reconnect(self) -> None:
        """Drop the current client and open a new one."""
        try:
            self.redis.close()
        except redis.RedisError:
            logger.debug("Ignoring error while closing Redis client", exc_info=True)
        self.redis = self._new_client()

    def _call(self, operation: str, key: str, run: Callable[[], T]) -> T:
        try:
            return run()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis %s failed for key %s (%s); reconnecting", operation, key, e)
            self._reconnect()
            try:
                return run()
            except redis.RedisError as retry_error:
                raise StorageUnavailableException(
                    operation, key, str(retry_error)
                ) from retry_error
        except redis.RedisError as e:
            raise StorageUnavailableException(operation, key, str(e)) from e

    def get(self, key: str) -> str | None:
        value = self._call("get", key, lambda: self.redis.get(key))
        if value is None:
            logger.debug("Store MISS: %s", key)
            return None
        logger.debug("Store HIT: %s", key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        self._call("set", key, lambda: self.redis.set(key, value, ex=self.expire_seconds))
        logger.debug("Store SET: %s (EX: %s)", key, self.expire_seconds)

    def delete(self, key: str) -> None:
        self._call("delete", key, lambda: self.redis.delete(key))
        logger.debug("Store DELETE: %s", key)

    def close(self) -> None:
        """Close the Redis connection pool."""
        self.redis.close()
