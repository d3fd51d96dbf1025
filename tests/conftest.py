"""Pytest configuration and fixtures for the reset flow.

Components take their clock and secret as arguments, so fixtures here
build them with a fixed secret and a controllable clock. No network or
Redis server is needed.
"""

import pytest

from app.application.services.pending_reset_store import PendingResetStore
from app.core.config import get_settings
from app.infrastructure.cache.memory_store import InMemoryKeyValueStore
from app.infrastructure.security.reset_token import ResetTokenCodec
from tests.support import TEST_SECRET, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def codec(clock: FakeClock) -> ResetTokenCodec:
    """Legacy-scheme codec with a fixed secret and the fake clock."""
    return ResetTokenCodec(TEST_SECRET, clock=clock)


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def staging(kv_store: InMemoryKeyValueStore, clock: FakeClock) -> PendingResetStore:
    """Staging store with the default policy (mismatch keeps the record)."""
    return PendingResetStore(kv_store, clock=clock)


@pytest.fixture
def reset_env(monkeypatch: pytest.MonkeyPatch):
    """Set a valid secret in the environment and reset the settings cache around the test."""
    monkeypatch.setenv("RESET_TOKEN_SECRET", TEST_SECRET)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
