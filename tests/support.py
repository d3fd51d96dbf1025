"""Test doubles and constants shared by the test modules."""

from datetime import UTC, datetime, timedelta

from app.domain.exceptions import (
    EmailDeliveryException,
    StorageUnavailableException,
)

TEST_SECRET = "test-reset-token-secret"
FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Settable clock returning timezone-aware UTC datetimes."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class FakeMonotonic:
    """Settable monotonic clock (seconds) for the rate limiter."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class BrokenKeyValueStore:
    """IKeyValueStore whose every operation fails like an unreachable backend."""

    def get(self, key: str) -> str | None:
        raise StorageUnavailableException("get", key, "connection refused")

    def set(self, key: str, value: str) -> None:
        raise StorageUnavailableException("set", key, "connection refused")

    def delete(self, key: str) -> None:
        raise StorageUnavailableException("delete", key, "connection refused")


class FakeIdentityProvider:
    """Records update_password calls; raises `error` when set."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, str, str]] = []

    def update_password(self, email: str, password: str, token: str) -> None:
        self.calls.append((email, password, token))
        if self.error is not None:
            raise self.error


class FakeEmailSender:
    """Records sent reset links; fails when `fail` is True."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[tuple[str, str]] = []

    def send_password_reset(self, to: str, reset_link: str) -> None:
        if self.fail:
            raise EmailDeliveryException("Email service down", status_code=503)
        self.sent.append((to, reset_link))
