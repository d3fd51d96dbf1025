"""Per-email cooldown between password reset attempts.

In-memory and per process, like the web client it replaces: it throttles
honest retries, it does not enforce anything across processes. Emails are
keyed exactly as given, the same identity the token and staging slot use.
"""

import math
import time
from collections.abc import Callable
from threading import Lock

from app.core.constants import RESET_RATE_LIMIT_SECONDS


class ResetRateLimiter:
    """Tracks the last reset attempt per email and the attempt count."""

    def __init__(
        self,
        cooldown_seconds: float = RESET_RATE_LIMIT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock
        self._last_attempt: dict[str, float] = {}
        self._attempts: dict[str, int] = {}
        self._lock = Lock()

    def wait_seconds(self, email: str) -> int:
        """Seconds (rounded up) until email may attempt again; 0 when allowed now."""
        with self._lock:
            last = self._last_attempt.get(email)
        if last is None:
            return 0
        remaining = self.cooldown_seconds - (self._clock() - last)
        if remaining <= 0:
            return 0
        return math.ceil(remaining)

    def record(self, email: str) -> None:
        """Record an attempt for email now."""
        with self._lock:
            self._last_attempt[email] = self._clock()
            self._attempts[email] = self._attempts.get(email, 0) + 1

    def attempts(self, email: str) -> int:
        """Number of attempts recorded for email in this process."""
        with self._lock:
            return self._attempts.get(email, 0)
