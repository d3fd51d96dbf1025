"""Single-slot staging store for a pending password reset.

Holds at most one (email, password) pair for a short TTL so a reset can
finish without calling the identity provider's rate-limited endpoint
again. The slot is global: a second store() for another email silently
replaces the first. Nothing here raises; storage problems are logged and
the store behaves as empty.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timedelta

from app.application.interfaces.services import IKeyValueStore
from app.core.constants import PENDING_RESET_KEY, PENDING_RESET_TTL_SECONDS
from app.domain.entities.pending_reset import PendingResetEntity
from app.domain.enums import MismatchPolicy
from app.domain.exceptions import StorageUnavailableException, ValidationException
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class PendingResetStore:
    """Stages one pending reset in a keyed store, with lazy expiry and single-use reads."""

    def __init__(
        self,
        storage: IKeyValueStore,
        *,
        ttl: timedelta = timedelta(seconds=PENDING_RESET_TTL_SECONDS),
        mismatch_policy: MismatchPolicy | str = MismatchPolicy.KEEP,
        clock: Callable[[], datetime] = utc_now,
        key: str = PENDING_RESET_KEY,
    ) -> None:
        """Initialize the store.

        Args:
            storage: Keyed backend holding the slot.
            ttl: Age after which a staged record is discarded on next read.
            mismatch_policy: Whether retrieve() for another email clears the slot.
            clock: Returns the current time (injected for tests).
            key: Storage key of the slot.
        """
        self.storage = storage
        self.ttl = ttl
        self.mismatch_policy = MismatchPolicy(mismatch_policy)
        self._clock = clock
        self._key = key

    def _slot_key(self, email: str | None = None) -> str:
        """Storage key for email's slot. One global slot: email is ignored."""
        return self._key

    def store(self, email: str, password: str) -> None:
        """Stage password for email, replacing whatever was staged before."""
        record = PendingResetEntity(email=email, password=password, stored_at=self._clock())
        try:
            self.storage.set(self._slot_key(email), json.dumps(record.to_record()))
        except StorageUnavailableException:
            logger.exception("Failed to store pending password reset for %s", email)
            return
        logger.info("Password reset stored temporarily for %s", email)

    def retrieve(self, email: str) -> str | None:
        """Return and consume the staged password for email.

        Returns None when nothing is staged, the record expired (it is
        cleared), or it belongs to another email (cleared only under
        MismatchPolicy.CLEAR).
        """
        record = self._load_fresh(email)
        if record is None:
            return None
        if not record.belongs_to(email):
            if self.mismatch_policy is MismatchPolicy.CLEAR:
                logger.info("Discarding pending password reset staged for another email")
                self.clear()
            return None
        self.clear()
        logger.info("Retrieved pending password reset for %s", email)
        return record.password

    def has_pending(self, email: str) -> bool:
        """Return True if a fresh record is staged for email. Never consumes it."""
        record = self._load_fresh(email)
        return record is not None and record.belongs_to(email)

    def clear(self) -> None:
        """Empty the slot. Idempotent."""
        try:
            self.storage.delete(self._slot_key())
        except StorageUnavailableException:
            logger.exception("Failed to clear pending password reset")

    def _load_fresh(self, email: str) -> PendingResetEntity | None:
        """Read the slot; clear and drop it if older than the TTL."""
        try:
            raw = self.storage.get(self._slot_key(email))
        except StorageUnavailableException:
            logger.exception("Failed to read pending password reset")
            return None
        if raw is None:
            return None
        try:
            record = PendingResetEntity.from_record(json.loads(raw))
        except (ValueError, OverflowError, OSError, ValidationException):
            logger.warning("Ignoring malformed pending password reset record")
            return None
        if record.is_expired(self._clock(), self.ttl):
            logger.info("Pending password reset expired; clearing")
            self.clear()
            return None
        return record
