"""Shared utilities: datetime helpers."""

from app.shared.utils.datetime import (
    ensure_utc,
    from_timestamp_ms_utc,
    to_timestamp_ms,
    utc_now,
)

__all__ = [
    "utc_now",
    "ensure_utc",
    "from_timestamp_ms_utc",
    "to_timestamp_ms",
]
