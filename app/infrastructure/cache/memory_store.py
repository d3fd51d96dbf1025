"""In-process key-value store (default backend for the pending reset slot)."""

from __future__ import annotations

from threading import Lock


class InMemoryKeyValueStore:
    """Dict-backed IKeyValueStore. Lives as long as the process."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._lock = Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
