"""Per-endpoint call counters."""

from __future__ import annotations

import threading


class CallCounter:
    """Process-local call index per endpoint key.

    A key that was never seen reads as -1, so the first ``advance`` yields 0.
    """

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._lock = threading.RLock()

    def advance(self, key: str) -> int:
        with self._lock:
            value = self._counts.get(key, -1) + 1
            self._counts[key] = value
            return value

    def reset(self, key: str) -> int:
        with self._lock:
            self._counts[key] = 0
            return 0

    def current(self, key: str) -> int:
        with self._lock:
            return self._counts.get(key, -1)

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)
