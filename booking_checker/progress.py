"""Thread-safe progress counters shared by batch workers and pollers."""
from __future__ import annotations

import threading

from .models import ProgressSnapshot


class ProgressTracker:
    """Tracks how many bookings of the running batch have finished."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current = 0
        self._total = 0

    def reset(self, total: int) -> None:
        if total < 0:
            raise ValueError("total must not be negative")
        with self._lock:
            self._current = 0
            self._total = total

    def increment_completed(self) -> None:
        with self._lock:
            if self._current < self._total:
                self._current += 1

    def snapshot(self) -> ProgressSnapshot:
        with self._lock:
            return ProgressSnapshot(current=self._current, total=self._total)
