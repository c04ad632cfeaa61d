"""Cumulative activity time accounting.

:class:`ActivityTimer` keeps the ever-increasing millisecond total that a
:class:`~runtime_ratio.ratio.RatioTracker` expects as its numerator. Wrap the
tracked work in :meth:`ActivityTimer.track` and hand the timer itself to
``calculate_consumed_ratio``.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Callable, Iterator


class ActivityTimer:
    """Accumulates time spent inside an activity, in milliseconds.

    Nested or concurrent ``start``/``stop`` pairs are folded into one window
    so overlapping sections are only counted once. Windows are opened and
    closed under a lock, so one timer can be shared by concurrent handlers.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._completed_ms = 0.0
        self._active_since: float | None = None
        self._depth = 0
        self._lock = threading.Lock()

    def start(self) -> None:
        with self._lock:
            if self._depth == 0:
                self._active_since = self._clock()
            self._depth += 1

    def stop(self) -> None:
        with self._lock:
            if self._depth == 0:
                return
            self._depth -= 1
            if self._depth == 0 and self._active_since is not None:
                self._completed_ms += max(self._clock() - self._active_since, 0.0) * 1000.0
                self._active_since = None

    @contextmanager
    def track(self) -> Iterator[None]:
        self.start()
        try:
            yield
        finally:
            self.stop()

    @property
    def active(self) -> bool:
        return self._depth > 0

    @property
    def total_ms(self) -> float:
        with self._lock:
            total = self._completed_ms
            if self._active_since is not None:
                total += max(self._clock() - self._active_since, 0.0) * 1000.0
        return total

    def cumulative_value(self) -> float:
        return self.total_ms


__all__ = ["ActivityTimer"]
