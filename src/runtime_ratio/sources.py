"""Reference-time sources.

A reference-time source is a zero-argument callable returning the elapsed
reference time in seconds since an epoch of its own choosing. Successive
calls never go backwards. The tracker only ever looks at differences between
two samples, so the epoch itself is irrelevant.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

import psutil

logger = logging.getLogger(__name__)

ReferenceTimeSource = Callable[[], float]


def total_process_cpu_time(process: psutil.Process | None = None) -> ReferenceTimeSource:
    """CPU time consumed by this process across all of its threads.

    The process handle is resolved once, here, and re-read on every sample.
    Time spent in child processes is not included.
    """

    proc = process or psutil.Process()
    logger.debug("reference.source.created", extra={"strategy": "cpu", "pid": proc.pid})

    def _sample() -> float:
        times = proc.cpu_times()
        return times.user + times.system

    return _sample


def process_wall_clock_time(clock: Callable[[], float] = time.monotonic) -> ReferenceTimeSource:
    """Wall-clock time elapsed since this source was created."""

    started_at = clock()
    logger.debug("reference.source.created", extra={"strategy": "wall"})

    def _sample() -> float:
        return clock() - started_at

    return _sample


__all__ = ["ReferenceTimeSource", "process_wall_clock_time", "total_process_cpu_time"]
