"""Ratio of a reference time budget consumed by a tracked activity.

A :class:`RatioTracker` answers "what fraction of the time that passed since
I last asked was spent doing X?". The denominator comes from a reference-time
source (process CPU time or wall-clock time, see :mod:`runtime_ratio.sources`)
and the numerator from a cumulative activity total maintained by the caller,
for example a histogram summing GC pause milliseconds.

Each call reports the ratio for the interval since the previous call and
advances the tracker's snapshot. Results are clamped to ``[0.0, 1.0]`` so they
can be read straight into a gauge. When activity reporting lags, a burst may
land in a single interval and the raw ratio can exceed one; the excess is
dropped rather than reported.

A cumulative activity value lower than the last one seen, or one that is not
a finite number, breaks the caller's contract. The tracker reports ``0.0``
for that sample and keeps its previous snapshot, so the next well-formed
sample is measured against the last good one. Nothing is raised, not even
when an ``on_anomaly`` hook fails: a bad sample must not take down a
collection loop.

Trackers are not thread-safe. Sample each one from a single owner, or
serialise access externally.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from runtime_ratio import sources
from runtime_ratio.adapters import ActivityValue, cumulative_value
from runtime_ratio.config import RatioSettings, get_settings
from runtime_ratio.errors import UnknownReferenceError
from runtime_ratio.sources import ReferenceTimeSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AnomalyEvent:
    """A discarded sample whose cumulative activity value went backwards or was not finite."""

    previous_activity_time_ms: float
    activity_time_total_ms: float
    anomalies: int

    @property
    def regression_ms(self) -> float:
        return self.previous_activity_time_ms - self.activity_time_total_ms


AnomalyHook = Callable[[AnomalyEvent], None]


class RatioTracker:
    """Incremental activity/reference time ratio, bounded to ``[0.0, 1.0]``."""

    def __init__(
        self,
        reference_time_source: ReferenceTimeSource,
        *,
        on_anomaly: Optional[AnomalyHook] = None,
    ) -> None:
        self._reference_time_source = reference_time_source
        self._on_anomaly = on_anomaly
        self._last_reference_time = reference_time_source()
        self._last_activity_time_ms = 0.0
        self._anomalies = 0

    @classmethod
    def total_process_cpu_time(cls, *, on_anomaly: Optional[AnomalyHook] = None) -> "RatioTracker":
        """Ratio of CPU time consumed by an activity."""

        return cls(sources.total_process_cpu_time(), on_anomaly=on_anomaly)

    @classmethod
    def process_wall_clock_time(cls, *, on_anomaly: Optional[AnomalyHook] = None) -> "RatioTracker":
        """Ratio of process lifetime consumed by an activity."""

        return cls(sources.process_wall_clock_time(), on_anomaly=on_anomaly)

    @property
    def last_reference_time(self) -> float:
        return self._last_reference_time

    @property
    def last_activity_time_ms(self) -> float:
        return self._last_activity_time_ms

    @property
    def anomalies(self) -> int:
        """Number of samples discarded because the activity total went backwards."""

        return self._anomalies

    def calculate_consumed_ratio(self, activity_time_total: ActivityValue) -> float:
        """Fraction of reference time spent in the activity since the last call.

        ``activity_time_total`` is the cumulative activity time in milliseconds,
        either as a number or as a counter/histogram-like object holding it.
        """

        activity_time_total_ms = cumulative_value(activity_time_total)

        current_reference_time = self._reference_time_source()
        consumed_reference_time = current_reference_time - self._last_reference_time
        consumed_activity_ms = activity_time_total_ms - self._last_activity_time_ms

        if not math.isfinite(activity_time_total_ms) or consumed_activity_ms < 0.0:
            self._discard(activity_time_total_ms)
            return 0.0

        self._last_reference_time = current_reference_time
        self._last_activity_time_ms = activity_time_total_ms

        if consumed_reference_time <= 0.0:
            return 0.0

        return min(1.0, consumed_activity_ms / (consumed_reference_time * 1000.0))

    def _discard(self, activity_time_total_ms: float) -> None:
        self._anomalies += 1
        if self._on_anomaly is None:
            return
        event = AnomalyEvent(
            previous_activity_time_ms=self._last_activity_time_ms,
            activity_time_total_ms=activity_time_total_ms,
            anomalies=self._anomalies,
        )
        try:
            self._on_anomaly(event)
        except Exception:
            logger.exception("ratio.anomaly_hook.failed", extra={"anomalies": self._anomalies})


_FACTORIES: dict[str, Callable[..., RatioTracker]] = {
    "cpu": RatioTracker.total_process_cpu_time,
    "wall": RatioTracker.process_wall_clock_time,
}


def log_anomaly(event: AnomalyEvent) -> None:
    logger.debug(
        "ratio.sample.discarded",
        extra={
            "previous_ms": event.previous_activity_time_ms,
            "received_ms": event.activity_time_total_ms,
            "anomalies": event.anomalies,
        },
    )


def create_tracker(
    reference: str | None = None,
    *,
    settings: RatioSettings | None = None,
    on_anomaly: Optional[AnomalyHook] = None,
) -> RatioTracker:
    """Build a tracker for the named reference strategy (``cpu`` or ``wall``).

    Without a name the configured ``RUNTIME_RATIO_REFERENCE`` is used. An
    explicit ``on_anomaly`` hook wins over ``RUNTIME_RATIO_LOG_ANOMALIES``.
    """

    cfg = settings or get_settings()
    name = (reference or cfg.reference).strip().lower()
    factory = _FACTORIES.get(name)
    if factory is None:
        raise UnknownReferenceError(name, tuple(_FACTORIES))

    hook = on_anomaly
    if hook is None and cfg.log_anomalies:
        hook = log_anomaly

    logger.debug("ratio.tracker.created", extra={"strategy": name})
    return factory(on_anomaly=hook)


__all__ = ["AnomalyEvent", "AnomalyHook", "RatioTracker", "create_tracker", "log_anomaly"]
