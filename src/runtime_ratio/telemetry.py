"""OpenTelemetry helpers for feeding trackers into gauges."""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Union

from opentelemetry.metrics import CallbackOptions, Counter, Observation
from prometheus_client import Counter as PromCounter, Histogram as PromHistogram

from runtime_ratio.adapters import ActivityValue, SupportsCumulativeValue
from runtime_ratio.ratio import AnomalyEvent, AnomalyHook, RatioTracker

Attributes = Mapping[str, Union[str, bool, int, float]]


def ratio_callback(
    tracker: RatioTracker,
    value: Union[Callable[[], float], ActivityValue],
    attributes: Attributes | None = None,
) -> Callable[[CallbackOptions], Iterable[Observation]]:
    """Observable-gauge callback reporting ``tracker``'s ratio on each collection.

    ``value`` is either a zero-argument callable returning the cumulative
    activity milliseconds, or anything ``calculate_consumed_ratio`` accepts.
    Metric and ``cumulative_value()`` objects are read, never called.

    Example::

        gc_ratio = RatioTracker.total_process_cpu_time()
        meter.create_observable_gauge(
            "process_gc_cpu_ratio",
            callbacks=[ratio_callback(gc_ratio, gc_pause_ms)],
            unit="1",
        )
    """

    attrs = dict(attributes or {})

    def _callback(options: CallbackOptions) -> Iterable[Observation]:
        total = _read(value)
        yield Observation(tracker.calculate_consumed_ratio(total), attrs)

    return _callback


def _read(value: Union[Callable[[], float], ActivityValue]) -> ActivityValue:
    if isinstance(value, (PromCounter, PromHistogram, SupportsCumulativeValue)):
        return value
    if callable(value):
        return value()
    return value


def count_anomalies(counter: Counter, attributes: Attributes | None = None) -> AnomalyHook:
    """Anomaly hook incrementing ``counter`` once per discarded sample."""

    attrs = dict(attributes or {})

    def _hook(event: AnomalyEvent) -> None:
        counter.add(1, attrs)

    return _hook


__all__ = ["count_anomalies", "ratio_callback"]
