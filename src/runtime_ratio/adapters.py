"""Read a cumulative activity value out of metric-like objects."""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

from prometheus_client import Counter, Histogram

from runtime_ratio.errors import UnsupportedActivityValueError


@runtime_checkable
class SupportsCumulativeValue(Protocol):
    """Anything that can report an ever-increasing total."""

    def cumulative_value(self) -> float:
        ...


ActivityValue = Union[float, int, Counter, Histogram, SupportsCumulativeValue]


def _sum_samples(metric: Counter | Histogram, suffix: str) -> float:
    total = 0.0
    for family in metric.collect():
        for sample in family.samples:
            if sample.name.endswith(suffix):
                total += sample.value
    return total


def counter_total(counter: Counter) -> float:
    """Accumulated count of a counter, summed over every labelled child."""

    return _sum_samples(counter, "_total")


def histogram_sum(histogram: Histogram) -> float:
    """Accumulated sum of all observations, summed over every labelled child."""

    return _sum_samples(histogram, "_sum")


def cumulative_value(value: ActivityValue) -> float:
    """Extract the cumulative number that ``value`` stands for."""

    if isinstance(value, bool):
        raise UnsupportedActivityValueError(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, Counter):
        return counter_total(value)
    if isinstance(value, Histogram):
        return histogram_sum(value)
    if isinstance(value, SupportsCumulativeValue):
        return float(value.cumulative_value())
    raise UnsupportedActivityValueError(value)


__all__ = [
    "ActivityValue",
    "SupportsCumulativeValue",
    "counter_total",
    "cumulative_value",
    "histogram_sum",
]
