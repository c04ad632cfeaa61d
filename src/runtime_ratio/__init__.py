"""Bounded ratios of process time consumed by a tracked activity."""

from runtime_ratio.activity import ActivityTimer
from runtime_ratio.adapters import SupportsCumulativeValue, cumulative_value
from runtime_ratio.config import RatioSettings, configure_logging
from runtime_ratio.errors import RatioError, UnknownReferenceError, UnsupportedActivityValueError
from runtime_ratio.ratio import AnomalyEvent, RatioTracker, create_tracker
from runtime_ratio.sources import process_wall_clock_time, total_process_cpu_time

__all__ = [
    "ActivityTimer",
    "AnomalyEvent",
    "RatioError",
    "RatioSettings",
    "RatioTracker",
    "SupportsCumulativeValue",
    "UnknownReferenceError",
    "UnsupportedActivityValueError",
    "configure_logging",
    "create_tracker",
    "cumulative_value",
    "process_wall_clock_time",
    "total_process_cpu_time",
]
