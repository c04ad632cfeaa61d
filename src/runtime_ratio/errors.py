"""Exceptions raised by the ratio package.

None of these are raised while sampling a ratio. A decreasing activity value
is absorbed by the tracker and reported as ``0.0``; the classes below cover
mistakes made while wiring trackers up.
"""

from __future__ import annotations


class RatioError(Exception):
    """Base class for configuration and programming errors."""


class UnknownReferenceError(RatioError, ValueError):
    """Raised when a reference-time strategy name is not recognised."""

    def __init__(self, name: str, known: tuple[str, ...]) -> None:
        super().__init__(f"Unknown reference time strategy {name!r}; expected one of {', '.join(known)}")
        self.name = name
        self.known = known


class UnsupportedActivityValueError(RatioError, TypeError):
    """Raised when an object exposes no cumulative value to read."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Cannot read a cumulative activity value from {type(value).__name__}; "
            "pass a number, a prometheus Counter/Histogram or an object with cumulative_value()"
        )
        self.value = value


__all__ = ["RatioError", "UnknownReferenceError", "UnsupportedActivityValueError"]
