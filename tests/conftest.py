import sys
from pathlib import Path
from typing import Callable, Iterator

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))


class StepClock:
    """Reference source that advances by a fixed step on every read."""

    def __init__(self, step: float, start: float = 0.0) -> None:
        self.step = step
        self.now = start
        self.reads = 0

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        self.reads += 1
        return value


def sequence_source(*values: float) -> Callable[[], float]:
    iterator: Iterator[float] = iter(values)

    def _sample() -> float:
        try:
            return next(iterator)
        except StopIteration:  # pragma: no cover - defensive guard for tests
            return values[-1]

    return _sample


@pytest.fixture
def step_clock() -> Callable[[float], StepClock]:
    return StepClock


@pytest.fixture(autouse=True)
def _clean_ratio_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("RUNTIME_RATIO_REFERENCE", "RUNTIME_RATIO_LOG_ANOMALIES", "RUNTIME_RATIO_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
