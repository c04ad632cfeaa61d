import threading

import pytest

from runtime_ratio.activity import ActivityTimer
from runtime_ratio.adapters import SupportsCumulativeValue
from runtime_ratio.ratio import RatioTracker


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_timer_accumulates_windows() -> None:
    clock = _Clock()
    timer = ActivityTimer(clock=clock)

    timer.start()
    clock.now = 0.25
    timer.stop()
    clock.now = 1.0
    with timer.track():
        clock.now = 1.5

    assert timer.total_ms == pytest.approx(750.0)
    assert not timer.active


def test_nested_tracking_counts_overlap_once() -> None:
    clock = _Clock()
    timer = ActivityTimer(clock=clock)

    with timer.track():
        clock.now = 0.1
        with timer.track():
            clock.now = 0.3
        assert timer.active
        clock.now = 0.4

    assert timer.total_ms == pytest.approx(400.0)


def test_open_window_is_included_and_stray_stop_ignored() -> None:
    clock = _Clock()
    timer = ActivityTimer(clock=clock)
    timer.stop()

    timer.start()
    clock.now = 0.2

    assert timer.active
    assert timer.total_ms == pytest.approx(200.0)
    assert timer.cumulative_value() == timer.total_ms


def test_timer_feeds_tracker_directly() -> None:
    clock = _Clock()
    timer = ActivityTimer(clock=clock)
    tracker = RatioTracker(clock)

    assert isinstance(timer, SupportsCumulativeValue)

    with timer.track():
        clock.now = 0.3
    clock.now = 1.0

    assert tracker.calculate_consumed_ratio(timer) == pytest.approx(0.3)
    assert tracker.last_activity_time_ms == pytest.approx(300.0)


def test_concurrent_tracking_keeps_windows_balanced() -> None:
    timer = ActivityTimer()
    barrier = threading.Barrier(8)

    def _handler() -> None:
        barrier.wait()
        for _ in range(2000):
            with timer.track():
                pass

    workers = [threading.Thread(target=_handler) for _ in range(8)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    assert not timer.active
    total = timer.total_ms
    assert total >= 0.0
    assert timer.total_ms == total
