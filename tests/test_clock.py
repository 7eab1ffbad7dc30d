from __future__ import annotations

import threading
import time

from clock import IntervalClock, ManualClock


def _wait_until(predicate, timeout: float = 2.0) -> bool:  # noqa: ANN001
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


def test_manual_clock_delivers_ticks_only_while_started() -> None:
    clock = ManualClock()
    ticks: list[int] = []

    clock.advance(3)
    assert ticks == []

    clock.start(lambda: ticks.append(1))
    clock.advance(3)
    clock.stop()
    clock.advance(3)

    assert len(ticks) == 3
    assert clock.ticks == 3


def test_manual_clock_stops_mid_advance() -> None:
    clock = ManualClock()
    ticks: list[int] = []

    def on_tick() -> None:
        ticks.append(1)
        if len(ticks) == 2:
            clock.stop()

    clock.start(on_tick)
    clock.advance(10)
    assert len(ticks) == 2


def test_interval_clock_ticks_until_stopped() -> None:
    clock = IntervalClock(interval_s=0.01)
    ticks: list[int] = []

    clock.start(lambda: ticks.append(1))
    assert _wait_until(lambda: len(ticks) >= 3)
    clock.stop()
    assert clock.running is False

    time.sleep(0.05)
    settled = len(ticks)
    time.sleep(0.05)
    assert len(ticks) == settled


def test_interval_clock_can_stop_from_its_own_tick() -> None:
    clock = IntervalClock(interval_s=0.01)
    done = threading.Event()
    ticks: list[int] = []

    def on_tick() -> None:
        ticks.append(1)
        clock.stop()
        done.set()

    clock.start(on_tick)
    assert done.wait(timeout=2.0)
    time.sleep(0.05)
    assert ticks == [1]


def test_interval_clock_survives_failing_callback() -> None:
    clock = IntervalClock(interval_s=0.01)
    calls: list[int] = []

    def on_tick() -> None:
        calls.append(1)
        raise ValueError("boom")

    clock.start(on_tick)
    assert _wait_until(lambda: len(calls) >= 2)
    clock.stop()


def test_interval_clock_restart_uses_new_callback() -> None:
    clock = IntervalClock(interval_s=0.01)
    first: list[int] = []
    second: list[int] = []

    clock.start(lambda: first.append(1))
    assert _wait_until(lambda: len(first) >= 1)
    clock.stop()
    clock.start(lambda: second.append(1))
    assert _wait_until(lambda: len(second) >= 1)
    clock.stop()
