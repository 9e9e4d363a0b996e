"""Tests for the time-stepped line animator."""

from __future__ import annotations

from collections.abc import Callable

import pytest
from conftest import ManualScheduler

from pyreveal.animation import LineAnimator
from pyreveal.geo import haversine_km
from pyreveal.models.coordinate import Coordinate

START = Coordinate(latitude=28.0, longitude=77.0)
END = Coordinate(latitude=28.7041, longitude=77.1025)


def _recorder() -> tuple[list[Coordinate], list[int], Callable[[Coordinate], None], Callable[[], None]]:
    steps: list[Coordinate] = []
    completions: list[int] = []

    def on_step(point: Coordinate) -> None:
        steps.append(point)

    def on_complete() -> None:
        completions.append(len(steps))

    return steps, completions, on_step, on_complete


def test_delivers_thirty_steps_ending_exactly_at_end(scheduler: ManualScheduler) -> None:
    animator = LineAnimator(scheduler, steps=30, interval=0.02)
    steps, completions, on_step, on_complete = _recorder()

    animator.start(START, END, on_step, on_complete)
    scheduler.run_all()

    assert len(steps) == 30
    assert steps[-1] == END
    assert steps[-1].as_pair() == (28.7041, 77.1025)
    # Completion fired once, after the 30th delivery.
    assert completions == [30]
    assert not animator.is_running


def test_steps_monotonically_approach_end(scheduler: ManualScheduler) -> None:
    animator = LineAnimator(scheduler)
    steps, _completions, on_step, on_complete = _recorder()

    animator.start(START, END, on_step, on_complete)
    scheduler.run_all()

    remaining = [haversine_km(point, END) for point in steps]
    assert all(later < earlier for earlier, later in zip(remaining, remaining[1:]))
    assert remaining[-1] == 0.0
    assert steps[0].latitude == pytest.approx(28.0 + 0.7041 / 30)


def test_one_step_per_interval(scheduler: ManualScheduler) -> None:
    animator = LineAnimator(scheduler, steps=30, interval=0.02)
    steps, completions, on_step, on_complete = _recorder()

    animator.start(START, END, on_step, on_complete)
    assert steps == []

    scheduler.advance(0.02)
    assert len(steps) == 1
    scheduler.advance(0.1)
    assert len(steps) == 6
    assert completions == []

    scheduler.advance(0.48)
    assert len(steps) == 30
    assert completions == [30]


def test_restart_ignores_stale_run(scheduler: ManualScheduler) -> None:
    animator = LineAnimator(scheduler, steps=5, interval=0.02)
    stale_steps, stale_done, stale_step, stale_complete = _recorder()
    fresh_steps, fresh_done, fresh_step, fresh_complete = _recorder()

    first = animator.start(START, END, stale_step, stale_complete)
    scheduler.advance(0.04)
    assert len(stale_steps) == 2

    other_end = Coordinate(latitude=10.0, longitude=10.0)
    second = animator.start(END, other_end, fresh_step, fresh_complete)
    assert second != first
    scheduler.run_all()

    assert len(stale_steps) == 2
    assert stale_done == []
    assert len(fresh_steps) == 5
    assert fresh_steps[-1] == other_end
    assert fresh_done == [5]


def test_cancel_stops_run(scheduler: ManualScheduler) -> None:
    animator = LineAnimator(scheduler, steps=5)
    steps, completions, on_step, on_complete = _recorder()

    animator.start(START, END, on_step, on_complete)
    scheduler.advance(0.02)
    animator.cancel()
    scheduler.run_all()

    assert len(steps) == 1
    assert completions == []
    assert scheduler.pending == 0


def test_cancel_from_step_callback(scheduler: ManualScheduler) -> None:
    animator = LineAnimator(scheduler, steps=5)
    steps: list[Coordinate] = []

    def on_step(point: Coordinate) -> None:
        steps.append(point)
        animator.cancel()

    animator.start(START, END, on_step, lambda: pytest.fail("completed after cancel"))
    scheduler.run_all()

    assert len(steps) == 1


def test_single_step_delivers_end(scheduler: ManualScheduler) -> None:
    animator = LineAnimator(scheduler, steps=1)
    steps, completions, on_step, on_complete = _recorder()

    animator.start(START, END, on_step, on_complete)
    scheduler.run_all()

    assert steps == [END]
    assert completions == [1]


@pytest.mark.parametrize(("steps", "interval"), [(0, 0.02), (-3, 0.02), (30, -0.1)])
def test_invalid_parameters(scheduler: ManualScheduler, steps: int, interval: float) -> None:
    with pytest.raises(ValueError):
        LineAnimator(scheduler, steps=steps, interval=interval)
