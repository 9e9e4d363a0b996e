"""Time-stepped line animation."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pyreveal._constants import LINE_INTERVAL_S, LINE_STEPS
from pyreveal.events import Scheduler, TimerHandle
from pyreveal.geo import lerp_coordinate
from pyreveal.models.coordinate import Coordinate

_logger = logging.getLogger(__name__)


class LineAnimator:
    """Moves a line endpoint from *start* to *end* in fixed steps.

    Step ``k`` (``1..steps``) delivers ``lerp(start, end, k / steps)`` one
    ``interval`` after the previous one; the last delivery is *end* itself.
    Only one run advances at a time: :meth:`start` supersedes the previous
    run and its pending tick is cancelled.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        steps: int = LINE_STEPS,
        interval: float = LINE_INTERVAL_S,
    ) -> None:
        if steps < 1:
            raise ValueError(f"steps must be >= 1, got {steps}")
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self._scheduler = scheduler
        self.steps = steps
        self.interval = interval
        self._run_id = 0
        self._handle: TimerHandle | None = None

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def start(
        self,
        start: Coordinate,
        end: Coordinate,
        on_step: Callable[[Coordinate], None],
        on_complete: Callable[[], None],
    ) -> int:
        """Begin a new run and return its id."""
        self.cancel()
        run_id = self._run_id
        _logger.debug("Line run %d: %s -> %s in %d steps", run_id, start, end, self.steps)
        self._schedule(run_id, 1, start, end, on_step, on_complete)
        return run_id

    def cancel(self) -> None:
        """Stop the current run; its pending and in-flight ticks become no-ops."""
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.cancel()
            _logger.debug("Line run %d cancelled", self._run_id)
        self._run_id += 1

    def _schedule(
        self,
        run_id: int,
        progress: int,
        start: Coordinate,
        end: Coordinate,
        on_step: Callable[[Coordinate], None],
        on_complete: Callable[[], None],
    ) -> None:
        self._handle = self._scheduler.call_later(
            self.interval,
            self._step,
            run_id,
            progress,
            start,
            end,
            on_step,
            on_complete,
        )

    def _step(
        self,
        run_id: int,
        progress: int,
        start: Coordinate,
        end: Coordinate,
        on_step: Callable[[Coordinate], None],
        on_complete: Callable[[], None],
    ) -> None:
        if run_id != self._run_id:
            # Superseded run whose tick escaped cancellation.
            return
        self._handle = None

        if progress < self.steps:
            on_step(lerp_coordinate(start, end, progress / self.steps))
            # The step callback may have started or cancelled a run.
            if run_id == self._run_id and self._handle is None:
                self._schedule(run_id, progress + 1, start, end, on_step, on_complete)
            return

        on_step(end)
        if run_id == self._run_id:
            on_complete()
