from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable
from typing import Any

import pytest


class ManualHandle:
    def __init__(self, when: float, callback: Callable[..., object], args: tuple[Any, ...]) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual clock: callbacks only run when the test advances time."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, ManualHandle]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[..., object], *args: Any) -> ManualHandle:
        handle = ManualHandle(self.now + delay, callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def advance(self, seconds: float) -> None:
        """Run every callback due within the next *seconds*, in time order."""
        deadline = self.now + seconds
        while self._queue and self._queue[0][0] <= deadline + 1e-9:
            when, _, handle = heapq.heappop(self._queue)
            self.now = max(self.now, when)
            if not handle.cancelled:
                handle.callback(*handle.args)
        self.now = deadline

    def run_all(self, limit: int = 10_000) -> None:
        for _ in range(limit):
            live = [entry for entry in self._queue if not entry[2].cancelled]
            if not live:
                return
            self.advance(max(0.0, min(entry[0] for entry in live) - self.now))
        raise AssertionError("scheduler did not settle")


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
