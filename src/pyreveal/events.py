"""Timer and event primitives shared by the reveal components.

Everything here is single-threaded: listeners and timers run on the
caller's event loop and never concurrently with each other.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

_logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Structural timer interface.

    A running ``asyncio`` event loop satisfies it; tests pass a manual
    clock so stage timing is deterministic.
    """

    def call_later(self, delay: float, callback: Callable[..., object], *args: Any) -> TimerHandle:
        ...


class Subscription:
    """Handle for a listener registered on an :class:`EventChannel`."""

    def __init__(self, channel: EventChannel, listener: Callable[..., None], *, once: bool) -> None:
        self._channel = channel
        self._listener = listener
        self.once = once
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Detach the listener. Calling it twice is a no-op."""
        if not self._active:
            return
        self._active = False
        self._channel._detach(self)

    def _fire(self, *args: Any) -> None:
        if not self._active:
            return
        if self.once:
            self.cancel()
        self._listener(*args)


class EventChannel:
    """A named event with cancellable subscriptions (``on``/``once``/``emit``)."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def on(self, listener: Callable[..., None]) -> Subscription:
        subscription = Subscription(self, listener, once=False)
        self._subscriptions.append(subscription)
        return subscription

    def once(self, listener: Callable[..., None]) -> Subscription:
        """Register *listener* for the next emission only."""
        subscription = Subscription(self, listener, once=True)
        self._subscriptions.append(subscription)
        return subscription

    def emit(self, *args: Any) -> int:
        """Invoke every listener attached at call time; return how many ran."""
        snapshot = list(self._subscriptions)
        fired = 0
        for subscription in snapshot:
            if subscription.active:
                subscription._fire(*args)
                fired += 1
        _logger.debug("Event %s emitted to %d listener(s)", self.name, fired)
        return fired

    def _detach(self, subscription: Subscription) -> None:
        self._subscriptions = [cand for cand in self._subscriptions if cand is not subscription]
