"""Camera fit-bounds controller."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pyreveal._constants import FIT_DURATION_S, FIT_PADDING_PX
from pyreveal.events import Subscription
from pyreveal.models.coordinate import Coordinate
from pyreveal.viewport import Bounds, MapViewport

_logger = logging.getLogger(__name__)


class CameraController:
    """Frames two points on a :class:`~pyreveal.viewport.MapViewport`.

    Each :meth:`fit_bounds` request gets its own one-shot move-end
    subscription. A newer request detaches the older listener first, so a
    superseded flight can never report completion.
    """

    def __init__(
        self,
        viewport: MapViewport,
        *,
        padding_px: int = FIT_PADDING_PX,
        duration: float = FIT_DURATION_S,
    ) -> None:
        self._viewport = viewport
        self.padding_px = padding_px
        self.duration = duration
        self._subscription: Subscription | None = None
        self._requests = 0

    @property
    def pending(self) -> bool:
        return self._subscription is not None

    def fit_bounds(self, visitor: Coordinate, owner: Coordinate, on_complete: Callable[[], None]) -> int:
        """Fly to frame *visitor* and *owner*; call *on_complete* once on arrival.

        Returns the request number.
        """
        self.cancel()
        self._requests += 1
        request = self._requests

        # The viewport may emit move-end for the flight it stops here; the
        # listener for this request is attached afterwards so it never sees it.
        self._viewport.fly_to_bounds(
            Bounds.from_corners(visitor, owner),
            padding_px=self.padding_px,
            duration=self.duration,
        )

        def _on_move_end() -> None:
            if self._subscription is not subscription:
                return
            self._subscription = None
            _logger.debug("Camera request %d complete", request)
            on_complete()

        subscription = self._viewport.once_move_end(_on_move_end)
        self._subscription = subscription
        _logger.debug(
            "Camera request %d started (padding=%dpx, duration=%.2fs)", request, self.padding_px, self.duration
        )
        return request

    def cancel(self) -> None:
        """Detach the pending completion listener, if any."""
        subscription = self._subscription
        self._subscription = None
        if subscription is not None:
            subscription.cancel()
            _logger.debug("Camera request %d detached", self._requests)
