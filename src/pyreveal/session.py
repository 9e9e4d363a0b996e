"""One reveal session per map view."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pyreveal.animation import LineAnimator
from pyreveal.camera import CameraController
from pyreveal.config import RevealConfig
from pyreveal.events import Scheduler
from pyreveal.geolocation import GeolocationSource
from pyreveal.models.coordinate import Coordinate
from pyreveal.models.state import RevealStage, RevealState
from pyreveal.render import RevealRenderer
from pyreveal.sequencer import RevealSequencer
from pyreveal.viewport import HeadlessViewport, MapViewport

_logger = logging.getLogger(__name__)


def _distance_template(owner_place: str) -> str:
    place = owner_place.replace("{", "{{").replace("}", "}}")
    return f"I am from {place}, roughly {{distance}} km away from your current location."


class RevealSession:
    """Wires a geolocation source to the reveal sequence on one viewport.

    Usage::

        async with RevealSession(config, source=client) as session:
            await session.run()
            await session.wait_for_stage(RevealStage.DISTANCE_REVEALED, timeout=10)

    Must be created while an event loop is running unless an explicit
    *scheduler* is given.
    """

    def __init__(
        self,
        config: RevealConfig,
        *,
        source: GeolocationSource,
        viewport: MapViewport | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._config = config
        self._source = source
        self._scheduler: Scheduler = scheduler if scheduler is not None else asyncio.get_running_loop()
        self.viewport: MapViewport = viewport if viewport is not None else HeadlessViewport(self._scheduler)
        self.camera = CameraController(
            self.viewport,
            padding_px=config.fit_padding_px,
            duration=config.effective_fit_duration,
        )
        self.animator = LineAnimator(
            self._scheduler,
            steps=config.line_steps,
            interval=config.line_interval,
        )
        self.sequencer = RevealSequencer(
            self.camera,
            self.animator,
            self._scheduler,
            grace_delay=config.distance_delay,
            distance_template=_distance_template(config.owner_place),
        )
        self.renderer = RevealRenderer(
            self.viewport,
            owner_label=config.owner_label,
            distance_text=self.sequencer.distance_text,
        )
        self.sequencer.subscribe(self.renderer)
        # Until a coordinate resolves the view shows the loading overlay.
        self.renderer.render(self.sequencer.state)

    async def __aenter__(self) -> RevealSession:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.close()

    @property
    def state(self) -> RevealState:
        return self.sequencer.state

    def distance_text(self) -> str | None:
        return self.sequencer.distance_text()

    async def run(self) -> Coordinate | None:
        """Locate the visitor and start the reveal.

        Returns the resolved coordinate, or ``None`` when the source could
        not produce one; the session then stays idle and keeps showing
        the loading overlay.
        """
        coordinate = await self._source.resolve_visitor_location()
        if coordinate is None:
            _logger.info("Visitor location unresolved; staying idle")
            return None
        if self.sequencer.closed:
            _logger.debug("Session closed while locating the visitor")
            return None
        self.sequencer.resolve(coordinate)
        return coordinate

    async def retry(self) -> Coordinate | None:
        """Resolve the visitor again; a fresh coordinate restarts the reveal."""
        return await self.run()

    async def wait_for_stage(self, stage: RevealStage, timeout: float) -> bool:
        """Wait until the reveal has reached *stage*; ``False`` on timeout."""
        if self.state.stage.reached(stage):
            return True

        waiter = asyncio.Event()

        def _check(state: RevealState) -> None:
            if state.stage.reached(stage):
                waiter.set()

        unsubscribe = self.sequencer.subscribe(_check)
        try:
            await asyncio.wait_for(waiter.wait(), timeout)
            return True
        except TimeoutError:
            return False
        finally:
            unsubscribe()

    def close(self) -> None:
        self.sequencer.close()
