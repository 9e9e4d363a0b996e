"""Reveal orchestration state machine.

Stages advance strictly in this order::

    idle -> awaiting_camera -> animating_line -> marker_revealed -> distance_revealed

Every input is an event passed to :meth:`RevealSequencer.dispatch` together
with the generation it was issued for. Resolving a visitor coordinate
starts a new generation from any stage; events that belong to an older
generation, or that are not legal in the current stage, are dropped
without touching the state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum

from pyreveal._constants import DISTANCE_DELAY_S, OWNER_COORDINATE
from pyreveal.animation import LineAnimator
from pyreveal.camera import CameraController
from pyreveal.events import Scheduler, TimerHandle
from pyreveal.exceptions import RevealStateError
from pyreveal.geo import format_distance_km, haversine_km
from pyreveal.models.coordinate import Coordinate
from pyreveal.models.state import RevealStage, RevealState

_logger = logging.getLogger(__name__)

StateListener = Callable[[RevealState], None]


class RevealEvent(StrEnum):
    COORDINATE_RESOLVED = "coordinate_resolved"
    CAMERA_FIT_COMPLETE = "camera_fit_complete"
    LINE_STEP = "line_step"
    LINE_COMPLETE = "line_complete"
    GRACE_ELAPSED = "grace_elapsed"


# COORDINATE_RESOLVED is accepted from every stage and handled separately.
_TRANSITIONS: dict[tuple[RevealStage, RevealEvent], RevealStage] = {
    (RevealStage.AWAITING_CAMERA, RevealEvent.CAMERA_FIT_COMPLETE): RevealStage.ANIMATING_LINE,
    (RevealStage.ANIMATING_LINE, RevealEvent.LINE_STEP): RevealStage.ANIMATING_LINE,
    (RevealStage.ANIMATING_LINE, RevealEvent.LINE_COMPLETE): RevealStage.MARKER_REVEALED,
    (RevealStage.MARKER_REVEALED, RevealEvent.GRACE_ELAPSED): RevealStage.DISTANCE_REVEALED,
}


class RevealSequencer:
    """Drives camera fit, line draw, marker reveal and distance reveal.

    The sequencer is the only writer of its :class:`RevealState`. The
    camera, the animator and the grace timer report back through
    callbacks bound to the generation that started them.
    """

    def __init__(
        self,
        camera: CameraController,
        animator: LineAnimator,
        scheduler: Scheduler,
        *,
        grace_delay: float = DISTANCE_DELAY_S,
        distance_template: str = "roughly {distance} km away from your current location",
    ) -> None:
        self._camera = camera
        self._animator = animator
        self._scheduler = scheduler
        self.owner = Coordinate.from_pair(OWNER_COORDINATE)
        self.grace_delay = grace_delay
        self._distance_template = distance_template
        self._state = RevealState.initial(self.owner)
        self._grace_handle: TimerHandle | None = None
        self._listeners: list[StateListener] = []
        self._closed = False

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def state(self) -> RevealState:
        return self._state

    @property
    def stage(self) -> RevealStage:
        return self._state.stage

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call *listener* with every new state; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            self._listeners = [cand for cand in self._listeners if cand is not listener]

        return _unsubscribe

    def distance_km(self) -> float | None:
        visitor = self._state.visitor
        if visitor is None:
            return None
        return haversine_km(self.owner, visitor)

    def distance_text(self) -> str | None:
        """Readout shown once the distance stage is reached."""
        if not self._state.distance_visible:
            return None
        km = self.distance_km()
        assert km is not None  # noqa: S101
        return self._distance_template.format(distance=format_distance_km(km))

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def resolve(self, coordinate: Coordinate) -> int:
        """Start (or restart) the reveal for *coordinate*; returns the new generation."""
        if self._closed:
            raise RevealStateError("Sequencer is closed; start a new session")
        generation = self._state.generation + 1
        self.dispatch(RevealEvent.COORDINATE_RESOLVED, generation=generation, coordinate=coordinate)
        return generation

    def dispatch(
        self,
        event: RevealEvent,
        *,
        generation: int,
        coordinate: Coordinate | None = None,
    ) -> bool:
        """Apply *event*; return ``False`` when it was discarded."""
        if self._closed:
            _logger.debug("Dropping %s: sequencer closed", event)
            return False

        current = self._state
        if event is RevealEvent.COORDINATE_RESOLVED:
            if coordinate is None or generation <= current.generation:
                _logger.debug("Dropping %s for generation %d (current %d)", event, generation, current.generation)
                return False
            self._restart(generation, coordinate)
            return True

        if generation != current.generation:
            _logger.debug("Dropping stale %s from generation %d (current %d)", event, generation, current.generation)
            return False

        target = _TRANSITIONS.get((current.stage, event))
        if target is None:
            _logger.debug("Dropping %s: not valid in stage %s", event, current.stage)
            return False

        if event is RevealEvent.LINE_STEP:
            if coordinate is None:
                return False
            self._set_state(current.advance(target, line_endpoint=coordinate))
            return True

        self._set_state(current.advance(target))
        if self._is_current(generation):
            self._enter(target, generation)
        return True

    def close(self) -> None:
        """End the session: cancel all pending work and ignore later events."""
        if self._closed:
            return
        self._cancel_pending()
        self._closed = True
        self._listeners.clear()
        _logger.debug("Sequencer closed at stage %s (generation %d)", self._state.stage, self._state.generation)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _restart(self, generation: int, coordinate: Coordinate) -> None:
        self._cancel_pending()
        # Pass through a clean idle snapshot so nothing from the previous run survives.
        self._set_state(RevealState.initial(self.owner, generation=generation))
        if not self._is_current(generation):
            return
        _logger.debug("Generation %d: visitor at %s", generation, coordinate)
        self._set_state(self._state.advance(RevealStage.AWAITING_CAMERA, visitor=coordinate))
        if not self._is_current(generation):
            return
        self._enter(RevealStage.AWAITING_CAMERA, generation)

    def _is_current(self, generation: int) -> bool:
        # A listener may have resolved again or closed the sequencer during notification.
        return not self._closed and self._state.generation == generation

    def _enter(self, stage: RevealStage, generation: int) -> None:
        _logger.debug("Generation %d entered %s", generation, stage)
        state = self._state
        if stage is RevealStage.AWAITING_CAMERA:
            assert state.visitor is not None  # noqa: S101
            self._camera.fit_bounds(
                state.visitor,
                self.owner,
                lambda: self.dispatch(RevealEvent.CAMERA_FIT_COMPLETE, generation=generation),
            )
        elif stage is RevealStage.ANIMATING_LINE:
            assert state.visitor is not None  # noqa: S101
            self._animator.start(
                state.visitor,
                self.owner,
                lambda point: self.dispatch(RevealEvent.LINE_STEP, generation=generation, coordinate=point),
                lambda: self.dispatch(RevealEvent.LINE_COMPLETE, generation=generation),
            )
        elif stage is RevealStage.MARKER_REVEALED:
            self._grace_handle = self._scheduler.call_later(self.grace_delay, self._grace_elapsed, generation)

    def _grace_elapsed(self, generation: int) -> None:
        self._grace_handle = None
        self.dispatch(RevealEvent.GRACE_ELAPSED, generation=generation)

    def _cancel_pending(self) -> None:
        self._camera.cancel()
        self._animator.cancel()
        handle = self._grace_handle
        self._grace_handle = None
        if handle is not None:
            handle.cancel()

    def _set_state(self, state: RevealState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
