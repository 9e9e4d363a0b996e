"""Map viewport interface and a headless in-memory implementation.

The reveal core only needs a small capability set from a map: fly the
camera to a bounding box, report when the camera stops moving, and place
or remove named layers. Any mapping backend can implement
:class:`MapViewport`; :class:`HeadlessViewport` keeps everything in memory
and is what tests and the demo script drive.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from pyreveal.events import EventChannel, Scheduler, Subscription, TimerHandle
from pyreveal.models.coordinate import Coordinate

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box given by its south-west and north-east corners."""

    south_west: Coordinate
    north_east: Coordinate

    @classmethod
    def from_corners(cls, a: Coordinate, b: Coordinate) -> Bounds:
        return cls(
            south_west=Coordinate(
                latitude=min(a.latitude, b.latitude),
                longitude=min(a.longitude, b.longitude),
            ),
            north_east=Coordinate(
                latitude=max(a.latitude, b.latitude),
                longitude=max(a.longitude, b.longitude),
            ),
        )

    @property
    def center(self) -> Coordinate:
        return Coordinate(
            latitude=(self.south_west.latitude + self.north_east.latitude) / 2,
            longitude=(self.south_west.longitude + self.north_east.longitude) / 2,
        )

    def contains(self, point: Coordinate) -> bool:
        return (
            self.south_west.latitude <= point.latitude <= self.north_east.latitude
            and self.south_west.longitude <= point.longitude <= self.north_east.longitude
        )


@dataclass(frozen=True)
class MarkerIcon:
    url: str
    size: tuple[int, int]
    anchor: tuple[int, int]
    popup_anchor: tuple[int, int] = (0, -36)


@dataclass(frozen=True)
class LineStyle:
    color: str = "red"
    dash_array: str | None = "8 8"


@dataclass(frozen=True)
class MarkerLayer:
    position: Coordinate
    icon: MarkerIcon
    popup: str | None = None


@dataclass(frozen=True)
class PolylineLayer:
    points: tuple[Coordinate, ...]
    style: LineStyle = field(default_factory=LineStyle)


@dataclass(frozen=True)
class OverlayLayer:
    text: str


Layer = MarkerLayer | PolylineLayer | OverlayLayer


class MapViewport(Protocol):
    """Structural viewport interface used by the camera and the renderer."""

    def fly_to_bounds(self, bounds: Bounds, *, padding_px: int, duration: float) -> None:
        ...

    def once_move_end(self, listener: Callable[[], None]) -> Subscription:
        ...

    def show_marker(self, name: str, layer: MarkerLayer) -> None:
        ...

    def show_polyline(self, name: str, layer: PolylineLayer) -> None:
        ...

    def show_overlay(self, name: str, layer: OverlayLayer) -> None:
        ...

    def remove_layer(self, name: str) -> None:
        ...


class HeadlessViewport:
    """In-memory viewport driven by a :class:`~pyreveal.events.Scheduler`.

    A flight ends ``duration`` seconds after it starts. Starting another
    flight, or calling :meth:`interrupt`, stops the current one early;
    move-end fires in every case, whatever stopped the camera.
    """

    def __init__(self, scheduler: Scheduler, *, center: Coordinate | None = None) -> None:
        self._scheduler = scheduler
        self.center = center
        self.bounds: Bounds | None = None
        self.padding_px = 0
        self.layers: dict[str, Layer] = {}
        self.flights = 0
        self._move_end = EventChannel("moveend")
        self._flight: TimerHandle | None = None

    @property
    def is_moving(self) -> bool:
        return self._flight is not None

    def fly_to_bounds(self, bounds: Bounds, *, padding_px: int, duration: float) -> None:
        if self._flight is not None:
            self._stop()
        self.flights += 1
        self.bounds = bounds
        self.padding_px = padding_px
        _logger.debug("Flight %d to %s..%s over %.2fs", self.flights, bounds.south_west, bounds.north_east, duration)
        self._flight = self._scheduler.call_later(duration, self._finish)

    def once_move_end(self, listener: Callable[[], None]) -> Subscription:
        return self._move_end.once(listener)

    def interrupt(self) -> None:
        """Stop the running flight as if the user grabbed the map."""
        if self._flight is not None:
            self._stop()

    def show_marker(self, name: str, layer: MarkerLayer) -> None:
        self.layers[name] = layer

    def show_polyline(self, name: str, layer: PolylineLayer) -> None:
        self.layers[name] = layer

    def show_overlay(self, name: str, layer: OverlayLayer) -> None:
        self.layers[name] = layer

    def remove_layer(self, name: str) -> None:
        self.layers.pop(name, None)

    def _stop(self) -> None:
        flight = self._flight
        self._flight = None
        if flight is not None:
            flight.cancel()
        self._arrive()

    def _finish(self) -> None:
        self._flight = None
        self._arrive()

    def _arrive(self) -> None:
        if self.bounds is not None:
            self.center = self.bounds.center
        self._move_end.emit()
