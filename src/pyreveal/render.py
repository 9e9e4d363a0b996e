"""Mirror reveal state onto viewport layers."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pyreveal._constants import LAYER_DISTANCE, LAYER_LINE, LAYER_LOADING, LAYER_OWNER, LAYER_VISITOR
from pyreveal.models.state import RevealState
from pyreveal.viewport import LineStyle, MapViewport, MarkerIcon, MarkerLayer, OverlayLayer, PolylineLayer

_logger = logging.getLogger(__name__)

VISITOR_ICON = MarkerIcon(url="/marker.webp", size=(52, 52), anchor=(18, 36))
OWNER_ICON = MarkerIcon(url="/Subject.png", size=(36, 52), anchor=(18, 36))
CONNECTING_LINE = LineStyle(color="red", dash_array="8 8")

LOADING_TEXT = "Loading..."
VISITOR_POPUP = "YOU ARE HERE"


class RevealRenderer:
    """Keeps the viewport layers in sync with the latest :class:`RevealState`.

    ``distance_text`` is asked for the readout whenever the distance box
    becomes visible.
    """

    def __init__(
        self,
        viewport: MapViewport,
        *,
        owner_label: str,
        distance_text: Callable[[], str | None],
    ) -> None:
        self._viewport = viewport
        self._owner_label = owner_label
        self._distance_text = distance_text
        self.renders = 0

    def __call__(self, state: RevealState) -> None:
        self.render(state)

    def render(self, state: RevealState) -> None:
        self.renders += 1
        viewport = self._viewport

        if state.visitor is None:
            for name in (LAYER_VISITOR, LAYER_LINE, LAYER_OWNER, LAYER_DISTANCE):
                viewport.remove_layer(name)
            viewport.show_overlay(LAYER_LOADING, OverlayLayer(text=LOADING_TEXT))
            return

        viewport.remove_layer(LAYER_LOADING)
        viewport.show_marker(LAYER_VISITOR, MarkerLayer(position=state.visitor, icon=VISITOR_ICON, popup=VISITOR_POPUP))

        if state.line_visible:
            assert state.line_endpoint is not None  # noqa: S101
            viewport.show_polyline(
                LAYER_LINE,
                PolylineLayer(points=(state.visitor, state.line_endpoint), style=CONNECTING_LINE),
            )
        else:
            viewport.remove_layer(LAYER_LINE)

        if state.owner_marker_visible:
            owner = MarkerLayer(position=state.owner, icon=OWNER_ICON, popup=self._owner_label)
            viewport.show_marker(LAYER_OWNER, owner)
        else:
            viewport.remove_layer(LAYER_OWNER)

        text = self._distance_text() if state.distance_visible else None
        if text is not None:
            viewport.show_overlay(LAYER_DISTANCE, OverlayLayer(text=text))
            _logger.debug("Distance box shown: %s", text)
        else:
            viewport.remove_layer(LAYER_DISTANCE)
