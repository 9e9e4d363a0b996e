"""pyreveal - Async visitor-to-owner map reveal sequencing."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyreveal")
except PackageNotFoundError:
    __version__ = "0+local"
from pyreveal.animation import LineAnimator
from pyreveal.camera import CameraController
from pyreveal.config import RevealConfig
from pyreveal.exceptions import (
    RevealConfigError,
    RevealError,
    RevealStateError,
    RevealTransportError,
)
from pyreveal.geo import haversine_km
from pyreveal.geolocation import GeolocationSource, IpGeolocationClient, StaticGeolocationSource
from pyreveal.models import (
    Coordinate,
    GeolocationResponse,
    RevealStage,
    RevealState,
)
from pyreveal.sequencer import RevealEvent, RevealSequencer
from pyreveal.session import RevealSession
from pyreveal.viewport import Bounds, HeadlessViewport, MapViewport

__all__ = [
    "__version__",
    "Bounds",
    "CameraController",
    "Coordinate",
    "GeolocationResponse",
    "GeolocationSource",
    "HeadlessViewport",
    "IpGeolocationClient",
    "LineAnimator",
    "MapViewport",
    "RevealConfig",
    "RevealConfigError",
    "RevealError",
    "RevealEvent",
    "RevealSequencer",
    "RevealSession",
    "RevealStage",
    "RevealState",
    "RevealStateError",
    "RevealTransportError",
    "StaticGeolocationSource",
    "haversine_km",
]
