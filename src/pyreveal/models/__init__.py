"""Data models for pyreveal."""

from pyreveal.models.coordinate import Coordinate
from pyreveal.models.geolocation import GeolocationResponse
from pyreveal.models.state import RevealStage, RevealState

__all__ = [
    "Coordinate",
    "GeolocationResponse",
    "RevealStage",
    "RevealState",
]
