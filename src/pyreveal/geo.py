"""Great-circle distance and interpolation helpers."""

from __future__ import annotations

from math import asin, cos, radians, sin, sqrt

from pyreveal._constants import EARTH_RADIUS_KM
from pyreveal.models.coordinate import Coordinate


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Compute great-circle distance in kilometres between two points.

    The half-angle term is clamped into ``[0, 1]`` so rounding on
    near-antipodal pairs cannot push ``asin`` outside its domain.
    """
    lat1 = radians(a.latitude)
    lon1 = radians(a.longitude)
    lat2 = radians(b.latitude)
    lon2 = radians(b.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_KM * asin(sqrt(h))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_coordinate(start: Coordinate, end: Coordinate, t: float) -> Coordinate:
    """Interpolate component-wise between *start* and *end*.

    No antimeridian handling: the path is a straight segment in
    latitude/longitude space, which is what the map draws.
    """
    return Coordinate(
        latitude=lerp(start.latitude, end.latitude, t),
        longitude=lerp(start.longitude, end.longitude, t),
    )


def format_distance_km(km: float) -> str:
    """Format a distance with two decimals (``12.3456`` -> ``"12.35"``)."""
    return f"{km:.2f}"
