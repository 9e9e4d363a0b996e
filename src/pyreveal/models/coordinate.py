"""Coordinate model."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """An immutable latitude/longitude pair in decimal degrees.

    Parameters
    ----------
    latitude : float
        Latitude in degrees, within ``[-90, 90]``.
    longitude : float
        Longitude in degrees, within ``[-180, 180]``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        allow_inf_nan=False,
    )

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    @classmethod
    def from_pair(cls, pair: Sequence[float]) -> Coordinate:
        """Build a coordinate from a ``(latitude, longitude)`` sequence."""
        if len(pair) != 2:
            raise ValueError(f"expected a (latitude, longitude) pair, got {len(pair)} values")
        return cls(latitude=pair[0], longitude=pair[1])

    def as_pair(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)

    def __str__(self) -> str:
        return f"({self.latitude:.4f}, {self.longitude:.4f})"
