"""IP geolocation response model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from pyreveal._normalize import safe_number, safe_str
from pyreveal.models.coordinate import Coordinate


class GeolocationResponse(BaseModel):
    """Body returned by an IP geolocation service.

    Numeric fields are ``None`` when the value is absent or is not a JSON
    number. The lookup is only usable when :attr:`coordinate` is not ``None``.

    Parameters
    ----------
    latitude : float or None
        Latitude in degrees.
    longitude : float or None
        Longitude in degrees.
    ip : str or None
        Public IP address the lookup was made for.
    city : str or None
        City name, if reported.
    country_name : str or None
        Country name, if reported.
    error : bool
        ``True`` when the service reported an error (e.g. rate limiting).
    reason : str or None
        Error reason reported by the service.
    raw : dict
        Full response body.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    latitude: float | None = Field(default=None, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float | None = Field(default=None, validation_alias=AliasChoices("longitude", "lng", "lon"))
    ip: str | None = Field(default=None, validation_alias=AliasChoices("ip", "query"))
    city: str | None = None
    country_name: str | None = Field(default=None, validation_alias=AliasChoices("country_name", "country"))
    error: bool = False
    reason: str | None = Field(default=None, validation_alias=AliasChoices("reason", "message"))
    raw: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged["raw"] = values
        return merged

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_numbers(cls, value: Any) -> float | None:
        return safe_number(value)

    @field_validator("ip", "city", "country_name", "reason", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str | None:
        return safe_str(value)

    @field_validator("error", mode="before")
    @classmethod
    def _coerce_error(cls, value: Any) -> bool:
        return value is True

    @property
    def coordinate(self) -> Coordinate | None:
        """The visitor coordinate, or ``None`` when the body is unusable."""
        if self.error or self.latitude is None or self.longitude is None:
            return None
        try:
            return Coordinate(latitude=self.latitude, longitude=self.longitude)
        except ValidationError:
            return None
