"""Session configuration for pyreveal."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Any

from pyreveal._constants import (
    DISTANCE_DELAY_S,
    FIT_DURATION_S,
    FIT_PADDING_PX,
    GEOLOCATION_URL,
    LINE_INTERVAL_S,
    LINE_STEPS,
)
from pyreveal.exceptions import RevealConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, raw: str, kind: type[int] | type[float]) -> int | float:
    try:
        return kind(raw)
    except ValueError as exc:
        raise RevealConfigError(f"{env_key} must be a {kind.__name__}, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class RevealConfig:
    """Reveal session configuration.

    The owner coordinate is deliberately absent: it is a process-wide
    constant (:data:`pyreveal._constants.OWNER_COORDINATE`).

    Parameters
    ----------
    geolocation_url : str
        IP geolocation endpoint returning ``latitude``/``longitude`` JSON.
    http_timeout : float
        Total HTTP timeout in seconds for the geolocation lookup.
    fit_padding_px : int
        Padding applied around both points when fitting the camera.
    fit_duration : float
        Camera transition duration in seconds.
    line_steps : int
        Number of interpolation steps used to draw the connecting line.
    line_interval : float
        Seconds between two line steps.
    distance_delay : float
        Grace delay in seconds between the owner marker and the distance box.
    owner_place : str
        Human readable owner location used in the distance readout.
    owner_label : str
        Popup text of the owner marker.
    animate : bool
        When ``False`` the camera jumps (zero duration) instead of flying.
    """

    geolocation_url: str = GEOLOCATION_URL
    http_timeout: float = 15.0
    fit_padding_px: int = FIT_PADDING_PX
    fit_duration: float = FIT_DURATION_S
    line_steps: int = LINE_STEPS
    line_interval: float = LINE_INTERVAL_S
    distance_delay: float = DISTANCE_DELAY_S
    owner_place: str = "Delhi, India"
    owner_label: str = "I AM HERE"
    animate: bool = True

    def __post_init__(self) -> None:
        if not self.geolocation_url.strip():
            raise RevealConfigError("geolocation_url must be non-empty")
        for name in ("http_timeout", "fit_duration", "line_interval", "distance_delay"):
            if not math.isfinite(getattr(self, name)):
                raise RevealConfigError(f"{name} must be finite, got {getattr(self, name)}")
        if self.http_timeout <= 0:
            raise RevealConfigError(f"http_timeout must be positive, got {self.http_timeout}")
        if self.fit_padding_px < 0:
            raise RevealConfigError(f"fit_padding_px must be >= 0, got {self.fit_padding_px}")
        if self.line_steps < 1:
            raise RevealConfigError(f"line_steps must be >= 1, got {self.line_steps}")
        for name in ("fit_duration", "line_interval", "distance_delay"):
            if getattr(self, name) < 0:
                raise RevealConfigError(f"{name} must be >= 0, got {getattr(self, name)}")

    @property
    def effective_fit_duration(self) -> float:
        """Camera duration honouring the ``animate`` switch."""
        return self.fit_duration if self.animate else 0.0

    @classmethod
    def from_env(cls, **overrides: Any) -> RevealConfig:
        """Create configuration from ``REVEAL_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "REVEAL_GEOLOCATION_URL": "geolocation_url",
            "REVEAL_OWNER_PLACE": "owner_place",
            "REVEAL_OWNER_LABEL": "owner_label",
        }
        _ENV_NUMBER_MAP: dict[str, tuple[str, type[int] | type[float]]] = {
            "REVEAL_HTTP_TIMEOUT": ("http_timeout", float),
            "REVEAL_FIT_PADDING_PX": ("fit_padding_px", int),
            "REVEAL_FIT_DURATION": ("fit_duration", float),
            "REVEAL_LINE_STEPS": ("line_steps", int),
            "REVEAL_LINE_INTERVAL": ("line_interval", float),
            "REVEAL_DISTANCE_DELAY": ("distance_delay", float),
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = val

        for env_key, (field_name, kind) in _ENV_NUMBER_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, kind)

        if "animate" not in overrides:
            config_kwargs["animate"] = _env_bool(env.get("REVEAL_ANIMATE"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
