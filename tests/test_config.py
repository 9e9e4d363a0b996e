from __future__ import annotations

import pytest

from pyreveal.config import RevealConfig
from pyreveal.exceptions import RevealConfigError


def test_defaults_match_reveal_timing() -> None:
    config = RevealConfig()
    assert config.geolocation_url == "https://ipapi.co/json/"
    assert config.fit_padding_px == 50
    assert config.fit_duration == 2.0
    assert config.line_steps == 30
    assert config.line_interval == 0.02
    assert config.distance_delay == 0.3
    assert config.effective_fit_duration == 2.0


def test_from_env_reads_reveal_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REVEAL_GEOLOCATION_URL", "https://geo.example/json/")
    monkeypatch.setenv("REVEAL_LINE_STEPS", "12")
    monkeypatch.setenv("REVEAL_FIT_DURATION", "0.5")
    monkeypatch.setenv("REVEAL_OWNER_PLACE", "Pune, India")
    monkeypatch.setenv("REVEAL_ANIMATE", "off")

    config = RevealConfig.from_env()

    assert config.geolocation_url == "https://geo.example/json/"
    assert config.line_steps == 12
    assert config.fit_duration == 0.5
    assert config.owner_place == "Pune, India"
    assert config.animate is False
    assert config.effective_fit_duration == 0.0


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REVEAL_LINE_STEPS", "12")
    monkeypatch.setenv("REVEAL_ANIMATE", "0")

    config = RevealConfig.from_env(line_steps=3, animate=True)

    assert config.line_steps == 3
    assert config.animate is True


def test_unknown_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REVEAL_ANIMATE", "maybe")
    assert RevealConfig.from_env().animate is True


def test_non_numeric_env_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REVEAL_LINE_INTERVAL", "fast")
    with pytest.raises(RevealConfigError, match="REVEAL_LINE_INTERVAL"):
        RevealConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"line_steps": 0},
        {"line_interval": -1.0},
        {"distance_delay": -0.3},
        {"fit_duration": -2.0},
        {"fit_padding_px": -1},
        {"http_timeout": 0},
        {"geolocation_url": "  "},
        {"line_interval": float("nan")},
        {"distance_delay": float("inf")},
        {"fit_duration": float("nan")},
        {"http_timeout": float("inf")},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(RevealConfigError):
        RevealConfig(**kwargs)  # type: ignore[arg-type]


@pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
def test_non_finite_env_value(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("REVEAL_LINE_INTERVAL", raw)
    with pytest.raises(RevealConfigError, match="line_interval must be finite"):
        RevealConfig.from_env()
