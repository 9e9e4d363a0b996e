"""Reveal state snapshot.

A :class:`RevealState` is one immutable snapshot of a reveal session. The
per-stage visibility flags are derived from a single :class:`RevealStage`
value, and construction rejects any combination that breaks the stage
precedence chain, so an inconsistent snapshot cannot exist.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pyreveal.models.coordinate import Coordinate


class RevealStage(StrEnum):
    IDLE = "idle"
    AWAITING_CAMERA = "awaiting_camera"
    ANIMATING_LINE = "animating_line"
    MARKER_REVEALED = "marker_revealed"
    DISTANCE_REVEALED = "distance_revealed"

    @property
    def rank(self) -> int:
        """Position of the stage in the reveal order (``idle`` is 0)."""
        return list(RevealStage).index(self)

    def reached(self, other: RevealStage) -> bool:
        return self.rank >= other.rank


class RevealState(BaseModel):
    """Snapshot owned by a single :class:`~pyreveal.sequencer.RevealSequencer`.

    ``generation`` increases every time a visitor coordinate is resolved;
    completion callbacks carry the generation they were issued for.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    stage: RevealStage = RevealStage.IDLE
    generation: int = Field(default=0, ge=0)
    owner: Coordinate
    visitor: Coordinate | None = None
    line_endpoint: Coordinate | None = None

    @model_validator(mode="after")
    def _check_precedence(self) -> RevealState:
        if self.stage is RevealStage.IDLE:
            if self.visitor is not None:
                raise ValueError("idle state cannot carry a visitor coordinate")
        elif self.visitor is None:
            raise ValueError(f"stage {self.stage} requires a visitor coordinate")

        if self.line_endpoint is not None and not self.stage.reached(RevealStage.ANIMATING_LINE):
            raise ValueError(f"line endpoint set before the camera fit completed (stage {self.stage})")

        if self.stage.reached(RevealStage.MARKER_REVEALED) and self.line_endpoint != self.owner:
            raise ValueError("owner marker revealed before the line reached the owner")
        return self

    @classmethod
    def initial(cls, owner: Coordinate, *, generation: int = 0) -> RevealState:
        return cls(owner=owner, generation=generation)

    def advance(self, stage: RevealStage, **changes: Any) -> RevealState:
        """Return a validated copy moved to *stage* with *changes* applied."""
        return type(self).model_validate({**dict(self), **changes, "stage": stage})

    @property
    def camera_fit_requested(self) -> bool:
        return self.stage.reached(RevealStage.AWAITING_CAMERA)

    @property
    def camera_fit_complete(self) -> bool:
        return self.stage.reached(RevealStage.ANIMATING_LINE)

    @property
    def line_visible(self) -> bool:
        return self.camera_fit_complete and self.line_endpoint is not None

    @property
    def owner_marker_visible(self) -> bool:
        return self.stage.reached(RevealStage.MARKER_REVEALED)

    @property
    def distance_visible(self) -> bool:
        return self.stage is RevealStage.DISTANCE_REVEALED
