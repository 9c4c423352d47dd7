"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, lanemark.toml only contains
overrides. Without a config file the board has the four standard lanes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from lanemark.domain.lanes import Lane, LaneFlags


class LaneConfig(BaseModel):
    """One ``[[board.lanes]]`` entry."""

    model_config = {"frozen": True}

    name: str
    mark_in_progress: bool = False
    mark_on_hold: bool = False
    mark_complete: bool = False

    def to_lane(self) -> Lane:
        return Lane(
            name=self.name,
            flags=LaneFlags(
                mark_in_progress=self.mark_in_progress,
                mark_on_hold=self.mark_on_hold,
                mark_complete=self.mark_complete,
            ),
        )


def _default_lanes() -> list[LaneConfig]:
    return [
        LaneConfig(name="Todo"),
        LaneConfig(name="In Progress", mark_in_progress=True),
        LaneConfig(name="On Hold", mark_on_hold=True),
        LaneConfig(name="Done", mark_complete=True),
    ]


class BoardConfig(BaseModel):
    """[board] section."""

    model_config = {"frozen": True}

    name: str = "board"
    lanes: list[LaneConfig] = Field(default_factory=_default_lanes)

    def build_lanes(self) -> list[Lane]:
        return [lane.to_lane() for lane in self.lanes]
