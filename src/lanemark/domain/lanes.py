"""Lane flags — how a board column marks the tasks it holds.

A lane carries at most one of three flags. Enabling one through
:meth:`LaneFlags.toggle` clears the other two; lanes loaded from config are
taken as given and resolved by :func:`determine_state` priority.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal

from pydantic import BaseModel, Field

from lanemark.domain.lifecycle import LifecycleState, determine_state

LaneFlag = Literal["mark_in_progress", "mark_on_hold", "mark_complete"]

LANE_FLAGS: tuple[LaneFlag, ...] = ("mark_in_progress", "mark_on_hold", "mark_complete")


class LaneFlags(BaseModel):
    """Lifecycle flags of a single lane."""

    model_config = {"frozen": True}

    mark_in_progress: bool = False
    mark_on_hold: bool = False
    mark_complete: bool = False

    def state_for(self, status_char: str = " ") -> LifecycleState:
        """State of a task in this lane with checkbox *status_char*."""
        return determine_state(
            mark_in_progress=self.mark_in_progress,
            mark_on_hold=self.mark_on_hold,
            mark_complete=self.mark_complete,
            status_char=status_char,
        )

    @property
    def state(self) -> LifecycleState:
        return self.state_for()

    def toggle(self, flag: LaneFlag) -> LaneFlags:
        """Return flags with *flag* flipped.

        Turning a flag on turns the other two off. Turning it off leaves
        the others as they were.
        """
        if flag not in LANE_FLAGS:
            msg = f"Unknown lane flag: {flag!r}"
            raise ValueError(msg)
        if getattr(self, flag):
            return self.model_copy(update={flag: False})
        return LaneFlags(**{name: name == flag for name in LANE_FLAGS})


class Lane(BaseModel):
    """A named board column and its flags."""

    model_config = {"frozen": True}

    name: str
    flags: LaneFlags = Field(default_factory=LaneFlags)

    @property
    def state(self) -> LifecycleState:
        return self.flags.state


def find_lane(lanes: Iterable[Lane], state: LifecycleState) -> Lane | None:
    """Return the first lane whose tasks land in *state*, or None."""
    for lane in lanes:
        if lane.state == state:
            return lane
    return None


def get_lane(lanes: Iterable[Lane], name: str) -> Lane | None:
    """Return the lane called *name* (case-insensitive), or None."""
    wanted = name.strip().casefold()
    for lane in lanes:
        if lane.name.casefold() == wanted:
            return lane
    return None
