"""MarkerService — lifecycle markers and state moves over task titles.

Pipeline: PARSE → APPLY → RESPOND

Names arriving from the CLI (states, marker kinds, lanes, actions) are
parsed into domain values first; anything unknown becomes a failed
:class:`ServiceResult` rather than an exception.
"""

from __future__ import annotations

import logging
from typing import Any

from lanemark.domain.lanes import find_lane, get_lane
from lanemark.domain.lifecycle import (
    LifecycleState,
    apply_transition,
    available_actions,
    determine_state,
    resolve_action,
)
from lanemark.domain.markers import (
    CANONICAL_ORDER,
    MarkerKind,
    find_marker_positions,
    remove_marker,
    upsert_marker,
)
from lanemark.services.base import BaseService
from lanemark.services.result import ServiceResult

logger = logging.getLogger(__name__)


def parse_state(value: str | LifecycleState) -> LifecycleState:
    """Parse a state name, accepting ``in-progress``, ``in_progress``, ``In Progress``."""
    normalized = str(value).strip().lower().replace("_", "-").replace(" ", "-")
    try:
        return LifecycleState(normalized)
    except ValueError:
        allowed = [s.value for s in LifecycleState]
        msg = f"Unknown state: {value!r}. Expected one of {allowed}"
        raise ValueError(msg) from None


def parse_kind(value: str | MarkerKind) -> MarkerKind:
    """Parse a marker kind name."""
    try:
        return MarkerKind(str(value).strip().lower())
    except ValueError:
        allowed = [k.value for k in MarkerKind]
        msg = f"Unknown marker: {value!r}. Expected one of {allowed}"
        raise ValueError(msg) from None


class MarkerService(BaseService):
    """Applies the marker engine and transition policy to single titles."""

    # ------------------------------------------------------------------
    # State moves
    # ------------------------------------------------------------------

    def move(
        self,
        title: str,
        destination: str | LifecycleState,
        source: str | LifecycleState,
    ) -> ServiceResult:
        """Move a task from *source* to *destination*, rewriting its markers."""
        op = "move"
        try:
            dest_state = parse_state(destination)
            src_state = parse_state(source)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_STATE", str(exc))

        return ServiceResult(ok=True, op=op, data=self._transition(title, dest_state, src_state))

    def move_between_lanes(
        self,
        title: str,
        from_lane: str,
        to_lane: str,
        *,
        status_char: str = " ",
    ) -> ServiceResult:
        """Move a task between two configured lanes.

        Both states come from the lane's flags, falling back to
        *status_char*. A move into an unflagged lane keeps the state the
        checkbox already gives the task, so it leaves the markers alone.
        """
        op = "move"
        lanes = self.lanes
        source_lane = get_lane(lanes, from_lane)
        target_lane = get_lane(lanes, to_lane)
        for wanted, found in ((from_lane, source_lane), (to_lane, target_lane)):
            if found is None:
                return ServiceResult.failure(
                    op,
                    "UNKNOWN_LANE",
                    f"No lane named {wanted!r}",
                    lanes=[lane.name for lane in lanes],
                )
        assert source_lane is not None and target_lane is not None

        data = self._transition(
            title,
            target_lane.flags.state_for(status_char),
            source_lane.flags.state_for(status_char),
        )
        data["from_lane"] = source_lane.name
        data["to_lane"] = target_lane.name
        return ServiceResult(ok=True, op=op, data=data)

    def act(self, title: str, state: str | LifecycleState, action: str) -> ServiceResult:
        """Apply a named action (start, pause, done, resume, reopen) from *state*."""
        op = "act"
        try:
            current = parse_state(state)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_STATE", str(exc))
        try:
            target = resolve_action(current, action)
        except ValueError as exc:
            return ServiceResult.failure(
                op,
                "INVALID_ACTION",
                str(exc),
                available=[a.name for a in available_actions(current)],
            )

        warnings: list[str] = []
        data = self._transition(title, target, current)
        data["action"] = action.lower()
        lane = find_lane(self.lanes, target)
        data["lane"] = lane.name if lane else None
        if lane is None:
            warnings.append(f"No lane is configured for state {target}")
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    # ------------------------------------------------------------------
    # Single markers
    # ------------------------------------------------------------------

    def stamp(self, title: str, kind: str | MarkerKind) -> ServiceResult:
        """Insert or refresh one marker."""
        op = "stamp"
        try:
            marker = parse_kind(kind)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_MARKER", str(exc))
        updated = upsert_marker(title, marker, self._now())
        logger.debug("Stamped %s marker", marker)
        return ServiceResult(
            ok=True,
            op=op,
            data={"title": updated, "previous": title, "marker": str(marker)},
        )

    def unstamp(self, title: str, kind: str | MarkerKind) -> ServiceResult:
        """Remove every marker of one kind."""
        op = "unstamp"
        try:
            marker = parse_kind(kind)
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_MARKER", str(exc))
        updated = remove_marker(title, marker)
        return ServiceResult(
            ok=True,
            op=op,
            data={"title": updated, "previous": title, "marker": str(marker)},
        )

    def inspect(self, title: str) -> ServiceResult:
        """Report where each marker kind first appears in *title*."""
        positions = find_marker_positions(title)
        markers = {str(kind): positions[kind] for kind in CANONICAL_ORDER}
        present = [str(kind) for kind in CANONICAL_ORDER if positions[kind] is not None]
        ordered = sorted(present, key=lambda k: markers[k]) == present
        warnings = [] if ordered else ["Markers are out of canonical order"]
        return ServiceResult(
            ok=True,
            op="inspect",
            data={"title": title, "markers": markers, "present": present},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # State derivation
    # ------------------------------------------------------------------

    def state(
        self,
        *,
        mark_in_progress: bool = False,
        mark_on_hold: bool = False,
        mark_complete: bool = False,
        status_char: str = " ",
    ) -> ServiceResult:
        """Derive a lifecycle state and list the actions it offers."""
        current = determine_state(
            mark_in_progress=mark_in_progress,
            mark_on_hold=mark_on_hold,
            mark_complete=mark_complete,
            status_char=status_char,
        )
        return ServiceResult(
            ok=True,
            op="state",
            data={
                "state": str(current),
                "actions": [
                    {"name": a.name, "glyph": a.glyph, "target": str(a.target)}
                    for a in available_actions(current)
                ],
            },
        )

    def list_lanes(self) -> ServiceResult:
        """List configured lanes with the state each one assigns."""
        items = [
            {"name": lane.name, "state": str(lane.state)} for lane in self.lanes
        ]
        config_path = self._settings.config_path
        return ServiceResult(
            ok=True,
            op="list_lanes",
            data={
                "board": self._settings.board.name,
                "root": str(self._settings.board_root),
                "config": str(config_path) if config_path else None,
                "items": items,
                "count": len(items),
            },
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _transition(
        self,
        title: str,
        destination: LifecycleState,
        source: LifecycleState,
    ) -> dict[str, Any]:
        updated = apply_transition(title, destination, source, self._now())
        logger.debug(
            "Transition %s -> %s (%s)",
            source,
            destination,
            "changed" if updated != title else "unchanged",
        )
        return {
            "title": updated,
            "previous": title,
            "source": str(source),
            "destination": str(destination),
            "changed": updated != title,
        }
