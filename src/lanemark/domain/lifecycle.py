"""Task lifecycle states and the marker transition policy.

A task's state is never stored in its title. It is derived from the flags
of the lane holding the task, falling back to the checkbox status
character. Moving a task between states rewrites the markers in its title:

- Todo -> In progress: start time.
- In progress -> On hold: pause time, only if the task was started.
- On hold -> In progress: pause cleared, start refreshed.
- Anything -> Done: pause cleared, end time.
- Done -> In progress: end and completion cleared, start refreshed.
- Anything -> Todo: every marker cleared.

Reaching Done writes the end time only. The completion marker is still
recognized and removed, but no longer written.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from lanemark.domain.markers import MarkerKind, has_marker, remove_marker, upsert_marker


class LifecycleState(StrEnum):
    """The four states a task moves through."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    ON_HOLD = "on-hold"
    DONE = "done"


DONE_STATUS_CHARS = frozenset({"x", "X"})
IN_PROGRESS_STATUS_CHAR = "/"

_CLEARED_ON_RESET: tuple[MarkerKind, ...] = (
    MarkerKind.START,
    MarkerKind.PAUSE,
    MarkerKind.END,
    MarkerKind.COMPLETION,
)


def apply_transition(
    title: str,
    destination: LifecycleState,
    source: LifecycleState,
    now: datetime | None = None,
) -> str:
    """Rewrite the markers in *title* for a move from *source* to *destination*.

    A move to the same state returns *title* untouched, timestamps included.

    Raises:
        ValueError: If either state is not a :class:`LifecycleState`.
    """
    if destination == source:
        return title

    match (destination, source):
        case (LifecycleState.IN_PROGRESS, LifecycleState.TODO):
            return upsert_marker(title, MarkerKind.START, now)
        case (LifecycleState.IN_PROGRESS, LifecycleState.ON_HOLD):
            title = remove_marker(title, MarkerKind.PAUSE)
            return upsert_marker(title, MarkerKind.START, now)
        case (LifecycleState.IN_PROGRESS, LifecycleState.DONE):
            title = remove_marker(title, MarkerKind.END)
            title = remove_marker(title, MarkerKind.COMPLETION)
            return upsert_marker(title, MarkerKind.START, now)
        case (LifecycleState.ON_HOLD, LifecycleState.IN_PROGRESS):
            # A pause without a start has nothing to measure against.
            if has_marker(title, MarkerKind.START):
                return upsert_marker(title, MarkerKind.PAUSE, now)
            return title
        case (LifecycleState.ON_HOLD, LifecycleState.TODO | LifecycleState.DONE):
            return title
        case (
            LifecycleState.DONE,
            LifecycleState.TODO | LifecycleState.IN_PROGRESS | LifecycleState.ON_HOLD,
        ):
            title = remove_marker(title, MarkerKind.PAUSE)
            return upsert_marker(title, MarkerKind.END, now)
        case (
            LifecycleState.TODO,
            LifecycleState.IN_PROGRESS | LifecycleState.ON_HOLD | LifecycleState.DONE,
        ):
            for kind in _CLEARED_ON_RESET:
                title = remove_marker(title, kind)
            return title
        case _:
            msg = f"Unhandled transition: {source!r} -> {destination!r}"
            raise ValueError(msg)


def determine_state(
    mark_in_progress: bool | None = None,
    mark_on_hold: bool | None = None,
    mark_complete: bool | None = None,
    status_char: str = " ",
) -> LifecycleState:
    """Derive a task's state from its lane flags and status character.

    Flags win in the order complete, in progress, on hold. Without a flag
    the status character decides: ``x``/``X`` is done, ``/`` is in
    progress, anything else is todo. On hold is reachable through the lane
    flag only; no status character maps to it.

    Examples:
        >>> determine_state(mark_complete=True, mark_in_progress=True)
        <LifecycleState.DONE: 'done'>
        >>> determine_state(status_char="/")
        <LifecycleState.IN_PROGRESS: 'in-progress'>
        >>> determine_state(status_char="?")
        <LifecycleState.TODO: 'todo'>
    """
    if mark_complete:
        return LifecycleState.DONE
    if mark_in_progress:
        return LifecycleState.IN_PROGRESS
    if mark_on_hold:
        return LifecycleState.ON_HOLD
    if status_char in DONE_STATUS_CHARS:
        return LifecycleState.DONE
    if status_char == IN_PROGRESS_STATUS_CHAR:
        return LifecycleState.IN_PROGRESS
    return LifecycleState.TODO


# --- Per-state actions ---


@dataclass(frozen=True)
class StateAction:
    """A move a task can make from its current state."""

    name: str
    glyph: str
    target: LifecycleState


STATE_ACTIONS: dict[LifecycleState, tuple[StateAction, ...]] = {
    LifecycleState.TODO: (StateAction("start", "▶️", LifecycleState.IN_PROGRESS),),
    LifecycleState.IN_PROGRESS: (
        StateAction("pause", "⏸️", LifecycleState.ON_HOLD),
        StateAction("done", "⏹️", LifecycleState.DONE),
    ),
    LifecycleState.ON_HOLD: (StateAction("resume", "▶️", LifecycleState.IN_PROGRESS),),
    LifecycleState.DONE: (StateAction("reopen", "▶️", LifecycleState.IN_PROGRESS),),
}


def available_actions(state: LifecycleState) -> tuple[StateAction, ...]:
    """Return the actions offered to a task in *state*."""
    return STATE_ACTIONS.get(state, ())


def resolve_action(state: LifecycleState, name: str) -> LifecycleState:
    """Return the target state of action *name* from *state*.

    Raises:
        ValueError: If *state* does not offer an action called *name*.
    """
    for action in available_actions(state):
        if action.name == name.lower():
            return action.target
    offered = [a.name for a in available_actions(state)]
    msg = f"No action {name!r} from {state}. Available: {offered}"
    raise ValueError(msg)
