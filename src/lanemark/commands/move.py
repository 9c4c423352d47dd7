"""Commands: move a task title between lifecycle states or board lanes."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from lanemark.commands._base import LaneCommand, at_option, status_char_option

if TYPE_CHECKING:
    from lanemark.commands._context import AppContext


@click.command(
    cls=LaneCommand,
    examples="""\
  lanemark move "Write report" --from todo --to in-progress
  lanemark move "Write report ▶️ 2024-01-01 09:00" --from in-progress --to done
  lanemark -q move "Write report" --from todo --to in-progress --at "2024-01-01 09:00"
  lanemark --json move "Write report" --from done --to todo""",
)
@click.argument("title")
@click.option("--to", "destination", required=True, help="Destination state.")
@click.option("--from", "source", required=True, help="Source state.")
@at_option
@click.pass_obj
def move(
    app: AppContext,
    title: str,
    destination: str,
    source: str,
    at: datetime | None,
) -> None:
    """Rewrite TITLE's markers for a move between lifecycle states.

    States: todo, in-progress, on-hold, done.
    """
    app.emit(app.service_at(at).move(title, destination, source))


@click.command(
    cls=LaneCommand,
    examples="""\
  lanemark shift "Write report" --from-lane Todo --to-lane "In Progress"
  lanemark shift "Write report" --from-lane Backlog --to-lane Done --status-char x""",
)
@click.argument("title")
@click.option("--from-lane", required=True, help="Lane the task leaves.")
@click.option("--to-lane", required=True, help="Lane the task enters.")
@status_char_option
@at_option
@click.pass_obj
def shift(
    app: AppContext,
    title: str,
    from_lane: str,
    to_lane: str,
    status_char: str,
    at: datetime | None,
) -> None:
    """Rewrite TITLE's markers for a move between two configured lanes."""
    result = app.service_at(at).move_between_lanes(
        title, from_lane, to_lane, status_char=status_char
    )
    app.emit(result)


@click.command(
    cls=LaneCommand,
    examples="""\
  lanemark act "Write report" --state todo start
  lanemark act "Write report ▶️ 2024-01-01 09:00" --state in-progress pause
  lanemark act "Write report ⏹️ 2024-01-02 17:30" --state done reopen""",
)
@click.argument("title")
@click.argument("action")
@click.option("--state", "state", required=True, help="Current state of the task.")
@at_option
@click.pass_obj
def act(app: AppContext, title: str, action: str, state: str, at: datetime | None) -> None:
    """Apply ACTION (start, pause, done, resume, reopen) to TITLE."""
    app.emit(app.service_at(at).act(title, state, action))
