"""Commands: derive a task's lifecycle state and list board lanes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lanemark.commands._base import LaneCommand, status_char_option

if TYPE_CHECKING:
    from lanemark.commands._context import AppContext


@click.command(
    cls=LaneCommand,
    examples="""\
  lanemark state --status-char x
  lanemark state --on-hold
  lanemark --json state --complete --in-progress""",
)
@click.option("--in-progress", "mark_in_progress", is_flag=True, help="Lane marks in progress.")
@click.option("--on-hold", "mark_on_hold", is_flag=True, help="Lane marks on hold.")
@click.option("--complete", "mark_complete", is_flag=True, help="Lane marks complete.")
@status_char_option
@click.pass_obj
def state(
    app: AppContext,
    mark_in_progress: bool,
    mark_on_hold: bool,
    mark_complete: bool,
    status_char: str,
) -> None:
    """Derive the lifecycle state from lane flags and a status character."""
    result = app.service.state(
        mark_in_progress=mark_in_progress,
        mark_on_hold=mark_on_hold,
        mark_complete=mark_complete,
        status_char=status_char,
    )
    app.emit(result)


@click.command(
    cls=LaneCommand,
    examples="""\
  lanemark lanes
  lanemark -c board/lanemark.toml --json lanes""",
)
@click.pass_obj
def lanes(app: AppContext) -> None:
    """List the configured board lanes and the state each assigns."""
    app.emit(app.service.list_lanes())
