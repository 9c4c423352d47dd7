"""Command group: edit or inspect individual markers in a title."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import click

from lanemark.commands._base import MARKER_CHOICE, LaneGroup, at_option

if TYPE_CHECKING:
    from lanemark.commands._context import AppContext

_MARKER_EXAMPLES = """\
  lanemark marker stamp start "Write report"
  lanemark marker unstamp pause "Write report ▶️ 2024-01-01 09:00 ⏸️ 2024-01-01 11:00"
  lanemark marker inspect "Write report ✅ 2024-01-02 ▶️ 2024-01-01 09:00\""""


@click.group(cls=LaneGroup, examples=_MARKER_EXAMPLES)
def marker() -> None:
    """Add, refresh, remove, or locate markers in a task title."""


@marker.command(
    examples="""\
  lanemark marker stamp start "Write report"
  lanemark marker stamp end "Write report" --at "2024-01-02 17:30\""""
)
@click.argument("kind", type=MARKER_CHOICE)
@click.argument("title")
@at_option
@click.pass_obj
def stamp(app: AppContext, kind: str, title: str, at: datetime | None) -> None:
    """Insert or refresh a KIND marker in TITLE."""
    app.emit(app.service_at(at).stamp(title, kind))


@marker.command(
    examples="""\
  lanemark marker unstamp end "Write report ⏹️ 2024-01-02 17:30\""""
)
@click.argument("kind", type=MARKER_CHOICE)
@click.argument("title")
@click.pass_obj
def unstamp(app: AppContext, kind: str, title: str) -> None:
    """Remove every KIND marker from TITLE."""
    app.emit(app.service.unstamp(title, kind))


@marker.command(
    examples="""\
  lanemark marker inspect "Write report ▶️ 2024-01-01 09:00"
  lanemark --json marker inspect "Write report\""""
)
@click.argument("title")
@click.pass_obj
def inspect(app: AppContext, title: str) -> None:
    """Show where each marker kind first appears in TITLE."""
    app.emit(app.service.inspect(title))
