"""Subcommand modules for lanemark.

Provides register_commands() which uses deferred imports to keep
``lanemark --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    1 group (marker) + 5 standalone commands.
    """
    # --- Groups ---
    from lanemark.commands.marker import marker

    cli.add_command(marker)

    # --- Standalone commands ---
    from lanemark.commands.move import act, move, shift
    from lanemark.commands.state import lanes, state

    cli.add_command(move)
    cli.add_command(shift)
    cli.add_command(act)
    cli.add_command(state)
    cli.add_command(lanes)
