"""Custom Click base classes with --examples support.

Provides LaneCommand and LaneGroup that accept an ``examples`` parameter.
When ``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
"""

from __future__ import annotations

from typing import Any

import click

from lanemark.domain.markers import MarkerKind

MARKER_CHOICE = click.Choice([k.value for k in MarkerKind], case_sensitive=False)

at_option = click.option(
    "--at",
    type=click.DateTime(formats=["%Y-%m-%d %H:%M", "%Y-%m-%d"]),
    default=None,
    help="Timestamp to write instead of the local clock (YYYY-MM-DD [HH:MM]).",
)


def _validate_status_char(_ctx: click.Context, _param: click.Parameter, value: str) -> str:
    if len(value) != 1:
        raise click.BadParameter(f"{value!r} is not a single character")
    return value


status_char_option = click.option(
    "--status-char",
    default=" ",
    show_default="' '",
    callback=_validate_status_char,
    help="Checkbox character of the task (x, X, / or blank).",
)


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class LaneCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class LaneGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = LaneCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = LaneCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)
