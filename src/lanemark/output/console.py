"""Rich Console factory and theme for lanemark output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LANEMARK_THEME = Theme(
    {
        "lm.ok": "bold green",
        "lm.error": "bold red",
        "lm.warning": "bold yellow",
        "lm.op": "bold cyan",
        "lm.key": "dim",
        "lm.title": "bold",
        "lm.previous": "dim",
        "lm.state.todo": "white",
        "lm.state.in-progress": "cyan",
        "lm.state.on-hold": "yellow",
        "lm.state.done": "green",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=LANEMARK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_state(state: str) -> str:
    """Return the Rich style name for a lifecycle state."""
    name = f"lm.state.{state}"
    return name if name in LANEMARK_THEME.styles else ""
