"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from lanemark.output.console import create_console, get_output, style_for_state

if TYPE_CHECKING:
    from rich.console import Console

    from lanemark.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Title-producing ops print the resulting title alone so the output can
    be piped straight back into the task store. ``inspect`` prints the
    marker kinds present, one per line.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "inspect":
        return "\n".join(result.data.get("present", []))
    if "title" in result.data:
        return str(result.data["title"])
    if "state" in result.data:
        return str(result.data["state"])
    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("name", "")) for item in items)
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="lm.ok")
    op = Text(f"  {result.op}", style="lm.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    if key == "title":
        style = "lm.title"
    elif key == "previous":
        style = "lm.previous"
    elif key in ("state", "source", "destination"):
        style = style_for_state(str(value))
    else:
        style = ""
    console.print(Text.assemble((f"  {key}: ", "lm.key"), (str(value), style)))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="lm.error")
    op = Text(f"  {result.op}", style="lm.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Title renderers ───────────────────────────────────────────────────


def _render_transition(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render move/act results: the new title, then the states involved."""
    _status_line(console, result)
    d = result.data
    _field(console, "title", d.get("title", ""))
    for key in ("source", "destination", "from_lane", "to_lane", "action", "lane"):
        if d.get(key) is not None:
            _field(console, key, d[key])
    if verbose:
        _field(console, "previous", d.get("previous", ""))
        _field(console, "changed", d.get("changed", False))


def _render_marker_edit(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render stamp/unstamp results."""
    _status_line(console, result)
    _field(console, "marker", result.data.get("marker", ""))
    _field(console, "title", result.data.get("title", ""))
    if verbose:
        _field(console, "previous", result.data.get("previous", ""))


def _render_inspect(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render marker offsets as a table in canonical order."""
    markers: dict[str, int | None] = result.data.get("markers", {})
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Marker")
    table.add_column("Offset", justify="right")
    for kind, offset in markers.items():
        table.add_row(kind, "—" if offset is None else str(offset))
    console.print(table)
    present = result.data.get("present", [])
    console.print(f"\n{len(present)} markers")


def _render_state(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "state", result.data.get("state", ""))
    actions = result.data.get("actions", [])
    if actions:
        labels = [f"{a['glyph']} {a['name']} → {a['target']}" for a in actions]
        _field(console, "actions", ", ".join(labels))


def _render_lanes(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(
        title=str(result.data.get("board", "")) or None,
        show_header=True,
        show_lines=False,
        pad_edge=False,
        expand=False,
    )
    table.add_column("Lane", style="lm.title")
    table.add_column("State")
    for item in items:
        state = str(item.get("state", ""))
        table.add_row(str(item.get("name", "")), Text(state, style=style_for_state(state)))
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} lanes")
    if verbose:
        _field(console, "root", result.data.get("root", ""))
        _field(console, "config", result.data.get("config") or "(defaults)")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback: key-value pairs for unrecognized ops."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "move": _render_transition,
    "act": _render_transition,
    "stamp": _render_marker_edit,
    "unstamp": _render_marker_edit,
    "inspect": _render_inspect,
    "state": _render_state,
    "list_lanes": _render_lanes,
}
