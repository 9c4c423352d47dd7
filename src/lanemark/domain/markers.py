"""Lifecycle markers embedded in task titles.

A marker is a glyph followed by a local timestamp, e.g. ``▶️ 2024-01-01 09:00``.
Four kinds exist and, when several are present, they read left to right in
canonical order::

    <content> ✅ <date> ▶️ <date time> ⏸️ <date time> ⏹️ <date time>

All functions here are pure: they take a title and return a new one.
Patterns are compiled once at import and never carry match state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class MarkerKind(StrEnum):
    """The four marker kinds, declared in canonical order."""

    COMPLETION = "completion"
    START = "start"
    PAUSE = "pause"
    END = "end"


CANONICAL_ORDER: tuple[MarkerKind, ...] = (
    MarkerKind.COMPLETION,
    MarkerKind.START,
    MarkerKind.PAUSE,
    MarkerKind.END,
)

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M"

# Shape only: 4-digit year, 2-digit month/day, optional HH:MM.
_TIMESTAMP = r"\s*[0-9]{4}-[0-9]{2}-[0-9]{2}(?:\s+[0-9]{2}:[0-9]{2})?"
_WHITESPACE_RUN = re.compile(r"\s{2,}")


@dataclass(frozen=True)
class MarkerSpec:
    """Glyph, match pattern and formatting rule for one marker kind."""

    kind: MarkerKind
    glyph: str
    timed: bool

    @property
    def pattern(self) -> re.Pattern[str]:
        return _PATTERNS[self.kind]

    def format(self, now: datetime | None = None) -> str:
        stamp = (now or datetime.now()).strftime(DATETIME_FORMAT if self.timed else DATE_FORMAT)
        return f"{self.glyph} {stamp}"


MARKER_SPECS: dict[MarkerKind, MarkerSpec] = {
    MarkerKind.COMPLETION: MarkerSpec(MarkerKind.COMPLETION, "✅", timed=False),
    MarkerKind.START: MarkerSpec(MarkerKind.START, "▶️", timed=True),
    MarkerKind.PAUSE: MarkerSpec(MarkerKind.PAUSE, "⏸️", timed=True),
    MarkerKind.END: MarkerSpec(MarkerKind.END, "⏹️", timed=True),
}

_PATTERNS: dict[MarkerKind, re.Pattern[str]] = {
    kind: re.compile(re.escape(spec.glyph) + _TIMESTAMP) for kind, spec in MARKER_SPECS.items()
}

# Same patterns with the whitespace leading up to the marker captured, so a
# duplicate can be dropped without disturbing spacing elsewhere in the title.
# The lookbehind pins each attempt to the start of a whitespace run, which
# keeps the scan linear on long runs of spaces.
_LEADING_PATTERNS: dict[MarkerKind, re.Pattern[str]] = {
    kind: re.compile(r"(?<!\s)(\s*)(?:" + pattern.pattern + ")")
    for kind, pattern in _PATTERNS.items()
}


def format_marker(kind: MarkerKind, now: datetime | None = None) -> str:
    """Format a fresh marker for *kind* at *now* (default: local clock).

    Examples:
        >>> format_marker(MarkerKind.COMPLETION, datetime(2024, 3, 5, 14, 7))
        '✅ 2024-03-05'
        >>> format_marker(MarkerKind.END, datetime(2024, 3, 5, 14, 7))
        '⏹️ 2024-03-05 14:07'
    """
    return MARKER_SPECS[kind].format(now)


def has_marker(title: str, kind: MarkerKind) -> bool:
    """Return True if a marker of *kind* appears anywhere in *title*."""
    return _PATTERNS[kind].search(title) is not None


def find_marker_positions(title: str) -> dict[MarkerKind, int | None]:
    """Return the offset of the first marker of each kind, or None if absent."""
    positions: dict[MarkerKind, int | None] = {}
    for kind in CANONICAL_ORDER:
        match = _PATTERNS[kind].search(title)
        positions[kind] = match.start() if match else None
    return positions


def upsert_marker(title: str, kind: MarkerKind, now: datetime | None = None) -> str:
    """Write a fresh *kind* marker into *title*.

    An existing marker is refreshed in place. Repeated occurrences collapse
    into the first one. A missing marker is inserted at its canonical slot.
    """
    marker = format_marker(kind, now)
    if not has_marker(title, kind):
        return _insert_in_order(title, kind, marker)

    seen = False

    def _replace(match: re.Match[str]) -> str:
        nonlocal seen
        if seen:
            return ""
        seen = True
        return match.group(1) + marker

    return _LEADING_PATTERNS[kind].sub(_replace, title)


def remove_marker(title: str, kind: MarkerKind) -> str:
    """Delete every *kind* marker and normalize the leftover whitespace.

    Runs of two or more whitespace characters become a single space and
    both ends are trimmed, even when no marker was present.
    """
    stripped = _PATTERNS[kind].sub("", title)
    return _WHITESPACE_RUN.sub(" ", stripped).strip()


def _insert_in_order(title: str, kind: MarkerKind, marker: str) -> str:
    position = _insertion_point(title, kind)
    if position is None:
        return f"{title.rstrip()} {marker}"

    before = title[:position].rstrip()
    after = title[position:]
    separator = "" if after[:1].isspace() else " "
    return f"{before} {marker}{separator}{after.lstrip()}"


def _insertion_point(title: str, kind: MarkerKind) -> int | None:
    """Offset of the first present marker that sorts after *kind*.

    End markers always go last, so they never get an insertion point.
    """
    if kind == MarkerKind.END:
        return None
    positions = find_marker_positions(title)
    later = CANONICAL_ORDER[CANONICAL_ORDER.index(kind) + 1 :]
    for other in later:
        if positions[other] is not None:
            return positions[other]
    return None
