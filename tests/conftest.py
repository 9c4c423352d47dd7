"""Shared pytest fixtures and test helpers for lanemark tests."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from lanemark.config.settings import LanemarkSettings
from lanemark.domain.markers import MARKER_SPECS, MarkerKind
from lanemark.services.marking import MarkerService

# 2024-03-05 14:07, local time.
NOW = datetime(2024, 3, 5, 14, 7)
LATER = datetime(2024, 3, 6, 8, 30)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def now() -> datetime:
    """Fixed clock value used for every freshly written marker."""
    return NOW


@pytest.fixture
def board_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary board directory with no config file and no env override."""
    monkeypatch.delenv("LANEMARK_CONFIG", raising=False)
    return tmp_path


@pytest.fixture
def settings(board_root: Path) -> LanemarkSettings:
    """Default settings rooted at an empty board directory."""
    return LanemarkSettings.from_cli(board_root=board_root)


@pytest.fixture
def service(settings: LanemarkSettings, now: datetime) -> MarkerService:
    """MarkerService with its clock pinned to ``NOW``."""
    return MarkerService(settings, clock=lambda: now)


@pytest.fixture
def _isolated_board(board_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp board root so the CLI finds no stray lanemark.toml.

    Use via ``@pytest.mark.usefixtures("_isolated_board")`` on command test
    classes.
    """
    monkeypatch.chdir(board_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def count_markers(title: str, kind: MarkerKind) -> int:
    """Number of *kind* markers in *title*."""
    return len(MARKER_SPECS[kind].pattern.findall(title))


def marker_sequence(title: str) -> list[MarkerKind]:
    """Marker kinds present in *title*, in left-to-right order."""
    found: list[tuple[int, MarkerKind]] = []
    for kind, spec in MARKER_SPECS.items():
        found.extend((m.start(), kind) for m in spec.pattern.finditer(title))
    return [kind for _, kind in sorted(found)]


def strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)
