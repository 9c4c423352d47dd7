"""Locate the board's lanemark.toml.

The file is looked up in the start directory and then in each parent, the
way git finds ``.git/``. ``LANEMARK_CONFIG`` names a file directly and
turns the walk off; ``--config`` bypasses discovery altogether.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "lanemark.toml"
CONFIG_ENV_VAR = "LANEMARK_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the lanemark.toml governing *start* (default: cwd), or None.

    When ``LANEMARK_CONFIG`` is set, its file is used if it exists and
    nothing else is searched.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
