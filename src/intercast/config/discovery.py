"""Locate ``intercast.toml``.

``INTERCAST_CONFIG`` names the file explicitly; otherwise the nearest
``intercast.toml`` in the start directory or one of its parents wins.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "intercast.toml"
CONFIG_ENV_VAR = "INTERCAST_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any.

    An ``INTERCAST_CONFIG`` value that is not a file disables discovery.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
