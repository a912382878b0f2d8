"""Locate the ``profnet.toml`` that applies to a working directory.

``PROFNET_CONFIG`` names the file explicitly. Without it, the nearest
``profnet.toml`` in the directory or any of its ancestors wins. Parsing is
left to :class:`~profnet.config.settings.TomlSettingsSource`.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "profnet.toml"
CONFIG_ENV_VAR = "PROFNET_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None.

    A ``PROFNET_CONFIG`` pointing at a missing file yields None rather
    than falling back to the directory search.
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
