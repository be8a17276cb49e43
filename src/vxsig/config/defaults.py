"""Default configuration values and paths."""

from __future__ import annotations

from pathlib import Path

CONFIG_FILE_NAMES = [
    "vxsig.yaml",
    "vxsig.yml",
    ".vxsig.yaml",
    ".vxsig.yml",
]

CONFIG_SEARCH_PATHS = [
    Path.cwd(),
    Path.home() / ".config" / "vxsig",
    Path.home(),
]

DEFAULT_ADDRESS_WIDTH = 64
DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_MATCH_LIMIT = 50
