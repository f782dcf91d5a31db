"""Application version lookup."""

from __future__ import annotations

import re
import sys
from functools import lru_cache
from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "surfseek"


@lru_cache(maxsize=1)
def get_app_version() -> str:
    """Return the installed distribution version, else the one in ``pyproject.toml``."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        pass

    if getattr(sys, 'frozen', False):
        pyproject_path = Path(sys._MEIPASS) / "pyproject.toml"
    else:
        pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        content = pyproject_path.read_text(encoding="utf-8")
    except OSError:
        return "0.0.0"

    match = re.search(r'^\s*version\s*=\s*"([^"]+)"\s*$', content, flags=re.MULTILINE)
    return match.group(1) if match else "0.0.0"
