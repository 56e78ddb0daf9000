"""Locate the cssderive configuration for a project.

Two file shapes are recognized, nearest directory first:

- ``cssderive.toml``: the whole file is cssderive config.
- ``pyproject.toml`` with a ``[tool.cssderive]`` table.

Within one directory ``cssderive.toml`` wins. ``CSSDERIVE_CONFIG`` (or
``--config``) names a file explicitly and disables the search.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "cssderive.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "CSSDERIVE_CONFIG"
PYPROJECT_TABLE = ("tool", "cssderive")


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return False
    return isinstance(data.get("tool", {}).get("cssderive"), dict)


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None.

    An unreadable ``pyproject.toml`` does not stop the search; it is
    simply not a config file.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None


def config_section(path: Path, data: dict[str, Any]) -> dict[str, Any]:
    """The cssderive part of parsed *data* read from *path*."""
    if path.name != PYPROJECT_FILENAME:
        return data
    section: Any = data
    for key in PYPROJECT_TABLE:
        section = section.get(key, {}) if isinstance(section, dict) else {}
    return section if isinstance(section, dict) else {}
