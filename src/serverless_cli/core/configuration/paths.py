"""Locate the service configuration file within a directory."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..constants import CONFIGURATION_FILENAMES


def resolve_configuration_path(cwd: Path, options: Mapping[str, Any] | None = None) -> Path | None:
    """
    Resolve the absolute path of the service configuration file.

    An explicit ``config`` option wins (resolved against *cwd*). Otherwise the
    first existing file of CONFIGURATION_FILENAMES is returned.

    Returns:
        Absolute path, or None if no configuration file exists
    """
    cwd = Path(cwd).resolve()
    options = options or {}

    explicit = options.get("config")
    if explicit:
        candidate = (cwd / explicit).resolve()
        return candidate if candidate.is_file() else None

    for filename in CONFIGURATION_FILENAMES:
        candidate = cwd / filename
        if candidate.is_file():
            return candidate

    return None
