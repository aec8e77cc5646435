"""Version lookup for serverless-cli."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION_NAME = "serverless-cli"
UNKNOWN_VERSION = "0.0.0"

# src/serverless_cli/_version.py -> repository root
_SOURCE_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_checkout_version(pyproject: Path) -> str | None:
    if not pyproject.is_file():
        return None
    try:
        project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    except tomllib.TOMLDecodeError:
        return None
    if project.get("name") != DISTRIBUTION_NAME:
        return None
    return project.get("version")


def get_version(pyproject: Path = _SOURCE_PYPROJECT) -> str:
    """Installed distribution version, else the source checkout's, else 0.0.0."""
    try:
        return _metadata_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return _source_checkout_version(pyproject) or UNKNOWN_VERSION
