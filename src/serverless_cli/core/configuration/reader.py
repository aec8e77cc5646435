"""
Service configuration reader.

Parses ``serverless.yml`` / ``serverless.yaml`` with PyYAML and
``serverless.json`` with the json module.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..errors import ErrorKind, ServerlessError

logger = logging.getLogger(__name__)


def read_configuration(path: Path) -> dict[str, Any]:
    """
    Read and parse a configuration file.

    Args:
        path: Path to the configuration file

    Returns:
        Parsed configuration mapping (empty dict for an empty file)

    Raises:
        ServerlessError: CONFIGURATION_PARSE_ERROR on syntax errors,
            INVALID_CONFIGURATION when the document is not a mapping
    """
    path = Path(path)
    content = path.read_text(encoding="utf-8")
    logger.debug("Reading configuration from %s", path)

    try:
        if path.suffix == ".json":
            data = json.loads(content) if content.strip() else None
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ServerlessError(
            f'Cannot parse "{path.name}": {e}',
            ErrorKind.CONFIGURATION_PARSE_ERROR,
        ) from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ServerlessError(
            f'Invalid configuration in "{path.name}": expected an object, '
            f"got {type(data).__name__}",
            ErrorKind.INVALID_CONFIGURATION,
        )

    return data
