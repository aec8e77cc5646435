"""
Service configuration loading.

- paths.py - Locate serverless.yml / .yaml / .json
- reader.py - Parse the configuration file
- variables.py - Resolve ${source:address} references
"""

from __future__ import annotations

from .paths import resolve_configuration_path
from .reader import read_configuration
from .variables import resolve_variables

__all__ = [
    "resolve_configuration_path",
    "read_configuration",
    "resolve_variables",
]
