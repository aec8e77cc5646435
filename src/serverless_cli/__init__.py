"""
serverless-cli - command line interface for serverless services.

Detects the service in the current directory and, when there is none,
walks the user through creating one from a template.
"""

from __future__ import annotations

from ._version import get_version
from .core.context import SessionContext
from .core.errors import ErrorKind, ServerlessError

__version__ = get_version()

__all__ = [
    "__version__",
    "ErrorKind",
    "ServerlessError",
    "SessionContext",
]
