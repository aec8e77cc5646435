"""
Error types for the serverless CLI.

Every user-facing failure is a ``ServerlessError`` carrying a stable
``ErrorKind`` tag. Callers decide whether an exception is "ours" with an
``isinstance`` check and branch on ``kind``, never on class names.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable tags for structured errors."""

    # Interactive setup
    NOT_APPLICABLE_SERVICE_OPTIONS = "NOT_APPLICABLE_SERVICE_OPTIONS"
    MULTIPLE_TEMPLATE_OPTIONS_PROVIDED = "MULTIPLE_TEMPLATE_OPTIONS_PROVIDED"
    INVALID_PROJECT_NAME = "INVALID_PROJECT_NAME"
    TARGET_FOLDER_ALREADY_EXISTS = "TARGET_FOLDER_ALREADY_EXISTS"
    INVALID_TEMPLATE_URL = "INVALID_TEMPLATE_URL"
    INVALID_TEMPLATE = "INVALID_TEMPLATE"
    TEMPLATE_DOWNLOAD_FAILED = "TEMPLATE_DOWNLOAD_FAILED"
    DEPENDENCIES_INSTALL_FAILED = "DEPENDENCIES_INSTALL_FAILED"

    # Template materialization
    INVALID_TEMPLATE_PATH = "INVALID_TEMPLATE_PATH"

    # Configuration loading
    CONFIGURATION_PARSE_ERROR = "CONFIGURATION_PARSE_ERROR"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"


class ServerlessError(Exception):
    """Base exception for all structured, user-facing CLI errors."""

    def __init__(self, message: str, kind: ErrorKind):
        self.message = message
        self.kind = kind
        super().__init__(message)

    @property
    def code(self) -> str:
        """The kind tag as a plain string (as shown to users)."""
        return self.kind.value

    def __repr__(self) -> str:
        return f"ServerlessError({self.message!r}, {self.kind.value})"
