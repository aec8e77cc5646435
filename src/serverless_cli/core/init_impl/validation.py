"""
Project name validation.

Project names become directory names and service names, so they are limited
to a leading letter followed by letters, digits and hyphens.
"""

from __future__ import annotations

import re
from pathlib import Path

from ..errors import ErrorKind, ServerlessError

PROJECT_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]{0,100}$")

INVALID_PROJECT_NAME_MESSAGE = (
    "Project name is not valid.\n"
    "   - It should only contain alphanumeric and hyphens.\n"
    "   - It should start with an alphabetic character.\n"
    "   - Shouldn't exceed 128 characters"
)


def is_valid_project_name(name: str) -> bool:
    """
    Check a project name against PROJECT_NAME_PATTERN.

    Examples:
        is_valid_project_name("my-service")  # -> True
        is_valid_project_name("1abc")  # -> False
        is_valid_project_name("abc_def")  # -> False
    """
    return PROJECT_NAME_PATTERN.match(name) is not None


def taken_path_message(name: str) -> str:
    return f"Path {name} is already taken"


def validate_project_name_input(name: str, working_dir: Path) -> bool | str:
    """
    Validator for the interactive project name prompt.

    Returns:
        True if acceptable, otherwise the rejection message to display
    """
    name = name.strip()
    if not is_valid_project_name(name):
        return INVALID_PROJECT_NAME_MESSAGE

    if (working_dir / name).exists():
        return taken_path_message(name)

    return True


def validate_explicit_project_name(name: str, working_dir: Path) -> str:
    """
    Validate a project name given with ``--name``.

    Args:
        name: Name supplied on the command line
        working_dir: Directory the project would be created in

    Returns:
        The trimmed name

    Raises:
        ServerlessError: INVALID_PROJECT_NAME or TARGET_FOLDER_ALREADY_EXISTS
    """
    name = name.strip()
    if not is_valid_project_name(name):
        raise ServerlessError(INVALID_PROJECT_NAME_MESSAGE, ErrorKind.INVALID_PROJECT_NAME)

    if (working_dir / name).exists():
        raise ServerlessError(taken_path_message(name), ErrorKind.TARGET_FOLDER_ALREADY_EXISTS)

    return name
