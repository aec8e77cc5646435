"""
Project setup for the serverless CLI.

This package contains modular implementations for creating a new service:
- validation.py - Project name validation
- choices.py - Curated template choices
- templates.py - Local template copying and service renaming
- download.py - Template download from git hosting
- service.py - The interactive setup flow
"""

from __future__ import annotations

from .choices import OTHER_CHOICE, PROJECT_CHOICES, ProjectChoice, template_url
from .download import RepositoryLocation, download_template_from_repo, parse_repository_url
from .service import InteractiveSetup, is_applicable, run
from .templates import copy_template, create_from_local_template, rename_service
from .validation import (
    INVALID_PROJECT_NAME_MESSAGE,
    PROJECT_NAME_PATTERN,
    is_valid_project_name,
    validate_explicit_project_name,
    validate_project_name_input,
)

__all__ = [
    # Validation
    "PROJECT_NAME_PATTERN",
    "INVALID_PROJECT_NAME_MESSAGE",
    "is_valid_project_name",
    "validate_explicit_project_name",
    "validate_project_name_input",
    # Choices
    "OTHER_CHOICE",
    "PROJECT_CHOICES",
    "ProjectChoice",
    "template_url",
    # Templates
    "copy_template",
    "create_from_local_template",
    "rename_service",
    # Download
    "RepositoryLocation",
    "download_template_from_repo",
    "parse_repository_url",
    # Setup flow
    "InteractiveSetup",
    "is_applicable",
    "run",
]
