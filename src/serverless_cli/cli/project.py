"""
Project commands for the serverless CLI.

- default invocation: detect the service in the current directory, or run the
  interactive setup when there is none
- templates: list the curated templates
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import typer

from serverless_cli import cli_ui
from serverless_cli.cli_ui import SelectOption
from serverless_cli.core.configuration import (
    read_configuration,
    resolve_configuration_path,
    resolve_variables,
)
from serverless_cli.core.context import SessionContext
from serverless_cli.core.init_impl import PROJECT_CHOICES, InteractiveSetup
from serverless_cli.core.init_impl.choices import OTHER_CHOICE

logger = logging.getLogger(__name__)


def load_session(cwd: Path, options: dict[str, Any]) -> SessionContext:
    """
    Build the session context for ``cwd``.

    When a service configuration exists in ``cwd`` it becomes the active
    service and its configuration is loaded.
    """
    context = SessionContext(cwd=cwd, options=options)

    configuration_path = resolve_configuration_path(cwd, options)
    if configuration_path is None:
        logger.debug("No service configuration found in %s", cwd)
        return context

    service_dir = configuration_path.parent
    context.service_dir = service_dir
    context.configuration_filename = configuration_path.relative_to(service_dir).as_posix()
    context.configuration = read_configuration(configuration_path)
    resolve_variables(context)
    return context


def service_name(context: SessionContext) -> str | None:
    """Service name from the loaded configuration (string or {name: ...} form)."""
    service = (context.configuration or {}).get("service")
    if isinstance(service, dict):
        service = service.get("name")
    return str(service) if service else None


def run_session(
    cwd: Path,
    options: dict[str, Any],
    setup: InteractiveSetup | None = None,
) -> SessionContext:
    """
    Load the session and run the interactive setup when it applies.

    Returns:
        The (possibly populated) session context

    Raises:
        ServerlessError: Propagated from configuration loading or the setup flow
    """
    context = load_session(cwd, options)
    setup = setup or InteractiveSetup()

    if setup.is_applicable(context):
        setup.run(context)
        if context.service_dir:
            typer.echo("")
            typer.echo("Next steps:")
            typer.echo(f"  cd {context.service_dir.name}")
    else:
        name = service_name(context) or context.service_dir.name
        typer.echo(f"Service '{name}' detected in {context.service_dir}")
        if context.configuration_filename:
            typer.echo(f"  Configuration: {context.configuration_filename}")

    return context


def templates_command() -> None:
    """
    List the curated project templates.

    Use one with: serverless --template <template> --name <name>
    """
    options = [
        SelectOption(choice.value, choice.label)
        for choice in PROJECT_CHOICES
        if choice.value != OTHER_CHOICE
    ]
    cli_ui.display_options_table(options, title="Available templates")
    typer.echo("Use: serverless --template <template> --name <project-name>")
