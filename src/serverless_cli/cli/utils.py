"""
Serverless CLI utilities.

Shared utility functions used across CLI modules.
"""

from __future__ import annotations

import logging
import os
import platform

import typer

from serverless_cli._version import get_version
from serverless_cli.core.errors import ServerlessError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"serverless-cli version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging.

    ``--verbose`` forces DEBUG; otherwise ``LOG_LEVEL`` is honoured
    (default WARNING so diagnostics stay out of user-facing output).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv("LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def exit_with_error(error: ServerlessError) -> None:
    """Print a structured error to stderr and exit with code 1."""
    typer.echo(f"Error [{error.code}]: {error.message}", err=True)
    raise typer.Exit(code=1)
