"""
Serverless CLI Package.

- project.py: Service detection, interactive setup and template listing
- utils.py: Shared utilities (version, logging, error output)

Running ``serverless`` outside of a service directory starts the
interactive setup; ``--name``, ``--template``, ``--template-path`` and
``--template-url`` answer its questions up front.
"""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from serverless_cli.cli.project import run_session, templates_command
from serverless_cli.cli.utils import configure_logging, exit_with_error, version_callback
from serverless_cli.core.errors import ServerlessError

app = typer.Typer(
    help="""Serverless CLI

Run without a command in an empty directory to create a new service:

  serverless                                   # interactive
  serverless --template aws-node --name demo   # non-interactive
  serverless --template-url <repo url>         # any GitHub/GitLab/Bitbucket repo
  serverless --template-path ./my-template     # local template
""",
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    name: str | None = typer.Option(None, "--name", help="Name of the new project"),
    template: str | None = typer.Option(
        None, "--template", help="Template to create the project from (see 'templates')"
    ),
    template_path: str | None = typer.Option(
        None, "--template-path", help="Local path of a template directory"
    ),
    template_url: str | None = typer.Option(
        None, "--template-url", help="Repository URL of a template"
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to the service configuration file"
    ),
) -> None:
    """Detect the current service, or create a new one."""
    configure_logging(verbose)

    if ctx.invoked_subcommand is not None:
        return

    raw_options = {
        "name": name,
        "template": template,
        "template-path": template_path,
        "template-url": template_url,
        "config": config,
    }
    options = {key: value for key, value in raw_options.items() if value is not None}

    try:
        run_session(Path.cwd(), options)
    except ServerlessError as e:
        exit_with_error(e)
    except KeyboardInterrupt:
        raise typer.Abort()


app.command(name="templates")(templates_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = ["app", "main"]


if __name__ == "__main__":
    main(sys.argv[1:])
