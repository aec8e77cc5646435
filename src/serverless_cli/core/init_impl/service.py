"""
Interactive setup of a new service.

Runs when the CLI is invoked outside of any service directory: asks what to
create, materializes the template, installs dependencies and loads the new
service's configuration into the session context.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ... import cli_ui
from ...cli_ui import PromptSpec, SelectOption
from ..configuration import read_configuration, resolve_configuration_path, resolve_variables
from ..constants import (
    PACKAGE_MANIFEST_FILENAME,
    SETUP_ONLY_OPTIONS,
    TEMPLATE_MARKER_FILENAME,
    TEMPLATE_SOURCE_OPTIONS,
)
from ..context import SessionContext
from ..errors import ErrorKind, ServerlessError
from ..process import npm_command, run_command
from .choices import OTHER_CHOICE, PROJECT_CHOICES, PROJECT_TYPE_PAGE_SIZE, template_url
from .download import download_template_from_repo
from .templates import create_from_local_template
from .validation import validate_explicit_project_name, validate_project_name_input

logger = logging.getLogger(__name__)

OTHER_TEMPLATE_HINT = (
    'Run "serverless create --help" to view available templates and create a new project '
    "from one of those templates."
)

NPM_NOT_FOUND_WARNING = (
    'Cannot install dependencies as "npm" installation could not be found. '
    'Please install npm and run "npm install" in directory of created service.'
)

INVALID_TEMPLATE_MESSAGE = (
    'Could not find provided template. Ensure that the template provided with "--template" exists.'
)


def _format_options(options: tuple[str, ...]) -> str:
    return ", ".join(f'"--{opt}"' for opt in options)


class InteractiveSetup:
    """
    Project creation wizard.

    Collaborators are injectable so the flow can be driven without a
    terminal, network or package manager.
    """

    def __init__(
        self,
        prompt: Callable[[PromptSpec], Any] | None = None,
        download_template: Callable[..., Any] | None = None,
        create_from_template: Callable[..., Any] | None = None,
        command_runner: Callable[..., Any] | None = None,
        resolve_npm_command: Callable[[], str] | None = None,
    ):
        self.prompt = prompt or cli_ui.prompt
        self.download_template = download_template or download_template_from_repo
        self.create_from_template = create_from_template or create_from_local_template
        self.command_runner = command_runner or run_command
        self.resolve_npm_command = resolve_npm_command or npm_command

    # ------------------------------------------------------------------
    # Applicability
    # ------------------------------------------------------------------

    def is_applicable(self, context: SessionContext) -> bool:
        """
        Decide whether the wizard applies to this session.

        Raises:
            ServerlessError: NOT_APPLICABLE_SERVICE_OPTIONS if setup-only
                options are used inside an existing service
        """
        if context.service_dir and any(key in context.options for key in SETUP_ONLY_OPTIONS):
            raise ServerlessError(
                "Cannot setup a new service when being in context of another service "
                f"({_format_options(SETUP_ONLY_OPTIONS)} options cannot be applied)",
                ErrorKind.NOT_APPLICABLE_SERVICE_OPTIONS,
            )

        return not context.service_dir

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    def _confirm_creation(self) -> bool:
        answer = self.prompt(
            PromptSpec(
                type="list",
                name="shouldCreateNewProject",
                message="No project detected. Do you want to create a new one?",
                choices=[SelectOption("Yes", "Yes"), SelectOption("No", "No")],
            )
        )
        return answer == "Yes"

    def _choose_project_type(self) -> str | None:
        return self.prompt(
            PromptSpec(
                type="list",
                name="projectType",
                message="What do you want to make?",
                choices=[SelectOption(choice.value, choice.label) for choice in PROJECT_CHOICES],
                page_size=PROJECT_TYPE_PAGE_SIZE,
            )
        )

    def _ask_project_name(self, working_dir: Path, project_type: str | None) -> str:
        answer = self.prompt(
            PromptSpec(
                type="input",
                name="projectName",
                message="What do you want to call this project?",
                default=f"{project_type}-project" if project_type else None,
                validate=lambda value: validate_project_name_input(value, working_dir),
            )
        )
        return str(answer).strip()

    def resolve_project_name(
        self,
        options: dict[str, Any],
        working_dir: Path,
        project_type: str | None = None,
    ) -> str:
        """Validated, collision-free project name from ``--name`` or a prompt."""
        if options.get("name"):
            return validate_explicit_project_name(str(options["name"]), working_dir)

        return self._ask_project_name(working_dir, project_type)

    # ------------------------------------------------------------------
    # Flow
    # ------------------------------------------------------------------

    def run(self, context: SessionContext) -> None:
        """
        Run the wizard, populating ``context`` on success.

        Returns early without error when the user declines or picks "Other".

        Raises:
            ServerlessError: On invalid options, names, templates or install failures
        """
        working_dir = context.working_dir
        options = context.options

        provided = [key for key in TEMPLATE_SOURCE_OPTIONS if key in options]
        if len(provided) > 1:
            raise ServerlessError(
                f"You can provide only one of: {_format_options(TEMPLATE_SOURCE_OPTIONS)} options",
                ErrorKind.MULTIPLE_TEMPLATE_OPTIONS_PROVIDED,
            )

        if not any(options.get(key) for key in SETUP_ONLY_OPTIONS):
            if not self._confirm_creation():
                logger.debug("Project creation declined")
                return

        if options.get("template-path"):
            project_name = self.resolve_project_name(options, working_dir)
            project_dir = working_dir / project_name
            self.create_from_template(
                template_path=options["template-path"],
                project_dir=project_dir,
                project_name=project_name,
            )
        elif options.get("template-url"):
            project_name = self.resolve_project_name(options, working_dir)
            project_dir = working_dir / project_name
            self._download_from_url(str(options["template-url"]), project_name, working_dir)
        else:
            project_type = options.get("template")
            if not project_type:
                project_type = self._choose_project_type()
                if project_type is None:
                    logger.debug("Template selection cancelled")
                    return
                if project_type == OTHER_CHOICE:
                    cli_ui.print_status(OTHER_TEMPLATE_HINT)
                    return

            project_name = self.resolve_project_name(options, working_dir, project_type)
            project_dir = working_dir / project_name
            self._download_named(
                str(project_type),
                project_name,
                working_dir,
                explicit=bool(options.get("template")),
            )

        self._install_dependencies(project_dir, project_name)
        self._remove_template_marker(project_dir)

        cli_ui.print_success(f"Project successfully created in '{project_name}' folder.")
        self._load_service(context, project_dir)

    def _download_from_url(self, url: str, project_name: str, working_dir: Path) -> None:
        cli_ui.print_status(f"Downloading template from provided url: {url}...")
        try:
            self.download_template(url, None, project_name, silent=True, cwd=working_dir)
        except ServerlessError:
            raise
        except Exception as e:
            raise ServerlessError(
                "Could not download template from provided url. Ensure that the template "
                f'provided with "--template-url" exists: {e}',
                ErrorKind.INVALID_TEMPLATE_URL,
            ) from e

    def _download_named(
        self,
        project_type: str,
        project_name: str,
        working_dir: Path,
        explicit: bool,
    ) -> None:
        if any(part in (".", "..") for part in project_type.split("/")):
            raise ServerlessError(INVALID_TEMPLATE_MESSAGE, ErrorKind.INVALID_TEMPLATE)

        url = template_url(project_type)
        cli_ui.print_status(f'Downloading "{project_type}" template...')
        try:
            self.download_template(url, project_type, project_name, silent=True, cwd=working_dir)
        except FileNotFoundError as e:
            if explicit:
                raise ServerlessError(INVALID_TEMPLATE_MESSAGE, ErrorKind.INVALID_TEMPLATE) from e
            raise self._download_failed(e) from e
        except ServerlessError:
            raise
        except Exception as e:
            raise self._download_failed(e) from e

    @staticmethod
    def _download_failed(error: Exception) -> ServerlessError:
        return ServerlessError(
            "Could not download template. Ensure that you are using the latest version "
            f"of Serverless Framework: {error}",
            ErrorKind.TEMPLATE_DOWNLOAD_FAILED,
        )

    def _install_dependencies(self, project_dir: Path, project_name: str) -> None:
        if not (project_dir / PACKAGE_MANIFEST_FILENAME).exists():
            logger.debug("No %s in %s, skipping install", PACKAGE_MANIFEST_FILENAME, project_dir)
            return

        cli_ui.print_status(f'Installing dependencies with "npm" in "{project_name}" folder.')
        command = self.resolve_npm_command()
        try:
            self.command_runner(command, ["install"], cwd=project_dir)
        except FileNotFoundError:
            cli_ui.print_warning(NPM_NOT_FOUND_WARNING)
        except Exception as e:
            raise ServerlessError(
                f"Cannot install dependencies: {e}",
                ErrorKind.DEPENDENCIES_INSTALL_FAILED,
            ) from e

    @staticmethod
    def _remove_template_marker(project_dir: Path) -> None:
        try:
            (project_dir / TEMPLATE_MARKER_FILENAME).unlink()
        except OSError:
            pass

    @staticmethod
    def _load_service(context: SessionContext, project_dir: Path) -> None:
        project_dir = project_dir.resolve()
        context.service_dir = project_dir

        configuration_path = resolve_configuration_path(project_dir, {})
        if configuration_path is None:
            logger.warning("No service configuration found in %s", project_dir)
            return

        context.configuration_filename = configuration_path.relative_to(project_dir).as_posix()
        context.configuration = read_configuration(configuration_path)
        resolve_variables(context)


def is_applicable(context: SessionContext) -> bool:
    """Module-level shortcut for ``InteractiveSetup().is_applicable``."""
    return InteractiveSetup().is_applicable(context)


def run(context: SessionContext) -> None:
    """Module-level shortcut for ``InteractiveSetup().run``."""
    InteractiveSetup().run(context)
