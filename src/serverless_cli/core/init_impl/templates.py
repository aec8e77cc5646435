"""
Local template copying and service renaming.

Handles copying a template directory into a new project and rewriting the
service name in its configuration file.
"""

from __future__ import annotations

import json
import logging
import re
import shutil
from pathlib import Path

from ..constants import CONFIGURATION_FILENAMES, IGNORED_TEMPLATE_DIRECTORIES
from ..errors import ErrorKind, ServerlessError

logger = logging.getLogger(__name__)

# Top-level "service: <name>" line, optionally followed by a comment
_SERVICE_LINE = re.compile(
    r"^service[ \t]*:[ \t]*(?P<value>[^\n#]*?)(?P<trail>[ \t]*)(?=#|$)",
    re.MULTILINE,
)

# Legacy form: "service:\n  name: <name>"
_SERVICE_NAME_BLOCK = re.compile(
    r"^service[ \t]*:[ \t]*\n(?P<indent>[ \t]+)name[ \t]*:[ \t]*[^\n#]*",
    re.MULTILINE,
)


def substitute_template_vars(content: str, variables: dict[str, str]) -> str:
    """
    Substitute {{variable}} patterns in template content.

    Examples:
        substitute_template_vars("service: {{project_name}}", {"project_name": "demo"})
        # -> "service: demo"
    """
    for key, value in variables.items():
        pattern = f"{{{{{key}}}}}"
        content = content.replace(pattern, value)

    return content


def rename_service(project_dir: Path, service_name: str) -> Path | None:
    """
    Rewrite the service name in the project's configuration file.

    Args:
        project_dir: Project directory
        service_name: New service name

    Returns:
        The rewritten configuration file, or None if there is none
    """
    for filename in CONFIGURATION_FILENAMES:
        config_path = project_dir / filename
        if config_path.is_file():
            break
    else:
        logger.debug("No configuration file in %s, skipping service rename", project_dir)
        return None

    content = config_path.read_text(encoding="utf-8")

    if config_path.suffix == ".json":
        data = json.loads(content)
        if isinstance(data.get("service"), dict):
            data["service"]["name"] = service_name
        else:
            data["service"] = service_name
        config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return config_path

    if _SERVICE_NAME_BLOCK.search(content):
        content = _SERVICE_NAME_BLOCK.sub(
            lambda m: f"service:\n{m.group('indent')}name: {service_name}", content, count=1
        )
    elif _SERVICE_LINE.search(content):
        content = _SERVICE_LINE.sub(
            lambda m: f"service: {service_name}{m.group('trail')}", content, count=1
        )
    else:
        content = f"service: {service_name}\n{content}"

    config_path.write_text(content, encoding="utf-8")
    return config_path


def copy_template(template_dir: Path, target_dir: Path, variables: dict[str, str]) -> None:
    """
    Copy a template directory to target, substituting {{variable}} patterns.

    Directories in IGNORED_TEMPLATE_DIRECTORIES are skipped. Files without
    placeholders, and binary files, are copied unchanged; file modes are kept.
    """
    target_dir.mkdir(parents=True)

    for src_path in template_dir.rglob("*"):
        if not src_path.is_file():
            continue

        rel_path = src_path.relative_to(template_dir)
        if any(part in IGNORED_TEMPLATE_DIRECTORIES for part in rel_path.parts):
            continue

        dst_path = target_dir / rel_path
        dst_path.parent.mkdir(parents=True, exist_ok=True)

        raw = src_path.read_bytes()
        if b"{{" not in raw:
            shutil.copy2(src_path, dst_path)
            continue

        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError:
            # Binary file, just copy
            shutil.copy2(src_path, dst_path)
            continue

        # Bytes in and out so line endings survive
        dst_path.write_bytes(substitute_template_vars(content, variables).encode("utf-8"))
        shutil.copymode(src_path, dst_path)


def create_from_local_template(
    template_path: str | Path,
    project_dir: Path,
    project_name: str,
) -> None:
    """
    Create a project from a template directory on the local filesystem.

    Args:
        template_path: Path to the template directory
        project_dir: Directory to create (must not exist)
        project_name: Name substituted for {{project_name}} and the service name

    Raises:
        ServerlessError: INVALID_TEMPLATE_PATH if the template is missing,
            TARGET_FOLDER_ALREADY_EXISTS if project_dir exists
    """
    template_dir = Path(template_path).expanduser().resolve()

    if not template_dir.is_dir():
        raise ServerlessError(
            f'Could not find a template directory at "{template_path}". '
            'Ensure that the path provided with "--template-path" exists.',
            ErrorKind.INVALID_TEMPLATE_PATH,
        )

    if project_dir.exists():
        raise ServerlessError(
            f"Path {project_dir.name} is already taken",
            ErrorKind.TARGET_FOLDER_ALREADY_EXISTS,
        )

    logger.debug("Copying template %s to %s", template_dir, project_dir)
    copy_template(template_dir, project_dir, {"project_name": project_name})
    rename_service(project_dir, project_name)
