"""
Subprocess helpers.

Wraps ``subprocess.run`` so callers can tell "binary missing"
(``FileNotFoundError``) apart from "binary ran and failed" (``CommandError``).
"""

from __future__ import annotations

import functools
import logging
import os
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Raised when a command exits with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stdout: str = "", stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = (stderr or stdout).strip()
        message = f"`{' '.join(command)}` exited with code {returncode}"
        if detail:
            message += f"\n{detail}"
        super().__init__(message)


@functools.cache
def npm_command() -> str:
    """
    Resolve the npm executable once per process.

    ``SERVERLESS_NPM_COMMAND`` takes precedence. Falls back to the bare
    ``npm`` name when nothing is found on PATH, so a later call to
    ``run_command`` fails with ``FileNotFoundError``.
    """
    override = os.getenv("SERVERLESS_NPM_COMMAND")
    if override:
        return override

    resolved = shutil.which("npm")
    logger.debug("Resolved npm command: %s", resolved or "<not found>")
    return resolved or "npm"


def run_command(command: str, args: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """
    Run a command to completion.

    Args:
        command: Executable name or path
        args: Arguments passed to the executable
        cwd: Working directory for the process

    Returns:
        The completed process

    Raises:
        FileNotFoundError: If the executable cannot be found
        CommandError: If the process exits with a non-zero status
    """
    argv = [command, *args]
    logger.debug("Running %s in %s", argv, cwd)
    try:
        return subprocess.run(
            argv,
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        raise CommandError(argv, e.returncode, e.stdout or "", e.stderr or "") from e
