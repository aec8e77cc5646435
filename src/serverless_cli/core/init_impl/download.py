"""
Template download from hosted git repositories.

Supports GitHub, GitLab and Bitbucket repository URLs, optionally pointing at
a branch and sub-directory::

    https://github.com/serverless/examples/tree/master/aws-node
    https://gitlab.com/group/repo/-/tree/main/templates/api
    https://bitbucket.org/team/repo/src/main/service

The branch archive is downloaded as a zip and the requested sub-directory is
extracted into the new project directory.
"""

from __future__ import annotations

import errno
import io
import logging
import os
import shutil
import tempfile
import zipfile
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import httpx

from ..errors import ErrorKind, ServerlessError
from .templates import rename_service

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "master"
DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class RepositoryLocation:
    """A parsed repository URL."""

    host: str
    owner: str
    repo: str
    branch: str
    path: str = ""

    @property
    def archive_url(self) -> str:
        """URL of the zip archive of ``branch``."""
        if self.host == "gitlab.com":
            return (
                f"https://gitlab.com/{self.owner}/{self.repo}/-/archive/"
                f"{self.branch}/{self.repo}-{self.branch}.zip"
            )
        if self.host == "bitbucket.org":
            return f"https://bitbucket.org/{self.owner}/{self.repo}/get/{self.branch}.zip"
        return f"https://github.com/{self.owner}/{self.repo}/archive/refs/heads/{self.branch}.zip"

    @property
    def default_name(self) -> str:
        """Directory name used when no project name is given."""
        return self.path.rstrip("/").rsplit("/", 1)[-1] if self.path else self.repo


# Path segment that precedes "<branch>/<path>" on each host
_TREE_MARKERS = {
    "github.com": ("tree",),
    "gitlab.com": ("-", "tree"),
    "bitbucket.org": ("src",),
}


def parse_repository_url(url: str) -> RepositoryLocation:
    """
    Parse a repository URL.

    Raises:
        ServerlessError: INVALID_TEMPLATE_URL for unsupported or malformed URLs
    """
    parsed = urlparse(url.strip())
    host = (parsed.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]

    if parsed.scheme not in ("http", "https") or host not in _TREE_MARKERS:
        raise ServerlessError(
            f"The URL must be a valid GitHub, GitLab or Bitbucket repository URL: {url}",
            ErrorKind.INVALID_TEMPLATE_URL,
        )

    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) < 2:
        raise ServerlessError(
            f"The URL must point to a repository: {url}",
            ErrorKind.INVALID_TEMPLATE_URL,
        )

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]

    if any(part in (".", "..") for part in parts):
        raise ServerlessError(
            f"The URL must not contain relative path segments: {url}",
            ErrorKind.INVALID_TEMPLATE_URL,
        )

    rest = parts[2:]
    marker = _TREE_MARKERS[host]
    branch = DEFAULT_BRANCH
    path = ""
    if rest[: len(marker)] == list(marker) and len(rest) > len(marker):
        branch = rest[len(marker)]
        path = "/".join(rest[len(marker) + 1 :])

    return RepositoryLocation(host=host, owner=owner, repo=repo, branch=branch, path=path)


def _download_timeout() -> float:
    raw = os.getenv("SERVERLESS_DOWNLOAD_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid SERVERLESS_DOWNLOAD_TIMEOUT=%r", raw)
        return DEFAULT_TIMEOUT


def _fetch_archive(url: str, client: httpx.Client | None) -> bytes:
    if client is not None:
        response = client.get(url, follow_redirects=True)
        response.raise_for_status()
        return response.content

    with httpx.Client(timeout=_download_timeout()) as own_client:
        response = own_client.get(url, follow_redirects=True)
        response.raise_for_status()
        return response.content


def _extract(archive: bytes, location: RepositoryLocation, target_dir: Path) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        tmp_path = Path(tmp)
        with zipfile.ZipFile(io.BytesIO(archive)) as zf:
            zf.extractall(tmp_path)

        # Archives wrap everything in a single "<repo>-<ref>/" directory
        extracted = list(tmp_path.iterdir())
        root = extracted[0] if len(extracted) == 1 and extracted[0].is_dir() else tmp_path

        source = (root / location.path).resolve()
        if not source.is_relative_to(root.resolve()) or not source.is_dir():
            raise FileNotFoundError(
                errno.ENOENT,
                f'Template "{location.path}" not found in {location.owner}/{location.repo}',
                location.path,
            )

        shutil.copytree(source, target_dir)


def download_template_from_repo(
    url: str,
    template_name: str | None,
    project_name: str | None,
    *,
    silent: bool = False,
    cwd: Path | None = None,
    client: httpx.Client | None = None,
    progress_callback: Callable[[str], None] | None = None,
) -> Path:
    """
    Download a template repository (or a sub-directory of it) into a new project.

    Args:
        url: Repository URL, optionally with branch and sub-directory
        template_name: Template identifier (used as directory name fallback)
        project_name: Name of the project directory and service
        silent: Suppress progress messages
        cwd: Directory to create the project in (defaults to process cwd)
        client: Optional httpx client to reuse
        progress_callback: Receives progress messages unless silent

    Returns:
        Path of the created project directory

    Raises:
        ServerlessError: INVALID_TEMPLATE_URL for unsupported URLs,
            TARGET_FOLDER_ALREADY_EXISTS if the target exists
        FileNotFoundError: If the sub-directory does not exist in the repository
        httpx.HTTPError: On network or HTTP status failures
        zipfile.BadZipFile: If the downloaded archive is not a zip file
    """

    def log(msg: str) -> None:
        if progress_callback and not silent:
            progress_callback(msg)

    location = parse_repository_url(url)
    dir_name = project_name or template_name or location.default_name
    target_dir = Path(cwd or os.getcwd()) / dir_name

    if target_dir.exists():
        raise ServerlessError(
            f"Path {dir_name} is already taken",
            ErrorKind.TARGET_FOLDER_ALREADY_EXISTS,
        )

    log(f"Downloading {location.archive_url}...")
    logger.debug("Downloading template archive %s", location.archive_url)
    archive = _fetch_archive(location.archive_url, client)

    log(f"Extracting into {target_dir}...")
    _extract(archive, location, target_dir)

    if project_name:
        rename_service(target_dir, project_name)

    return target_dir
