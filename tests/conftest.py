"""Shared pytest fixtures for serverless-cli tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from serverless_cli.cli_ui import PromptSpec


class ScriptedPrompt:
    """
    Stand-in for ``cli_ui.prompt`` answering from a script.

    ``answers`` maps a prompt name to a value, or to a list of values consumed
    in order. Input prompts with a validator keep consuming answers until one
    is accepted, mirroring the re-prompt behaviour of the real UI.
    """

    def __init__(self, answers: dict[str, Any] | None = None):
        self.answers = {key: list(v) if isinstance(v, list) else [v] for key, v in (answers or {}).items()}
        self.asked: list[PromptSpec] = []
        self.rejections: list[str] = []

    def __call__(self, spec: PromptSpec) -> Any:
        self.asked.append(spec)
        queue = self.answers.get(spec.name)
        if not queue:
            raise AssertionError(f"Unexpected prompt: {spec.name}")

        while queue:
            answer = queue.pop(0)
            if answer is None and spec.type == "input":
                answer = spec.default or ""
            if spec.validate is None:
                return answer
            result = spec.validate(answer)
            if result is True:
                return answer
            self.rejections.append(str(result))

        raise AssertionError(f"No accepted answer for prompt: {spec.name}")

    def names(self) -> list[str]:
        return [spec.name for spec in self.asked]


class FakeDownloader:
    """Records download calls and materializes a project directory."""

    def __init__(self, files: dict[str, str] | None = None, error: Exception | None = None):
        self.files = files if files is not None else {"serverless.yml": "service: demo\n"}
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def __call__(
        self,
        url: str,
        template_name: str | None,
        project_name: str | None,
        *,
        silent: bool = False,
        cwd: Path | None = None,
    ) -> Path:
        self.calls.append(
            {
                "url": url,
                "template_name": template_name,
                "project_name": project_name,
                "silent": silent,
                "cwd": cwd,
            }
        )
        if self.error is not None:
            raise self.error

        assert cwd is not None
        target = Path(cwd) / (project_name or template_name or "project")
        target.mkdir()
        for rel_path, content in self.files.items():
            path = target / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return target


@pytest.fixture
def scripted_prompt():
    """Factory for ScriptedPrompt instances."""
    return ScriptedPrompt


@pytest.fixture
def fake_downloader():
    """Factory for FakeDownloader instances."""
    return FakeDownloader


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A local template directory with a configuration and a handler."""
    root = tmp_path / "templates" / "aws-node-http"
    (root / "src").mkdir(parents=True)
    (root / "serverless.yml").write_text(
        "service: aws-node-http\n"
        "provider:\n"
        "  name: aws\n"
        "  runtime: nodejs18.x\n"
    )
    (root / "src" / "handler.js").write_text("// {{project_name}} handler\n")
    (root / "node_modules" / "left-pad").mkdir(parents=True)
    (root / "node_modules" / "left-pad" / "index.js").write_text("module.exports = 1;\n")
    return root


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Empty working directory."""
    path = tmp_path / "work"
    path.mkdir()
    return path
