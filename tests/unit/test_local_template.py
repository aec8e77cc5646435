"""Tests for local template copying and service renaming."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from serverless_cli.core.errors import ErrorKind, ServerlessError
from serverless_cli.core.init_impl.templates import (
    create_from_local_template,
    rename_service,
    substitute_template_vars,
)


class TestSubstituteTemplateVars:
    def test_replaces_known_variables(self):
        result = substitute_template_vars("{{project_name}}: {{other}}", {"project_name": "demo"})
        assert result == "demo: {{other}}"


class TestRenameService:
    def test_simple_service_line(self, tmp_path: Path):
        (tmp_path / "serverless.yml").write_text("service: old # keep\nprovider:\n  name: aws\n")

        rename_service(tmp_path, "fresh")

        content = (tmp_path / "serverless.yml").read_text()
        assert content.startswith("service: fresh")
        assert "# keep" in content
        assert "provider:\n  name: aws" in content

    def test_legacy_service_block(self, tmp_path: Path):
        (tmp_path / "serverless.yml").write_text("service:\n  name: old\nprovider:\n  name: aws\n")

        rename_service(tmp_path, "fresh")

        content = (tmp_path / "serverless.yml").read_text()
        assert "service:\n  name: fresh\n" in content
        assert "provider:\n  name: aws" in content

    def test_missing_service_key_is_prepended(self, tmp_path: Path):
        (tmp_path / "serverless.yaml").write_text("provider:\n  name: aws\n")

        rename_service(tmp_path, "fresh")

        assert (tmp_path / "serverless.yaml").read_text().startswith("service: fresh\n")

    def test_json_configuration(self, tmp_path: Path):
        (tmp_path / "serverless.json").write_text(json.dumps({"service": "old"}))

        rename_service(tmp_path, "fresh")

        assert json.loads((tmp_path / "serverless.json").read_text()) == {"service": "fresh"}

    def test_no_configuration(self, tmp_path: Path):
        assert rename_service(tmp_path, "fresh") is None


class TestCreateFromLocalTemplate:
    def test_copies_and_renames(self, template_dir: Path, tmp_path: Path):
        project_dir = tmp_path / "my-api"

        create_from_local_template(template_dir, project_dir, "my-api")

        assert (project_dir / "serverless.yml").read_text().startswith("service: my-api\n")
        assert (project_dir / "src" / "handler.js").read_text() == "// my-api handler\n"
        assert not (project_dir / "node_modules").exists()

    def test_binary_files_copied_unchanged(self, template_dir: Path, tmp_path: Path):
        payload = bytes(range(256))
        (template_dir / "logo.png").write_bytes(payload)
        project_dir = tmp_path / "my-api"

        create_from_local_template(str(template_dir), project_dir, "my-api")

        assert (project_dir / "logo.png").read_bytes() == payload

    @pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
    def test_script_mode_and_line_endings_kept(self, template_dir: Path, tmp_path: Path):
        script = template_dir / "deploy.sh"
        script.write_bytes(b"#!/bin/sh\r\necho hi\r\n")
        script.chmod(0o755)
        project_dir = tmp_path / "my-api"

        create_from_local_template(template_dir, project_dir, "my-api")

        copied = project_dir / "deploy.sh"
        assert copied.read_bytes() == b"#!/bin/sh\r\necho hi\r\n"
        assert copied.stat().st_mode & 0o777 == 0o755

    @pytest.mark.skipif(os.name == "nt", reason="POSIX file modes")
    def test_substituted_file_keeps_mode_and_line_endings(self, template_dir: Path, tmp_path: Path):
        script = template_dir / "bin" / "run.sh"
        script.parent.mkdir()
        script.write_bytes(b"#!/bin/sh\r\necho {{project_name}}\r\n")
        script.chmod(0o750)
        project_dir = tmp_path / "my-api"

        create_from_local_template(template_dir, project_dir, "my-api")

        copied = project_dir / "bin" / "run.sh"
        assert copied.read_bytes() == b"#!/bin/sh\r\necho my-api\r\n"
        assert copied.stat().st_mode & 0o777 == 0o750

    def test_missing_template_path(self, tmp_path: Path):
        with pytest.raises(ServerlessError) as exc_info:
            create_from_local_template(tmp_path / "missing", tmp_path / "app", "app")

        assert exc_info.value.kind is ErrorKind.INVALID_TEMPLATE_PATH
        assert not (tmp_path / "app").exists()

    def test_existing_target(self, template_dir: Path, tmp_path: Path):
        (tmp_path / "app").mkdir()

        with pytest.raises(ServerlessError) as exc_info:
            create_from_local_template(template_dir, tmp_path / "app", "app")

        assert exc_info.value.kind is ErrorKind.TARGET_FOLDER_ALREADY_EXISTS
