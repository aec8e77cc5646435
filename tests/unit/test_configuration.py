"""Tests for service configuration loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from serverless_cli.core.configuration import (
    read_configuration,
    resolve_configuration_path,
    resolve_variables,
)
from serverless_cli.core.context import SessionContext
from serverless_cli.core.errors import ErrorKind, ServerlessError

# ---------------------------------------------------------------------------
# resolve_configuration_path
# ---------------------------------------------------------------------------


class TestResolveConfigurationPath:
    def test_no_configuration(self, tmp_path: Path):
        assert resolve_configuration_path(tmp_path) is None

    def test_prefers_yml(self, tmp_path: Path):
        (tmp_path / "serverless.json").write_text("{}")
        (tmp_path / "serverless.yml").write_text("")

        assert resolve_configuration_path(tmp_path) == (tmp_path / "serverless.yml").resolve()

    def test_explicit_config_option(self, tmp_path: Path):
        (tmp_path / "conf").mkdir()
        (tmp_path / "conf" / "custom.yml").write_text("service: x\n")

        result = resolve_configuration_path(tmp_path, {"config": "conf/custom.yml"})

        assert result == (tmp_path / "conf" / "custom.yml").resolve()

    def test_explicit_config_missing(self, tmp_path: Path):
        assert resolve_configuration_path(tmp_path, {"config": "nope.yml"}) is None


# ---------------------------------------------------------------------------
# read_configuration
# ---------------------------------------------------------------------------


class TestReadConfiguration:
    def test_yaml(self, tmp_path: Path):
        path = tmp_path / "serverless.yml"
        path.write_text("service: demo\nfunctions:\n  hello:\n    handler: handler.hello\n")

        assert read_configuration(path) == {
            "service": "demo",
            "functions": {"hello": {"handler": "handler.hello"}},
        }

    def test_json(self, tmp_path: Path):
        path = tmp_path / "serverless.json"
        path.write_text('{"service": "demo"}')

        assert read_configuration(path) == {"service": "demo"}

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "serverless.yml"
        path.write_text("")

        assert read_configuration(path) == {}

    def test_syntax_error(self, tmp_path: Path):
        path = tmp_path / "serverless.yml"
        path.write_text("service: [unclosed\n")

        with pytest.raises(ServerlessError) as exc_info:
            read_configuration(path)

        assert exc_info.value.kind is ErrorKind.CONFIGURATION_PARSE_ERROR

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "serverless.yml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ServerlessError) as exc_info:
            read_configuration(path)

        assert exc_info.value.kind is ErrorKind.INVALID_CONFIGURATION


# ---------------------------------------------------------------------------
# resolve_variables
# ---------------------------------------------------------------------------


def resolved(configuration: dict, options: dict | None = None) -> dict:
    context = SessionContext(options=options or {}, configuration=configuration)
    resolve_variables(context)
    return context.configuration


class TestResolveVariables:
    def test_self_reference_keeps_type(self):
        config = resolved({"custom": {"port": 8080}, "provider": {"port": "${self:custom.port}"}})
        assert config["provider"]["port"] == 8080

    def test_embedded_reference_is_interpolated(self):
        config = resolved({"service": "demo", "table": "${self:service}-table"})
        assert config["table"] == "demo-table"

    def test_chained_references(self):
        config = resolved(
            {
                "custom": {"stage": "${opt:stage, 'dev'}", "name": "app-${self:custom.stage}"},
                "name": "${self:custom.name}",
            }
        )
        assert config["name"] == "app-dev"

    def test_option_reference(self):
        config = resolved({"stage": "${opt:stage}"}, {"stage": "prod"})
        assert config["stage"] == "prod"

    def test_env_reference(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SLS_TEST_REGION", "eu-west-1")
        config = resolved({"region": "${env:SLS_TEST_REGION}"})
        assert config["region"] == "eu-west-1"

    def test_fallback_literals(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("SLS_TEST_MISSING", raising=False)
        config = resolved(
            {
                "a": "${env:SLS_TEST_MISSING, 'fallback'}",
                "b": "${env:SLS_TEST_MISSING, 512}",
                "c": "${env:SLS_TEST_MISSING, true}",
            }
        )
        assert config == {"a": "fallback", "b": 512, "c": True}

    def test_sls_stage_defaults_to_dev(self):
        assert resolved({"stage": "${sls:stage}"})["stage"] == "dev"

    def test_references_inside_lists(self):
        config = resolved({"service": "demo", "tags": ["${self:service}", "static"]})
        assert config["tags"] == ["demo", "static"]

    def test_unresolved_reference_left_in_place(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING):
            config = resolved({"value": "${ssm:/path/to/param}"})

        assert config["value"] == "${ssm:/path/to/param}"
        assert "ssm:/path/to/param" in caplog.text

    def test_whole_configuration_reference_is_unsupported(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING):
            config = resolved({"service": "demo", "all": "${self:}", "named": "${self:, 'x'}"})

        assert config["all"] == "${self:}"
        assert config["named"] == "x"
        assert "${self:}" in caplog.text

    def test_mutates_configuration_in_place(self):
        configuration = {"service": "demo", "name": "${self:service}"}
        context = SessionContext(configuration=configuration)

        resolve_variables(context)

        assert configuration["name"] == "demo"
        assert context.configuration is configuration

    def test_no_configuration(self):
        context = SessionContext()
        resolve_variables(context)
        assert context.configuration is None
