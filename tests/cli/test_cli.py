"""Tests for the http-pipeline CLI."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from http_pipeline import __version__
from http_pipeline.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "pipeline.json"
    path.write_text(
        json.dumps(
            {
                "proxy_rules": [
                    {"path": "/proxy", "remote_uri_base": "http://upstream:8080"},
                    {"path": "^/v[0-9]+/", "match": "regex", "remote_uri_base": "https://api.internal"},
                ],
                "error_encoding": "plain",
                "logging": {"level": "DEBUG"},
            }
        )
    )
    return path


class TestCliGroup:
    """Tests for the top-level group."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert result.output.strip() == f"http-pipeline {__version__}"

    def test_no_command_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "check-config" in result.output
        assert "serve" in result.output
        assert "Example config" in result.output


class TestCheckConfig:
    """Tests for check-config."""

    def test_valid_config(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(cli, ["check-config", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "Configuration valid" in result.output
        assert "plain" in result.output
        assert "DEBUG" in result.output
        assert "/proxy (prefix) -> http://upstream:8080" in result.output
        assert "^/v[0-9]+/ (regex) -> https://api.internal" in result.output

    def test_config_without_rules(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text("{}")

        result = runner.invoke(cli, ["check-config", "-c", str(path)])

        assert result.exit_code == 0
        assert "(none)" in result.output

    def test_missing_config(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["check-config", "-c", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_invalid_config(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"proxy_rules": [{"path": "/p", "remote_uri_base": "ftp://x"}]}))

        result = runner.invoke(cli, ["check-config", "-c", str(path)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestServe:
    """Tests for serve."""

    def test_runs_uvicorn(self, runner: CliRunner, config_file: Path) -> None:
        with (
            patch("http_pipeline.cli.commands.serve.configure_logging") as configure,
            patch("http_pipeline.cli.commands.serve.uvicorn.run") as run,
        ):
            result = runner.invoke(cli, ["serve", "-c", str(config_file), "--port", "9090"])

        assert result.exit_code == 0, result.output
        configure.assert_called_once_with("DEBUG", None)
        run.assert_called_once()
        assert run.call_args.kwargs["host"] == "127.0.0.1"
        assert run.call_args.kwargs["port"] == 9090

    def test_missing_config(self, runner: CliRunner, tmp_path: Path) -> None:
        with patch("http_pipeline.cli.commands.serve.uvicorn.run") as run:
            result = runner.invoke(cli, ["serve", "-c", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        run.assert_not_called()
