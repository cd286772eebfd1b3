"""Unit tests for the CLI — Typer command registration and the demo."""

from __future__ import annotations

from typer.testing import CliRunner

from fluxdispatch import __version__
from fluxdispatch.cli.app import app

runner = CliRunner()


class TestCliApp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "demo" in result.output
        assert "version" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestDemoCommand:
    def test_demo_country_only(self):
        result = runner.invoke(app, ["demo", "--country", "japan"])
        assert result.exit_code == 0
        assert "tokyo" in result.output
        assert "1120" in result.output

    def test_demo_with_city(self):
        result = runner.invoke(app, ["--log-level", "WARNING", "demo", "-c", "france", "--city", "lyon"])
        assert result.exit_code == 0
        assert "lyon" in result.output
        assert "540" in result.output
