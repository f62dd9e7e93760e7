"""Integration tests for the genkan command line interface."""

import sys

import pytest
from loguru import logger
from typer.testing import CliRunner

from genkan.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logger():
    """Commands reconfigure loguru sinks; put the default sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def initialized(tmp_path, monkeypatch):
    """A project created with `genkan init`, used as the working directory."""
    monkeypatch.delenv("GENKAN_THEMES_PATH", raising=False)
    monkeypatch.delenv("GENKAN_LOGS_PATH", raising=False)
    result = runner.invoke(app, ["init", str(tmp_path)])
    assert result.exit_code == 0, result.output
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.mark.integration
class TestInit:
    """Tests for `genkan init`."""

    def test_creates_project(self, initialized):
        assert (initialized / "config.toml").is_file()
        assert (initialized / "themes").is_dir()
        assert (initialized / "output").is_dir()

    def test_refuses_to_overwrite(self, initialized):
        before = (initialized / "config.toml").read_text()

        result = runner.invoke(app, ["init", str(initialized)])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert (initialized / "config.toml").read_text() == before


@pytest.mark.integration
class TestValidate:
    """Tests for `genkan validate`."""

    def test_starter_config_is_valid(self, initialized):
        result = runner.invoke(app, ["validate"])

        assert result.exit_code == 0, result.output
        assert "Links: 3" in result.output

    def test_invalid_config(self, initialized):
        config = initialized / "config.toml"
        config.write_text(config.read_text().replace('mode = "auto"', 'mode = "sepia"'))

        result = runner.invoke(app, ["validate", "-c", str(config)])

        assert result.exit_code == 1
        assert "Invalid dark_mode.mode 'sepia'" in result.output

    def test_unknown_theme(self, initialized):
        config = initialized / "config.toml"
        config.write_text(config.read_text().replace('name = "simple"', 'name = "neon"'))

        result = runner.invoke(app, ["validate"])

        assert result.exit_code == 1
        assert "Theme 'neon' not found" in result.output


@pytest.mark.integration
class TestBuild:
    """Tests for `genkan build` and the default command."""

    def test_default_command_builds(self, initialized):
        result = runner.invoke(app, [])

        assert result.exit_code == 0, result.output
        html = (initialized / "output" / "index.html").read_text(encoding="utf-8")
        assert "My Website" in html
        assert "Generated page at" in result.output

    def test_custom_paths(self, initialized):
        site = initialized / "site.toml"
        site.write_text((initialized / "config.toml").read_text())

        result = runner.invoke(app, ["build", "-c", str(site), "-o", str(initialized / "public")])

        assert result.exit_code == 0, result.output
        assert (initialized / "public" / "index.html").is_file()

    def test_missing_config(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["build"])

        assert result.exit_code == 1
        assert "Failed to read config file" in result.output

    def test_writes_log_file(self, initialized, monkeypatch):
        logs = initialized / "logs"
        monkeypatch.setenv("GENKAN_LOGS_PATH", str(logs))

        result = runner.invoke(app, ["build", "--verbose"])

        assert result.exit_code == 0, result.output
        log_files = list(logs.glob("build_*/build.log"))
        assert len(log_files) == 1
        assert "[render]" in log_files[0].read_text(encoding="utf-8")
