"""Unit tests for the vplayout CLI."""

import json
import logging

import pytest
from click.testing import CliRunner

from viewport_layout.__main__ import cli, parse_surface


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop the handler installed by the CLI so it does not outlive the runner streams."""
    yield
    logger = logging.getLogger("viewport_layout")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestParseSurface:
    """Tests for WIDTHxHEIGHT parsing."""

    def test_parse(self):
        rect = parse_surface("1920x1080")
        assert (rect.width, rect.height) == (1920, 1080)

    def test_parse_uppercase_and_spaces(self):
        rect = parse_surface(" 800 X 1200 ")
        assert rect.height == 1200


class TestClassifyCommand:
    """Tests for `vplayout classify`."""

    def test_json(self, runner):
        result = runner.invoke(cli, ["classify", "1920x1080", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["key"] == "landscape-lg-1920x1080"
        assert data["deviceType"] == "large-laptop"
        assert data["sizeCategory"] == "large"

    def test_table(self, runner):
        result = runner.invoke(cli, ["classify", "375x812"])
        assert result.exit_code == 0
        assert "phone" in result.output

    def test_bad_surface(self, runner):
        result = runner.invoke(cli, ["classify", "wide"])
        assert result.exit_code == 2
        assert "WIDTHxHEIGHT" in result.output


class TestSimulateCommand:
    """Tests for `vplayout simulate`."""

    def test_round_trip(self, runner, tmp_path):
        result = runner.invoke(cli, [
            "simulate", "1920x1080", "800x1200", "1920x1080",
            "--split", "down", "--json", "--config", str(tmp_path / "none.json"),
        ])
        assert result.exit_code == 0
        steps = json.loads(result.output)

        assert [s["context"] for s in steps] == [
            "landscape-lg-1920x1080",
            "portrait-sm-800x1200",
            "landscape-lg-1920x1080",
        ]
        assert [v["id"] for v in steps[0]["viewports"]] == ["viewport-1", "viewport-2"]
        assert [v["id"] for v in steps[1]["viewports"]] == ["viewport-3"]
        assert steps[2]["viewports"] == steps[0]["viewports"]

    def test_table_output(self, runner, tmp_path):
        result = runner.invoke(cli, ["simulate", "1280x800", "--config", str(tmp_path / "none.json")])
        assert result.exit_code == 0
        assert "landscape-md-1280x800" in result.output

    def test_snapshots_json(self, runner, tmp_path):
        result = runner.invoke(cli, [
            "simulate", "1920x1080", "800x1200", "--split", "right", "--snapshots", "--json",
            "--config", str(tmp_path / "none.json"),
        ])
        assert result.exit_code == 0
        steps = json.loads(result.output)

        stored = steps[1]["snapshots"]
        assert [s["id"] for s in stored["landscape-lg-1920x1080"]] == ["viewport-1", "viewport-2"]
        assert stored["portrait-sm-800x1200"] == []
        assert "fractionalRect" in stored["landscape-lg-1920x1080"][0]

    def test_snapshots_table(self, runner, tmp_path):
        result = runner.invoke(cli, [
            "simulate", "1920x1080", "800x1200", "--snapshots", "--config", str(tmp_path / "none.json"),
        ])
        assert result.exit_code == 0
        assert "Stored snapshots: landscape-lg-1920x1080" in result.output

    def test_invalid_config(self, runner, tmp_path):
        config = tmp_path / "bad.json"
        config.write_text("{")
        result = runner.invoke(cli, ["simulate", "1280x800", "--json", "--config", str(config)])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"] == "CONFIG_INVALID"

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output
