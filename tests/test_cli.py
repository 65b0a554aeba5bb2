"""Tests for the Typer command-line interface."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from slycer import __version__
from slycer.cli import app as app_module
from slycer.cli.app import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def config_file(monkeypatch, tmp_path):
    path = tmp_path / "slycer" / "config.ini"
    monkeypatch.setattr(app_module, "CONFIG_FILE", path)
    return path


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"slycer version {__version__}" in result.output


def test_init_writes_config(config_file) -> None:
    result = runner.invoke(app, ["init"])

    assert result.exit_code == 0
    assert config_file.is_file()
    assert "Configuration saved" in result.output


def test_init_refuses_to_overwrite(config_file) -> None:
    config_file.parent.mkdir(parents=True)
    config_file.write_text("[DEFAULT]\nkeep = true\n", encoding="utf-8")

    result = runner.invoke(app, ["init"], input="n\n")

    assert result.exit_code != 0
    assert "keep = true" in config_file.read_text(encoding="utf-8")


def test_show_config(config_file) -> None:
    config_file.parent.mkdir(parents=True)
    config_file.write_text("[DEFAULT]\naudio_format = opus\n", encoding="utf-8")

    result = runner.invoke(app, ["--show-config"])

    assert result.exit_code == 0
    assert "audio_format = opus" in result.output


def test_check_reports_missing(monkeypatch) -> None:
    monkeypatch.setattr(
        app_module,
        "locate_binaries",
        lambda binaries: {"yt-dlp": "/usr/bin/yt-dlp", "ffmpeg": None},
    )

    result = runner.invoke(app, ["check"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_check_all_present(monkeypatch) -> None:
    monkeypatch.setattr(
        app_module,
        "locate_binaries",
        lambda binaries: {name: f"/bin/{name}" for name in binaries},
    )

    result = runner.invoke(app, ["check"])

    assert result.exit_code == 0


def test_download_with_bad_format() -> None:
    result = runner.invoke(app, ["download", "https://example.com/v", "-f", "wma"])

    assert result.exit_code == 1
    assert "ConfigurationError" in result.output


def test_download_declined_dependencies(monkeypatch) -> None:
    monkeypatch.setattr(
        "slycer.media.dependencies.shutil.which", lambda name: None
    )

    result = runner.invoke(app, ["download", "https://example.com/v"], input="n\n")

    assert result.exit_code == 1
    assert "DependencyError" in result.output
