"""Shared pytest fixtures for the slycer test suite."""

from __future__ import annotations

import sys

import pytest

from slycer.models.config import SlycerConfig
from slycer.models.media import CommandSpec
from tests.fakes.recording_display import FakeProgressManager, RecordingSink


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink("Downloading audio", 1000)


@pytest.fixture
def log_bank() -> list[RecordingSink]:
    return [RecordingSink() for _ in range(5)]


@pytest.fixture
def progress_manager() -> FakeProgressManager:
    return FakeProgressManager()


@pytest.fixture
def python_command():
    """Build a CommandSpec that runs a Python snippet in a child interpreter."""

    def _build(script: str, env: dict[str, str] | None = None) -> CommandSpec:
        return CommandSpec(sys.executable, ["-c", script], env=env or {})

    return _build


@pytest.fixture
def config(tmp_path) -> SlycerConfig:
    return SlycerConfig(
        output=str(tmp_path / "out.mp3"),
        dest=str(tmp_path / "tracks"),
        tag_tracks=False,
    )
