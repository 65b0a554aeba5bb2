"""
Data Models Layer.

This package contains the Pydantic models and dataclasses that define the core
data structures used throughout the application, such as configuration,
chapters, progress readings and session statistics.
"""

from .config import SlycerConfig
from .media import Chapter, CommandSpec, ProgressReading, RunOutcome
from .stats import SessionStats

__all__ = [
    "Chapter",
    "CommandSpec",
    "ProgressReading",
    "RunOutcome",
    "SessionStats",
    "SlycerConfig",
]
