"""
Value types shared by the process runner, the progress parser and the splitter.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel


@dataclass(frozen=True)
class ProgressReading:
    """A single parsed yt-dlp progress update."""

    permille: int
    speed: str | None = None
    eta: str | None = None

    @property
    def percent_text(self) -> str:
        """Formats the reading as '81.6%'."""
        return f"{self.permille // 10}.{self.permille % 10}%"


@dataclass
class CommandSpec:
    """An external program to spawn: name, ordered arguments and env overrides."""

    program: str
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


@dataclass
class RunOutcome:
    """Result of a child process that exited successfully."""

    returncode: int
    recent_lines: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.returncode == 0


class Chapter(BaseModel):
    """A chapter marker from the yt-dlp metadata."""

    title: str
    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time
