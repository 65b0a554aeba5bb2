"""
Manages a Rich Live display holding every progress indicator of a session:
the overall batch bar, the download bar with its dim log rows, the metadata
spinner and the split bar. Each indicator is exposed to the core as a
`DisplaySink`, so several of them can update concurrently from tailer threads
without overwriting each other's region.
"""

import logging

from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

log = logging.getLogger(__name__)


class RichTaskSink:
    """A DisplaySink backed by a single task of a Rich Progress."""

    def __init__(
        self,
        progress: Progress,
        message: str = "",
        total: int | None = None,
    ):
        self.progress = progress
        self.task_id: TaskID = progress.add_task(escape(message), total=total)
        self._finished = False
        self._cleared = False

    def set_position(self, position: int) -> None:
        if not self._finished:
            self.progress.update(self.task_id, completed=position)

    def set_length(self, length: int) -> None:
        if not self._finished:
            self.progress.update(self.task_id, total=length)

    def set_message(self, message: str) -> None:
        if not self._finished:
            self.progress.update(self.task_id, description=escape(message))

    def inc(self, delta: int = 1) -> None:
        if not self._finished:
            self.progress.advance(self.task_id, delta)

    def println(self, text: str, style: str | None = None) -> None:
        self.progress.console.print(Text(text, style=style or ""))

    def finish_with_message(self, message: str) -> None:
        """Fills the bar and leaves it on screen with a final message."""
        if self._finished:
            return
        task = self.progress.tasks[self._task_index()]
        self.progress.update(
            self.task_id,
            description=escape(message),
            completed=task.total if task.total is not None else task.completed,
        )
        self.progress.stop_task(self.task_id)
        self._finished = True

    def finish_and_clear(self) -> None:
        """Removes the task, including one already finished with a message."""
        if self._cleared:
            return
        self._finished = True
        self._cleared = True
        try:
            self.progress.remove_task(self.task_id)
        except KeyError:
            pass

    def _task_index(self) -> int:
        for index, task in enumerate(self.progress.tasks):
            if task.id == self.task_id:
                return index
        raise KeyError(self.task_id)


class ProgressManager:
    """
    Owns the Live region and hands out sinks for each kind of indicator.

    Usage:
        with ProgressManager(console) as progress:
            bar = progress.add_download_bar()
            logs = progress.add_log_bank(5)
    """

    def __init__(self, console: Console, refresh_per_second: int = 10):
        self.console = console
        self.refresh_per_second = refresh_per_second

        self.overall_progress = Progress(
            SpinnerColumn(style="green"),
            TimeElapsedColumn(),
            BarColumn(bar_width=40, style="blue", complete_style="cyan"),
            MofNCompleteColumn(),
            TextColumn("{task.description}"),
            console=console,
        )
        self.download_progress = Progress(
            SpinnerColumn(style="green"),
            TimeElapsedColumn(),
            BarColumn(bar_width=40, style="blue", complete_style="cyan"),
            TextColumn("{task.description}"),
            console=console,
        )
        self.log_progress = Progress(
            TextColumn("{task.description}", style="bright_black"),
            console=console,
        )
        self.status_progress = Progress(
            SpinnerColumn(style="green"),
            TimeElapsedColumn(),
            TextColumn("{task.description}"),
            console=console,
        )
        self.split_progress = Progress(
            SpinnerColumn(style="green"),
            TimeElapsedColumn(),
            BarColumn(bar_width=40, style="blue", complete_style="cyan"),
            MofNCompleteColumn(),
            TextColumn("{task.description}"),
            console=console,
        )
        self._live: Live | None = None

    def add_overall_bar(self, total: int, message: str) -> RichTaskSink:
        return RichTaskSink(self.overall_progress, message, total=total)

    def add_download_bar(self, message: str = "Downloading audio") -> RichTaskSink:
        sink = RichTaskSink(self.download_progress, message, total=1000)
        sink.set_position(0)
        return sink

    def add_log_bank(self, size: int) -> list[RichTaskSink]:
        """Adds `size` message-only rows for the latest log lines."""
        return [RichTaskSink(self.log_progress, "", total=None) for _ in range(size)]

    def add_spinner(self, message: str) -> RichTaskSink:
        return RichTaskSink(self.status_progress, message, total=None)

    def add_split_bar(self, total: int, message: str) -> RichTaskSink:
        return RichTaskSink(self.split_progress, message, total=total)

    def println(self, text: str, style: str | None = None) -> None:
        self.console.print(Text(text, style=style or ""))

    def print_failure(self, title: str, lines: list[str]) -> None:
        """Replays a failed command's last log lines once, above the live region."""
        body = Text("\n".join(lines) if lines else "(no output captured)")
        self.console.print(
            Panel(
                body,
                title=f"[bold red]{escape(title)}[/bold red]",
                border_style="red",
                expand=False,
            )
        )

    def _renderable(self) -> Group:
        return Group(
            self.overall_progress,
            self.download_progress,
            self.log_progress,
            self.status_progress,
            self.split_progress,
        )

    def __enter__(self) -> "ProgressManager":
        self._live = Live(
            self._renderable(),
            console=self.console,
            refresh_per_second=self.refresh_per_second,
            transient=False,
        )
        self._live.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._live:
            self._live.stop()
            self._live = None
