"""Tests for the Rich-backed sinks and the error formatter."""

from __future__ import annotations

import io

from rich.console import Console

from slycer.cli.formatters import format_error_with_suggestions
from slycer.cli.progress_manager import ProgressManager
from slycer.core.display import DisplaySink, refresh_log_bank
from slycer.exceptions import ChildFailure


def _console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=100, force_terminal=False), buffer


def test_rich_sinks_satisfy_the_protocol() -> None:
    console, _ = _console()
    manager = ProgressManager(console)

    assert isinstance(manager.add_download_bar(), DisplaySink)
    assert isinstance(manager.add_spinner("Fetching"), DisplaySink)


def test_download_bar_updates_its_task() -> None:
    console, _ = _console()
    manager = ProgressManager(console)
    bar = manager.add_download_bar()

    bar.set_position(816)
    bar.set_message("81.6% | [bold]3.47MiB/s")

    (task,) = manager.download_progress.tasks
    assert task.total == 1000
    assert task.completed == 816
    assert task.description == "81.6% | \\[bold]3.47MiB/s"


def test_log_bank_rows_follow_recent_lines() -> None:
    console, _ = _console()
    manager = ProgressManager(console)
    bank = manager.add_log_bank(3)

    refresh_log_bank(bank, ["one", "two"])

    descriptions = [task.description for task in manager.log_progress.tasks]
    assert descriptions == ["one", "two", ""]


def test_finish_with_message_fills_the_bar() -> None:
    console, _ = _console()
    manager = ProgressManager(console)
    overall = manager.add_overall_bar(4, "Processing URLs")
    overall.inc(1)

    overall.finish_with_message("All done")
    overall.inc(1)

    (task,) = manager.overall_progress.tasks
    assert task.completed == 4
    assert task.description == "All done"


def test_finish_and_clear_removes_the_task() -> None:
    console, _ = _console()
    manager = ProgressManager(console)
    spinner = manager.add_spinner("Fetching video metadata")

    spinner.finish_and_clear()
    spinner.finish_and_clear()
    spinner.set_message("late update")

    assert manager.status_progress.tasks == []


def test_live_region_and_failure_replay() -> None:
    console, buffer = _console()

    with ProgressManager(console) as manager:
        manager.add_download_bar()
        manager.print_failure("yt-dlp failed for x", ["ERROR: [youtube] gone"])

    assert "ERROR: [youtube] gone" in buffer.getvalue()


def test_error_panel_mentions_signal() -> None:
    console, buffer = _console()

    console.print(format_error_with_suggestions(ChildFailure("yt-dlp", -9, [])))

    output = buffer.getvalue()
    assert "ChildFailure: yt-dlp exited with status: -9" in output
    assert "Terminated by signal 9" in output


def test_finished_bar_can_still_be_cleared() -> None:
    console, _ = _console()
    manager = ProgressManager(console)
    overall = manager.add_overall_bar(2, "Processing URLs")

    overall.finish_with_message("All done")
    overall.finish_and_clear()

    assert manager.overall_progress.tasks == []
