"""
Output tailers: one thread per child-process stream.

Each tailer reads its stream line by line until EOF and hands every line to a
router. The `ProgressRouter` turns yt-dlp progress lines into bar updates and
collects everything else in the shared recent-lines buffer, which feeds the
dim log rows under the bar. The rows are best effort: each refresh draws the
snapshot taken with its own append, so when both streams log at once an older
snapshot may be drawn last until the next log line arrives.
"""

import logging
import threading
from typing import IO, Callable

from slycer.core.display import DisplaySink, LogBank, refresh_log_bank
from slycer.core.progress_parser import MAX_PERMILLE, parse_progress_line
from slycer.core.recent_lines import RecentLines

log = logging.getLogger(__name__)

DEFAULT_IDLE_MESSAGE = "Downloading audio"
SPEED_WIDTH = 10

LineHandler = Callable[[str], None]


class ProgressRouter:
    """Routes each line to the progress sink or to the recent-lines log."""

    def __init__(
        self,
        sink: DisplaySink,
        recent_lines: RecentLines,
        log_bank: LogBank = (),
        idle_message: str = DEFAULT_IDLE_MESSAGE,
    ):
        self.sink = sink
        self.recent_lines = recent_lines
        self.log_bank = log_bank
        self.idle_message = idle_message

    def __call__(self, line: str) -> None:
        reading = parse_progress_line(line)
        if reading is not None:
            speed = reading.speed or ""
            self.sink.set_length(MAX_PERMILLE)
            self.sink.set_position(min(reading.permille, MAX_PERMILLE))
            self.sink.set_message(
                f"{reading.percent_text} | {speed:>{SPEED_WIDTH}}"
            )
            return

        # Non-progress output stays hidden behind the bar and the log rows
        self.sink.set_message(self.idle_message)
        snapshot = self.recent_lines.append(line)
        refresh_log_bank(self.log_bank, snapshot)


class EchoRouter:
    """Prints every line above the sink's indicator."""

    def __init__(self, sink: DisplaySink, style: str | None = "dim"):
        self.sink = sink
        self.style = style

    def __call__(self, line: str) -> None:
        self.sink.println(line, style=self.style)


def drain_stream(stream: IO[str], handle_line: LineHandler) -> int:
    """
    Reads `stream` until EOF, passing each line (without its terminator) to
    `handle_line` in arrival order.

    Returns:
        The number of lines read.
    """
    count = 0
    for raw in stream:
        handle_line(raw.rstrip("\r\n"))
        count += 1
    return count


class OutputTailer(threading.Thread):
    """
    Drains one stream of a running child process on its own thread.

    If the line handler fails (e.g. a broken display), the error is kept on
    `self.error` and the rest of the stream is still read and discarded so the
    child can never block on a full pipe.
    """

    def __init__(
        self, stream: IO[str], handle_line: LineHandler, name: str | None = None
    ):
        super().__init__(name=name, daemon=True)
        self.stream = stream
        self.handle_line = handle_line
        self.lines_read = 0
        self.error: Exception | None = None

    def run(self) -> None:
        try:
            self.lines_read = drain_stream(self.stream, self.handle_line)
        except Exception as e:
            self.error = e
            log.debug(f"Tailer '{self.name}' stopped handling lines: {e}")
            for _ in self.stream:
                pass
