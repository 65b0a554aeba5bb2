"""
Runs external programs and reports their outcome.

`ProcessRunner.run` is the main entry point: it spawns the child with both
output streams piped, tails each stream on its own thread while the calling
thread waits for the exit status, and only reports a result once both tailers
have drained their streams to EOF. Draining both pipes concurrently with the
wait is what keeps a chatty child from filling a pipe buffer and deadlocking.

There is no timeout or cancellation here: the child runs to completion, and
retry policy belongs to the caller.
"""

import logging
import os
import subprocess
from typing import IO

from slycer.core.display import DisplaySink, LogBank
from slycer.core.recent_lines import DEFAULT_CAPACITY, RecentLines
from slycer.core.tailer import (
    DEFAULT_IDLE_MESSAGE,
    EchoRouter,
    LineHandler,
    OutputTailer,
    ProgressRouter,
)
from slycer.exceptions import ChildFailure, SpawnError, StreamCaptureError
from slycer.models.media import CommandSpec, RunOutcome

log = logging.getLogger(__name__)


def _spawn(spec: CommandSpec, **popen_kwargs) -> subprocess.Popen:
    """Starts `spec`, translating OS-level start failures into SpawnError."""
    env = {**os.environ, **spec.env} if spec.env else None
    log.debug(f"Running: {spec}")
    try:
        return subprocess.Popen(
            spec.argv,
            env=env,
            text=True,
            encoding="utf-8",
            errors="replace",
            **popen_kwargs,
        )
    except OSError as e:
        raise SpawnError(spec.program, e.strerror or str(e)) from e


def _take_pipes(proc: subprocess.Popen) -> tuple[IO[str], IO[str]]:
    if proc.stdout is None or proc.stderr is None:
        proc.kill()
        proc.wait()
        raise StreamCaptureError("Failed to capture stdout/stderr of child process")
    return proc.stdout, proc.stderr


def _run_tailed(
    spec: CommandSpec, stdout_handler: LineHandler, stderr_handler: LineHandler
) -> int:
    """Spawns `spec`, drains both streams on tailer threads, returns the status."""
    proc = _spawn(spec, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    stdout, stderr = _take_pipes(proc)

    tailers = [
        OutputTailer(stdout, stdout_handler, name=f"{spec.program}-stdout"),
        OutputTailer(stderr, stderr_handler, name=f"{spec.program}-stderr"),
    ]
    for tailer in tailers:
        tailer.start()

    returncode = proc.wait()
    for tailer in tailers:
        tailer.join()
    stdout.close()
    stderr.close()

    for tailer in tailers:
        if tailer.error is not None:
            raise tailer.error
    log.debug(f"{spec.program} exited with status {returncode}")
    return returncode


class ProcessRunner:
    """
    Runs one child process at a time, reporting yt-dlp style progress to a
    display sink and the latest non-progress lines to a log bank.
    """

    def __init__(
        self,
        sink: DisplaySink,
        log_bank: LogBank = (),
        idle_message: str = DEFAULT_IDLE_MESSAGE,
        log_capacity: int = DEFAULT_CAPACITY,
    ):
        self.sink = sink
        self.log_bank = log_bank
        self.idle_message = idle_message
        self.log_capacity = log_capacity

    def run(self, spec: CommandSpec) -> RunOutcome:
        """
        Runs `spec` to completion.

        Returns:
            A RunOutcome holding the last non-progress lines; callers on the
            success path are free to discard them.

        Raises:
            SpawnError: If the program could not be started.
            StreamCaptureError: If a pipe could not be obtained after spawn.
            ChildFailure: If the program exited with a non-zero status.
        """
        recent_lines = RecentLines(self.log_capacity)
        router = ProgressRouter(
            self.sink, recent_lines, self.log_bank, self.idle_message
        )
        returncode = _run_tailed(spec, router, router)
        if returncode != 0:
            raise ChildFailure(spec.program, returncode, recent_lines.snapshot())
        return RunOutcome(returncode=returncode, recent_lines=recent_lines.snapshot())


def run_streaming_lines(spec: CommandSpec, sink: DisplaySink) -> RunOutcome:
    """
    Runs `spec`, printing every output line above `sink`.

    Used for package-manager installs, where the whole output is worth showing.
    """
    recent_lines = RecentLines()
    echo = EchoRouter(sink)

    def handle(line: str) -> None:
        recent_lines.append(line)
        echo(line)

    returncode = _run_tailed(spec, handle, handle)
    if returncode != 0:
        raise ChildFailure(spec.program, returncode, recent_lines.snapshot())
    return RunOutcome(returncode=returncode, recent_lines=recent_lines.snapshot())


def _tail(text: str, count: int = DEFAULT_CAPACITY) -> list[str]:
    return [line for line in text.splitlines() if line.strip()][-count:]


def run_command(spec: CommandSpec) -> RunOutcome:
    """
    Runs a quiet command (e.g. `ffmpeg -loglevel error`) to completion.

    Output is collected instead of inherited so it cannot tear the live
    display; the stderr tail is attached to the failure.
    """
    proc = _spawn(spec, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    stdout, stderr = proc.communicate()
    if proc.returncode != 0:
        raise ChildFailure(spec.program, proc.returncode, _tail(stderr or stdout))
    return RunOutcome(returncode=proc.returncode, recent_lines=_tail(stderr))


def capture_output(spec: CommandSpec) -> str:
    """Runs `spec` and returns its complete stdout."""
    proc = _spawn(spec, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    stdout, stderr = proc.communicate()
    if proc.returncode != 0:
        raise ChildFailure(spec.program, proc.returncode, _tail(stderr))
    return stdout
