"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class SlycerError(Exception):
    """Base exception for all application-specific errors."""


class SpawnError(SlycerError):
    """Raised when an external program cannot be started at all."""

    def __init__(self, program: str, reason: str = ""):
        self.program = program
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"Failed to start '{program}'{detail}")


class StreamCaptureError(SlycerError):
    """Raised when a child's stdout or stderr pipe is missing after spawn."""


class ChildFailure(SlycerError):
    """
    Raised when a child process ran but exited unsuccessfully.

    Carries the exit status and the most recent non-progress log lines the
    child printed, so the caller can replay them.
    """

    def __init__(
        self, program: str, returncode: int, recent_lines: list[str] | None = None
    ):
        self.program = program
        self.returncode = returncode
        self.recent_lines = list(recent_lines or [])
        super().__init__(f"{program} exited with status: {returncode}")


class SplitError(SlycerError):
    """Raised when ffmpeg fails to cut a single chapter."""

    def __init__(self, chapter_title: str, cause: ChildFailure):
        self.chapter_title = chapter_title
        self.cause = cause
        super().__init__(f"ffmpeg failed to split '{chapter_title}' ({cause})")


class OutputDirError(SlycerError):
    """Raised when the destination directory for split tracks cannot be created."""


class MetadataError(SlycerError):
    """Raised when the video metadata cannot be fetched or understood."""


class NoChaptersError(MetadataError):
    """Raised when the metadata contains an empty chapter list."""


class DependencyError(SlycerError):
    """Raised when yt-dlp or ffmpeg is missing and could not be installed."""


class ConfigurationError(SlycerError):
    """Raised for issues related to configuration loading or validation."""


class InputError(SlycerError):
    """Raised when the URL input (single URL or batch file) is unusable."""
