"""
Pydantic model for application configuration.
Provides validation for all settings, whether they come from the INI file or
from command-line overrides.
"""

from pydantic import BaseModel, field_validator, model_validator

# Formats accepted by `yt-dlp --audio-format`
AUDIO_FORMATS = ("aac", "alac", "flac", "m4a", "mp3", "opus", "vorbis", "wav")


class SlycerConfig(BaseModel):
    """A validated configuration model for the application."""

    # Download Settings
    output: str = "out.mp3"
    audio_format: str = "mp3"
    yes: bool = False
    keep: bool = False

    # Track Naming Options
    dest: str | None = None
    prefix: str | None = None
    numbers: bool = False
    prefix_name: bool = False
    tag_tracks: bool = True

    # External Tools
    ytdlp_binary: str = "yt-dlp"
    ffmpeg_binary: str = "ffmpeg"

    # Display & Splitting
    log_lines: int = 5
    min_chapter_seconds: float = 1.0

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("audio_format")
    @classmethod
    def validate_audio_format(cls, v: str) -> str:
        """Normalizes the format and ensures yt-dlp can extract it."""
        v = v.lower()
        if v not in AUDIO_FORMATS:
            raise ValueError(
                f"Audio format must be one of: {', '.join(AUDIO_FORMATS)}."
            )
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: str) -> str:
        if not v:
            raise ValueError("Output path cannot be empty.")
        return v

    @field_validator("dest", "prefix")
    @classmethod
    def empty_to_none(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("log_lines")
    @classmethod
    def validate_log_lines(cls, v: int) -> int:
        """Keeps the log bank to a size that fits on a terminal."""
        if v < 1 or v > 20:
            raise ValueError("Log lines must be between 1 and 20.")
        return v

    @field_validator("min_chapter_seconds")
    @classmethod
    def validate_min_chapter(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Minimum chapter length cannot be negative.")
        return v

    @model_validator(mode="after")
    def validate_binaries(self) -> "SlycerConfig":
        """Checks that both external tools are named."""
        if not self.ytdlp_binary or not self.ffmpeg_binary:
            raise ValueError("Both 'ytdlp_binary' and 'ffmpeg_binary' must be set.")
        return self

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        return set(cls.model_fields)
