"""
Helper functions for formatting data into human-readable strings.
"""


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)


def format_seconds(seconds: float) -> str:
    """Formats a timestamp for ffmpeg's -ss/-t options, e.g. '75.250'."""
    return f"{seconds:.3f}"


def format_timestamp(seconds: float) -> str:
    """Formats seconds as 'HH:MM:SS' for chapter listings."""
    s = max(int(seconds), 0)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
