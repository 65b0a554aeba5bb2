"""
Parses yt-dlp progress lines into normalized readings.

yt-dlp run with `--newline` prints one progress line per update, e.g.:

    [download]  81.6% of   59.10MiB at    3.47MiB/s ETA 00:01

The format drifts between versions and locales, so parsing is total: anything
that does not look like a progress line yields None and is treated as an
ordinary log line.
"""

from slycer.models.media import ProgressReading

PROGRESS_MARKER = "[download]"
MAX_PERMILLE = 1000
UNKNOWN = "Unknown"


def _parse_permille(line: str) -> int | None:
    """Converts the token before the first '%' to tenths of a percent."""
    tokens = line.split("%", 1)[0].split()
    if not tokens:
        return None
    whole, _, fraction = tokens[-1].partition(".")
    if not (whole.isascii() and whole.isdigit()):
        return None
    first = fraction[:1]
    frac_digit = int(first) if first.isascii() and first.isdigit() else 0
    return min(int(whole) * 10 + frac_digit, MAX_PERMILLE)


def _parse_speed_and_eta(line: str) -> tuple[str | None, str | None]:
    speed: str | None = None
    eta: str | None = None
    tokens = line.split()
    i = 0
    while i < len(tokens):
        word = tokens[i]
        i += 1
        if word == "at" and i < len(tokens):
            value = tokens[i]
            i += 1
            # A bare value directly followed by ETA has no unit token
            unit = ""
            if i < len(tokens) and tokens[i] != "ETA":
                unit = tokens[i]
                i += 1
            if value != UNKNOWN:
                speed = f"{value} {unit}".strip()
            continue
        if word == "ETA" and i < len(tokens):
            value = tokens[i]
            i += 1
            if value != UNKNOWN:
                eta = value
    return speed, eta


def parse_progress_line(line: str) -> ProgressReading | None:
    """
    Parses a single output line into a ProgressReading.

    Args:
        line: One line of yt-dlp output, with or without its line terminator.

    Returns:
        The reading, or None if the line is not a (well-formed) progress line.
    """
    if not line.startswith(PROGRESS_MARKER) or "%" not in line:
        return None
    permille = _parse_permille(line)
    if permille is None:
        return None
    speed, eta = _parse_speed_and_eta(line)
    return ProgressReading(permille=permille, speed=speed, eta=eta)
