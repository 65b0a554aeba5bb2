"""
Utilities for building output filenames and reading URL lists.
"""

import re
from pathlib import Path
from typing import Any, Optional

from pathvalidate import sanitize_filename

TITLE_PREFIX_MAX_LEN = 40

_DISALLOWED_CHARS = re.compile(r"[^a-zA-Z0-9_\- ]")
_TITLE_CUT_MARKERS = (" - ", "(", "[")


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def sanitize_title(title: str) -> Optional[str]:
    """
    Reduces a title to ASCII letters, digits, '_' and '-', with runs of
    anything else collapsed to a single underscore.

    Returns None if nothing usable is left.
    """
    filtered = _DISALLOWED_CHARS.sub(" ", title)
    joined = "_".join(filtered.split())
    return joined or None


def make_title_prefix(metadata: dict[str, Any]) -> Optional[str]:
    """
    Derives a short filename prefix from the video title, e.g.
    'Artist Name - Album (Full Album) [HD]' -> 'artist_name'.
    """
    title = metadata.get("title")
    if not isinstance(title, str):
        return None
    cut_pos = len(title)
    for marker in _TITLE_CUT_MARKERS:
        if (pos := title.find(marker)) != -1:
            cut_pos = min(cut_pos, pos)
    sanitized = sanitize_title(title[:cut_pos].lower())
    if not sanitized:
        return None
    prefix = sanitized[:TITLE_PREFIX_MAX_LEN].rstrip("_")
    return prefix or None


def compute_pad_width(use_numbers: bool, count: int) -> int:
    """Number of digits needed to zero-pad track numbers for `count` tracks."""
    if not use_numbers:
        return 0
    if count <= 9:
        return 1
    if count <= 99:
        return 2
    if count <= 999:
        return 3
    return 4


def build_output_filename(
    index: int,
    pad_width: int,
    safe_title: str,
    audio_format: str,
    prefix: Optional[str] = None,
    title_prefix: Optional[str] = None,
    numbers: bool = False,
) -> str:
    """
    Joins the optional user prefix, the title prefix, the zero-padded track
    number and the chapter title with underscores.
    """
    parts = []
    if prefix:
        parts.append(prefix)
    if title_prefix:
        parts.append(title_prefix)
    if numbers and pad_width > 0:
        parts.append(f"{index + 1:0{pad_width}d}")
    parts.append(safe_title)
    return sanitize_filename(f"{'_'.join(parts)}.{audio_format}", platform="auto")


def read_url_file(path: Path) -> list[str]:
    """Reads one URL per line, skipping blank lines and '#' comments."""
    with open(path, "r", encoding="utf-8") as f:
        return [
            line.strip()
            for line in f
            if line.strip() and not line.strip().startswith("#")
        ]
