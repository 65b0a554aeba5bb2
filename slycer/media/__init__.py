"""
Media Processing Layer.

This package wraps the external tools: checking for and installing yt-dlp and
ffmpeg, fetching video metadata, and tagging the split tracks.
"""

from .dependencies import ensure_binaries_present, find_missing
from .metadata import extract_chapters, fetch_metadata_json
from .tagger import Tagger

__all__ = [
    "Tagger",
    "ensure_binaries_present",
    "extract_chapters",
    "fetch_metadata_json",
    "find_missing",
]
