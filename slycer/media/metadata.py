"""
Fetches the video metadata JSON from yt-dlp and extracts its chapter list.
"""

import json
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from slycer.core.runner import capture_output
from slycer.exceptions import ChildFailure, MetadataError
from slycer.models.media import Chapter, CommandSpec

log = logging.getLogger(__name__)

_CHAPTER_LIST = TypeAdapter(list[Chapter])


def fetch_metadata_json(url: str, ytdlp_binary: str = "yt-dlp") -> dict[str, Any]:
    """
    Runs `yt-dlp -J` for `url` and parses its output.

    Raises:
        SpawnError: If yt-dlp cannot be started.
        MetadataError: If yt-dlp fails or prints something that is not a JSON object.
    """
    spec = CommandSpec(ytdlp_binary, ["-J", url])
    try:
        raw = capture_output(spec)
    except ChildFailure as e:
        raise MetadataError(
            f"{ytdlp_binary} -J returned non-zero exit code {e.returncode}"
        ) from e
    try:
        metadata = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MetadataError(f"Invalid JSON from {ytdlp_binary}: {e}") from e
    if not isinstance(metadata, dict):
        raise MetadataError(f"Unexpected metadata from {ytdlp_binary}: not an object")
    log.debug(f"Fetched metadata for '{metadata.get('title', url)}'")
    return metadata


def extract_chapters(metadata: dict[str, Any]) -> list[Chapter]:
    """
    Validates the 'chapters' list of the metadata.

    Raises:
        MetadataError: If the field is missing or an entry is malformed.
    """
    if "chapters" not in metadata:
        raise MetadataError("No 'chapters' field in metadata")
    raw_chapters = metadata["chapters"] or []
    try:
        return _CHAPTER_LIST.validate_python(raw_chapters)
    except ValidationError as e:
        raise MetadataError(f"Failed to parse chapters: {e}") from e
