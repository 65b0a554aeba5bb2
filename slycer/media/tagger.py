"""
Writes basic tags (title, track number, album, artist) to the split tracks.
"""

import logging
from typing import Any

import mutagen
from mutagen import MutagenError
from mutagen.id3 import ID3

log = logging.getLogger(__name__)


class Tagger:
    """Tags split chapter files through mutagen's format-agnostic 'easy' interface."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def build_tags(
        self,
        chapter_title: str,
        track_number: int,
        track_total: int,
        metadata: dict[str, Any],
    ) -> dict[str, str]:
        tags = {
            "title": chapter_title,
            "tracknumber": f"{track_number}/{track_total}",
        }
        if album := metadata.get("title"):
            tags["album"] = str(album)
        if artist := (metadata.get("artist") or metadata.get("uploader")):
            tags["artist"] = str(artist)
            tags["albumartist"] = str(artist)
        if upload_date := metadata.get("upload_date"):
            tags["date"] = str(upload_date)[:4]
        return tags

    def tag_file(
        self,
        path: str,
        chapter_title: str,
        track_number: int,
        track_total: int,
        metadata: dict[str, Any],
    ) -> bool:
        """
        Tags `path` in place.

        Returns:
            True if tags were written, False if tagging is disabled or the file
            format is not one mutagen can tag.
        """
        if not self.enabled:
            return False
        try:
            audio = mutagen.File(path, easy=True)
        except MutagenError as e:
            log.debug(f"Could not open '{path}' for tagging: {e}")
            return False
        if audio is None:
            log.debug(f"Skipping tags for '{path}': unsupported format")
            return False
        if audio.tags is None:
            try:
                audio.add_tags()
            except (MutagenError, NotImplementedError) as e:
                log.debug(f"Cannot add tags to '{path}': {e}")
                return False
        if isinstance(audio.tags, ID3):
            log.debug(f"Skipping tags for '{path}': no simple tag interface")
            return False

        for key, value in self.build_tags(
            chapter_title, track_number, track_total, metadata
        ).items():
            try:
                audio[key] = value
            except (KeyError, ValueError):
                log.debug(f"Tag '{key}' is not supported for '{path}'")
        try:
            audio.save()
        except MutagenError as e:
            log.warning(f"Could not save tags to '{path}': {e}")
            return False
        return True
