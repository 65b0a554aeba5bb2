"""
Handles cutting the downloaded audio into one file per chapter.
"""

import logging
import math
from pathlib import Path
from typing import Any

from slycer.core.display import DisplaySink
from slycer.core.runner import run_command
from slycer.exceptions import ChildFailure, OutputDirError, SplitError
from slycer.media.tagger import Tagger
from slycer.models.config import SlycerConfig
from slycer.models.media import Chapter, CommandSpec
from slycer.models.stats import SessionStats
from slycer.utils.formatting import format_seconds, format_timestamp
from slycer.utils.path import (
    build_output_filename,
    compute_pad_width,
    create_dir,
    make_title_prefix,
    sanitize_title,
)

log = logging.getLogger(__name__)


class ChapterSplitter:
    """
    Cuts chapters out of a single source file with ffmpeg (stream copy, no
    re-encoding), names the results and tags them.
    """

    def __init__(self, config: SlycerConfig, tagger: Tagger, stats: SessionStats):
        self.config = config
        self.tagger = tagger
        self.stats = stats

    def output_path_for(
        self,
        index: int,
        chapter: Chapter,
        pad_width: int,
        title_prefix: str | None,
    ) -> Path:
        safe_title = sanitize_title(chapter.title) or f"part-{index + 1}"
        filename = build_output_filename(
            index,
            pad_width,
            safe_title,
            self.config.audio_format,
            prefix=self.config.prefix,
            title_prefix=title_prefix,
            numbers=self.config.numbers,
        )
        if self.config.dest:
            return Path(self.config.dest) / filename
        return Path(filename)

    def build_ffmpeg_command(
        self, source: Path, destination: Path, start: float, duration: float
    ) -> CommandSpec:
        return CommandSpec(
            self.config.ffmpeg_binary,
            [
                "-hide_banner",
                "-loglevel",
                "error",
                "-y",
                "-ss",
                format_seconds(start),
                "-t",
                format_seconds(duration),
                "-i",
                str(source),
                "-c",
                "copy",
                str(destination),
            ],
        )

    def split(
        self,
        source: Path,
        chapters: list[Chapter],
        metadata: dict[str, Any],
        sink: DisplaySink,
    ) -> list[Path]:
        """
        Cuts every chapter of `source`, advancing `sink` once per chapter.

        Chapters shorter than the configured minimum are skipped.

        Returns:
            The paths of the files that were written.

        Raises:
            OutputDirError: If the destination directory cannot be created.
            SplitError: If ffmpeg fails on a chapter.
        """
        if self.config.dest:
            try:
                create_dir(Path(self.config.dest))
            except OSError as e:
                raise OutputDirError(
                    f"Failed to create destination directory '{self.config.dest}': {e}"
                ) from e

        pad_width = compute_pad_width(self.config.numbers, len(chapters))
        title_prefix = make_title_prefix(metadata) if self.config.prefix_name else None
        min_seconds = self.config.min_chapter_seconds
        written: list[Path] = []

        for index, chapter in enumerate(chapters):
            out_path = self.output_path_for(index, chapter, pad_width, title_prefix)
            start = max(chapter.start_time, 0.0)
            duration = max(chapter.duration, 0.0)

            if not math.isfinite(duration) or duration < min_seconds:
                sink.println(
                    f"Skipping '{chapter.title}' (<{min_seconds:g}s duration)",
                    style="bright_black",
                )
                self.stats.chapters_skipped += 1
                sink.inc(1)
                continue

            try:
                run_command(
                    self.build_ffmpeg_command(source, out_path, start, duration)
                )
            except ChildFailure as e:
                raise SplitError(chapter.title, e) from e

            if self.tagger.tag_file(
                str(out_path), chapter.title, index + 1, len(chapters), metadata
            ):
                self.stats.tracks_tagged += 1

            log.debug(
                f"Wrote chapter {index + 1}/{len(chapters)} "
                f"[{format_timestamp(start)}-{format_timestamp(start + duration)}]"
                f" to '{out_path}'"
            )
            self.stats.chapters_split += 1
            written.append(out_path)
            sink.inc(1)

        return written
