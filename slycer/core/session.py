"""
The main orchestrator: downloads each URL's audio, reads its chapters and
hands them to the splitter. Handles both a single URL and a batch file of URLs.
"""

import logging
from pathlib import Path

from slycer.cli.progress_manager import ProgressManager
from slycer.core.chapter_splitter import ChapterSplitter
from slycer.core.display import clear_all
from slycer.core.runner import ProcessRunner
from slycer.exceptions import ChildFailure, InputError, NoChaptersError, SlycerError
from slycer.media.metadata import extract_chapters, fetch_metadata_json
from slycer.media.tagger import Tagger
from slycer.models.config import SlycerConfig
from slycer.models.media import CommandSpec
from slycer.models.stats import SessionStats
from slycer.utils.path import read_url_file

log = logging.getLogger(__name__)

DOWNLOAD_MESSAGE = "Downloading audio"
VALID_URL_PREFIX = "https://"


class SplitSession:
    """Orchestrates download, metadata fetch and splitting for a session."""

    def __init__(
        self,
        config: SlycerConfig,
        progress_manager: ProgressManager,
        stats: SessionStats | None = None,
        tagger: Tagger | None = None,
    ):
        self.config = config
        self.progress = progress_manager
        self.stats = stats or SessionStats()
        self.splitter = ChapterSplitter(
            config, tagger or Tagger(config.tag_tracks), self.stats
        )

    def build_download_command(self, url: str) -> CommandSpec:
        return CommandSpec(
            self.config.ytdlp_binary,
            [
                "--extract-audio",
                "--audio-format",
                self.config.audio_format,
                "--no-playlist",
                "--newline",
                "--output",
                self.config.output,
                url,
            ],
        )

    def run(self, source: str) -> SessionStats:
        """
        Processes `source`, which is either a URL or a file of URLs.

        Raises:
            SlycerError: In single-URL mode, whatever stopped the URL. In batch
                mode only an unusable input file raises; per-URL failures are
                reported and counted.
        """
        path = Path(source)
        if path.is_file():
            self._run_batch(path)
        else:
            self.download_and_split(source)
            self.stats.urls_processed += 1
        return self.stats

    def _run_batch(self, path: Path) -> None:
        try:
            urls = read_url_file(path)
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Failed to read input file '{path}': {e}") from e
        if not urls:
            raise InputError("Input file contains no URLs")

        log.debug(f"Read {len(urls)} URLs from '{path}'")
        overall = self.progress.add_overall_bar(len(urls), "Processing URLs")
        overall.set_position(0)

        valid_urls = []
        for url in urls:
            if url.startswith(VALID_URL_PREFIX):
                valid_urls.append(url)
            else:
                overall.println(f"Skipping invalid URL: {url}", style="red")
                self.stats.urls_skipped += 1
                overall.inc(1)

        for url in valid_urls:
            try:
                self.download_and_split(url)
                self.stats.urls_processed += 1
            except SlycerError as e:
                overall.println(f"{url}: {e}", style="red")
                self.stats.record_failure(url, e)
            overall.inc(1)

        overall.finish_with_message("All done")

    def download_and_split(self, url: str) -> list[Path]:
        """
        Downloads the audio of `url`, then splits it by chapter.

        Returns:
            The paths of the chapter files written.
        """
        self._download(url)

        spinner = self.progress.add_spinner("Fetching video metadata")
        try:
            metadata = fetch_metadata_json(url, self.config.ytdlp_binary)
        finally:
            spinner.finish_and_clear()

        chapters = extract_chapters(metadata)
        if not chapters:
            raise NoChaptersError("No chapters found in the video metadata")

        source = Path(self.config.output)
        split_bar = self.progress.add_split_bar(len(chapters), "Splitting audio")
        try:
            written = self.splitter.split(source, chapters, metadata, split_bar)
        finally:
            split_bar.finish_and_clear()

        if not self.config.keep:
            try:
                source.unlink(missing_ok=True)
            except OSError as e:
                log.warning(f"[yellow]Could not remove '{source}':[/] {e}")
        return written

    def _download(self, url: str) -> None:
        """Runs yt-dlp with a live bar; on failure replays its last log lines."""
        dl_bar = self.progress.add_download_bar(DOWNLOAD_MESSAGE)
        log_bank = self.progress.add_log_bank(self.config.log_lines)
        runner = ProcessRunner(
            dl_bar,
            log_bank,
            idle_message=DOWNLOAD_MESSAGE,
            log_capacity=self.config.log_lines,
        )
        try:
            runner.run(self.build_download_command(url))
        except ChildFailure as e:
            clear_all(dl_bar, log_bank)
            self.progress.print_failure(f"yt-dlp failed for {url}", e.recent_lines)
            raise
        finally:
            clear_all(dl_bar, log_bank)
