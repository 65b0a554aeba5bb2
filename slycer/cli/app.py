"""
Defines the command-line interface for the application using Typer.
"""

import logging
import os
from contextlib import ExitStack
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from slycer import __version__
from slycer.core.session import SplitSession
from slycer.exceptions import SlycerError
from slycer.media.dependencies import (
    ensure_binaries_present,
    is_affirmative,
    locate_binaries,
)
from slycer.storage.config_manager import ConfigManager

from .formatters import (
    format_error_with_suggestions,
    print_config,
    print_dependency_table,
    print_summary_panel,
)
from .progress_manager import ProgressManager

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("slycer")

app = typer.Typer(
    name="slycer",
    help=(
        "Download audio with yt-dlp and split it by chapters. Use 'slycer"
        " <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "slycer"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the effective configuration."
    ),
):
    """slycer: split audio by chapters"""
    if version:
        console.print(f"[bold]slycer[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("slycer").setLevel(log_level)

    if show_config:
        try:
            config = ConfigManager(CONFIG_FILE).load_config()
        except SlycerError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e
        print_config(CONFIG_FILE, config.model_dump())
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def _confirm(prompt: str) -> bool:
    try:
        return is_affirmative(console.input(Text(prompt)))
    except EOFError:
        return False


@app.command(name="download")
def download_command(
    source: str = typer.Argument(
        ..., help="A video URL, or a file with one URL per line."
    ),
    output: str | None = typer.Option(
        None, "-o", "--output", help="Path of the downloaded (combined) audio file."
    ),
    audio_format: str | None = typer.Option(
        None, "-f", "--audio-format", help="Audio format for yt-dlp extraction."
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Auto-approve installing missing dependencies (yt-dlp, ffmpeg).",
    ),
    keep: bool = typer.Option(
        False,
        "--keep",
        "-k",
        help="Keep the combined audio file instead of deleting it after splitting.",
    ),
    dest: str | None = typer.Option(
        None, "-d", "--dest", help="Destination directory for split tracks."
    ),
    prefix: str | None = typer.Option(
        None, "--prefix", help="Prefix for output track filenames."
    ),
    numbers: bool = typer.Option(
        False, "--numbers", help="Prepend zero-padded track numbers to filenames."
    ),
    prefix_name: bool = typer.Option(
        False, "--prefix-name", help="Use the (shortened) video title as prefix."
    ),
    tag_tracks: bool | None = typer.Option(
        None,
        "--tag/--no-tag",
        help="Write title and track number tags to the split tracks.",
    ),
):
    """Download audio and split it into one file per chapter."""
    cli_options = {
        "output": output,
        "audio_format": audio_format,
        "yes": yes or None,
        "keep": keep or None,
        "dest": dest,
        "prefix": prefix,
        "numbers": numbers or None,
        "prefix_name": prefix_name or None,
        "tag_tracks": tag_tracks,
    }

    try:
        config = ConfigManager(CONFIG_FILE).load_config(cli_options)

        with ExitStack() as stack:

            def spinner_factory(message: str):
                progress = stack.enter_context(ProgressManager(console))
                return progress.add_spinner(message)

            ensure_binaries_present(
                config.yes,
                _confirm,
                spinner_factory,
                (config.ytdlp_binary, config.ffmpeg_binary),
            )

        with ProgressManager(console) as progress_manager:
            session = SplitSession(config, progress_manager)
            stats = session.run(source)
    except SlycerError as e:
        console.print(format_error_with_suggestions(e))
        log.debug("Full traceback:", exc_info=True)
        raise typer.Exit(code=1) from e

    print_summary_panel(stats, stats.elapsed)
    if stats.urls_failed:
        raise typer.Exit(code=1)


@app.command()
def init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
    ),
):
    """Write a configuration file with the default settings."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    try:
        ConfigManager(CONFIG_FILE).save_new_config()
    except SlycerError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


@app.command()
def check():
    """Check that yt-dlp and ffmpeg can be found."""
    try:
        config = ConfigManager(CONFIG_FILE).load_config()
    except SlycerError as e:
        console.print(f"[red]✗ Configuration is invalid: {e}[/red]")
        raise typer.Exit(code=1) from e

    status = locate_binaries((config.ytdlp_binary, config.ffmpeg_binary))
    print_dependency_table(status)
    if not all(status.values()):
        raise typer.Exit(code=1)
