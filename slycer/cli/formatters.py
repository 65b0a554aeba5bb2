"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from slycer.exceptions import ChildFailure
from slycer.models.stats import SessionStats
from slycer.utils.formatting import format_duration


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "SpawnError": [
            "• Make sure yt-dlp and ffmpeg are installed and on your PATH.",
            "• Run `slycer check` to see which tools are missing.",
            "• Re-run with --yes to install missing tools automatically.",
        ],
        "DependencyError": [
            "• Install yt-dlp and ffmpeg with your package manager.",
            "• Re-run with --yes to skip the confirmation prompt.",
        ],
        "ChildFailure": [
            "• The log lines printed above show what the tool reported.",
            "• yt-dlp may be outdated. Try `yt-dlp -U` or upgrading its package.",
            "• Check that the URL is reachable in a browser.",
        ],
        "SplitError": [
            "• The downloaded file may be incomplete. Run again with --keep.",
            "• Try a different --audio-format.",
        ],
        "NoChaptersError": [
            "• This video has no chapter markers to split on.",
            "• Check the video description for timestamps.",
        ],
        "MetadataError": [
            "• yt-dlp could not read the video metadata.",
            "• Try `yt-dlp -J <URL>` manually to inspect the output.",
        ],
        "ConfigurationError": [
            "• Check the values in your configuration file.",
            "• Run `slycer init --force` to write a fresh default config.",
        ],
        "OutputDirError": [
            "• Check that the --dest path is not a file and that you can write to it.",
        ],
        "InputError": [
            "• Pass a single https:// URL or a file with one URL per line.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    if isinstance(error, ChildFailure) and error.returncode < 0:
        content.add_row(
            Text(f"Terminated by signal {-error.returncode}", style="yellow")
        )
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the effective configuration."""
    console = Console()
    content = ""
    for key, value in sorted(config_data.items()):
        content += f"{key} = {'' if value is None else value}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_dependency_table(status: dict[str, str | None]):
    """Displays where each required tool was found."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    for name, location in status.items():
        if location:
            table.add_row(f"{name}:", f"[green]✓[/green] [dim]{location}[/dim]")
        else:
            table.add_row(f"{name}:", "[red]✗ not found[/red]")

    all_found = all(status.values())
    console.print(
        Panel(
            table,
            title=(
                "[bold green]✓ Dependencies[/bold green]"
                if all_found
                else "[bold red]✗ Dependencies[/bold red]"
            ),
            border_style="green" if all_found else "red",
        )
    )


def print_summary_panel(stats: SessionStats, duration_s: float):
    """Displays the final summary of the session."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("✓ URLs Done:", f"[bold green]{stats.urls_processed}[/bold green]")
    stats_table.add_row("✓ Chapters:", f"[green]{stats.chapters_split}[/green]")
    if stats.tracks_tagged > 0:
        stats_table.add_row("Tagged:", f"[green]{stats.tracks_tagged}[/green]")

    skip_sections = []
    if stats.urls_skipped > 0:
        skip_sections.append(f"[yellow]{stats.urls_skipped} (invalid URL)[/yellow]")
    if stats.chapters_skipped > 0:
        skip_sections.append(
            f"[yellow]{stats.chapters_skipped} (short chapter)[/yellow]"
        )
    if skip_sections:
        stats_table.add_row("○ Skipped:", " + ".join(skip_sections))

    if stats.urls_failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.urls_failed}[/bold red]")

    stats_table.add_row("", "")  # Spacer
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    if stats.urls_failed:
        title = "⚠ [bold]Finished With Errors[/bold]"
        border_color = "yellow"
    else:
        title = "✂ [bold]Split Complete![/bold]"
        border_color = "green"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print()
