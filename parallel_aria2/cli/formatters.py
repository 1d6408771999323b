"""
Functions for formatting and displaying data in the console using Rich.
"""

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from parallel_aria2.models.config import RunConfig
from parallel_aria2.models.stats import SessionStats
from parallel_aria2.transfer import DEFAULT_ARIA2_OPTIONS
from parallel_aria2.utils.formatting import format_duration


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "UsageError": [
            "• Usage: parallel-aria2 <username> <password> <URL> [aria2c-args...]",
            "• Use '-' for both username and password to crawl anonymously.",
            "• Run with --help for more details.",
        ],
        "DependencyError": [
            "• Install the missing tool with your package manager.",
            "• Set PARALLEL_ARIA2_DISCOVERY=listing to crawl without wget.",
        ],
        "DiscoveryError": [
            "• Check that the URL points at a browsable directory listing.",
            "• Verify the username and password.",
            "• The directory tree may simply be empty.",
        ],
        "FilesystemError": [
            "• Check permissions on DOWNLOAD_ROOT_DIR and DOWNLOAD_LIST_FILE.",
            "• Make sure the disk is not full.",
        ],
        "ManifestEmptyError": [
            "• Only directory index pages were found, no files.",
            "• Make sure the URL is the directory that holds the files.",
        ],
        "ConfigurationError": [
            "• PARALLEL_ARIA2_DISCOVERY must be 'wget' or 'listing'.",
            "• PARALLEL_ARIA2_LOG_LEVEL must be a logging level such as DEBUG.",
        ],
        "TransferError": [
            "• Some files may not have been downloaded; re-run to resume them.",
            "• Check aria2c's summary above for the failing URLs.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run with PARALLEL_ARIA2_LOG_LEVEL=DEBUG for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
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


def build_help_epilog() -> str:
    """Describes the environment variables and aria2c defaults for --help."""
    defaults = " ".join(DEFAULT_ARIA2_OPTIONS)
    return (
        "Any arguments after URL are passed to aria2c verbatim and override the"
        f" defaults ({defaults} -V).\n\n"
        "Environment: DOWNLOAD_LIST_FILE (default downloadlist.txt),"
        " DOWNLOAD_ROOT_DIR (default .), PARALLEL_ARIA2_DISCOVERY (wget or"
        " listing), PARALLEL_ARIA2_LOG_LEVEL (default INFO)."
    )


def print_summary_panel(
    stats: SessionStats, config: RunConfig, console: Console | None = None
):
    """Displays the final summary of the mirror session."""
    console = console or Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Discovered:", f"[green]{stats.urls_discovered}[/green]")
    stats_table.add_row("✓ Queued:", f"[bold green]{stats.entries_accepted}[/bold green]")
    if stats.urls_skipped > 0:
        stats_table.add_row("○ Skipped:", f"[yellow]{stats.urls_skipped}[/yellow]")
    stats_table.add_row("Directories:", str(stats.directories_created))
    stats_table.add_row("Root:", f"[dim]{config.download_root}[/dim]")
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(stats.duration_s)}[/blue]")

    if stats.transfer_status == 0:
        title = "[bold]Mirror Complete![/bold]"
        border_color = "green"
    else:
        stats_table.add_row(
            "✗ aria2c status:", f"[bold red]{stats.transfer_status}[/bold red]"
        )
        title = "[bold]Mirror Incomplete[/bold]"
        border_color = "red"

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
