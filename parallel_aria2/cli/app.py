"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from parallel_aria2 import __version__
from parallel_aria2.core.config_loader import ConfigLoader
from parallel_aria2.core.mirror import MirrorSession
from parallel_aria2.exceptions import ParallelAria2Error, TransferError

from .formatters import (
    build_help_epilog,
    format_error_with_suggestions,
    print_summary_panel,
)

console = Console()
err_console = Console(stderr=True)

logging.basicConfig(
    level="WARNING",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=err_console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
    ],
)
log = logging.getLogger("parallel_aria2")

app = typer.Typer(
    name="parallel-aria2",
    help="Mirror a browsable HTTP/HTTPS directory tree with aria2c.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"parallel-aria2 version {__version__}", highlight=False)
        raise typer.Exit()


def _exit_code(status: int) -> int:
    # A child killed by signal N reports -N; shells report that as 128 + N.
    return status if status >= 0 else 128 - status


@app.command(
    epilog=build_help_epilog(),
    context_settings={
        "allow_extra_args": True,
        # Options are only recognised before USERNAME; later tokens are taken as-is.
        "allow_interspersed_args": False,
        "ignore_unknown_options": True,
        "help_option_names": ["-h", "--help"],
    },
)
def mirror(
    ctx: typer.Context,
    username: str | None = typer.Argument(
        None,
        metavar="USERNAME",
        help="HTTP basic auth username ('-' together with password '-' for none).",
        show_default=False,
    ),
    password: str | None = typer.Argument(
        None,
        metavar="PASSWORD",
        help="HTTP basic auth password.",
        show_default=False,
    ),
    url: str | None = typer.Argument(
        None,
        metavar="URL",
        help="Root HTTP/HTTPS URL to crawl (directory/folder).",
        show_default=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """
    Download every file under a browsable HTTP/HTTPS URL tree with aria2c,
    recreating the remote folder structure under a local root directory.
    """
    try:
        config = ConfigLoader().load(username, password, url, ctx.args)
    except ParallelAria2Error as e:
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    log.setLevel(config.log_level)
    session = MirrorSession(config, console=console)

    try:
        asyncio.run(session.run())
    except TransferError as e:
        print_summary_panel(session.stats, config, console)
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=_exit_code(e.exit_status)) from e
    except ParallelAria2Error as e:
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    print_summary_panel(session.stats, config, console)
