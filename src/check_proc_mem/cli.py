"""Command-line entry point for check_proc_mem."""

import logging
import sys
from typing import NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from check_proc_mem.deadline import Deadline
from check_proc_mem.errors import ProbeError
from check_proc_mem.models import ProbeConfig, SnapshotSource, Status
from check_proc_mem.probe import run_check
from check_proc_mem.report import render_error
from check_proc_mem.snapshot import get_page_size

VERSION = "0.2.0"

HELP = """\
Calculates the total resident set size (Rss) used by the supplied process
names and all other processes sharing the same process group id.

Rss counts shared plus unshared pages, so pages shared between processes
are counted more than once, and swapped out pages are not counted at all.
"""

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console(highlight=False, emoji=False, soft_wrap=True)
logger = logging.getLogger("check_proc_mem")


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr; stdout carries the plugin line."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _version_callback(value: bool) -> None:
    """Print the plugin version and stop before any other option is handled."""
    if value:
        typer.echo(VERSION)
        raise typer.Exit()


def _fail(message: str) -> NoReturn:
    """Print an UNKNOWN error line and exit 3."""
    typer.echo(render_error(message))
    raise typer.Exit(int(Status.UNKNOWN))


@app.command(help=HELP)
def check(
    proc_name: list[str] | None = typer.Option(
        None,
        "--proc-name",
        "-P",
        help="Process name (e.g. httpd, php-fpm); repeat or comma-separate. "
        "Punctuation is ignored when matching.",
    ),
    warning: str | None = typer.Option(
        None, "--warning", "-w", help="Warning threshold in the chosen unit."
    ),
    critical: str | None = typer.Option(
        None, "--critical", "-c", help="Critical threshold in the chosen unit."
    ),
    timeout: int = typer.Option(
        10, "--timeout", "-t", help="Timeout in seconds, 0 to disable."
    ),
    unit: str = typer.Option(
        "KB", "--unit", "-u", help="Unit of measure (e.g. KB, MB, Mb for megabits)."
    ),
    source: SnapshotSource = typer.Option(
        SnapshotSource.PROCFS, "--source", "-s", help="Where to read processes from."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output."),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Plugin version.",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Report the resident memory of the named processes and their groups."""
    _configure_logging(verbose)

    try:
        page_size = get_page_size()
        config = ProbeConfig.from_options(
            proc_name,
            warning=warning,
            critical=critical,
            timeout=timeout,
            unit=unit,
            verbose=verbose,
            source=source,
        )
        if verbose:
            console.print(f"Alarm at {config.timeout}", markup=False)
        deadline = Deadline(config.timeout)
        result = run_check(config, page_size=page_size, deadline=deadline)
    except ProbeError as e:
        logger.debug("check failed: %r", e)
        _fail(e.message)

    for line in result.details:
        console.print(line, markup=False)
    typer.echo(result.line)
    raise typer.Exit(int(result.status))


def main() -> None:
    """Entry point for the check_proc_mem script."""
    try:
        code = app(standalone_mode=False)
    except typer.TyperException as e:
        # Usage errors must not exit 2, which means CRITICAL to the monitor
        typer.echo(render_error(e.format_message()))
        code = Status.UNKNOWN
    except typer.Abort:
        typer.echo(render_error("aborted"))
        code = Status.UNKNOWN
    sys.exit(int(code or 0))


if __name__ == "__main__":
    main()
