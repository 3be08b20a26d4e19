"""Command module for comparing a source tree against destination trees."""

from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from copycheck.cli.app import app, version_callback
from copycheck.config import get_config
from copycheck.scanner import TreeIndexer
from copycheck.services.report_service import CompareReport, ReportService, ScanSummary
from copycheck.utils import (
    display_path,
    format_duration,
    format_rate,
    format_size,
    setup_logging,
)

console = Console()

USAGE = "Usage: copycheck [--] <source> <dest> [<dest> ...]"

EXIT_ERRORS = 1
EXIT_MISSING = 3


def print_directory(path: str) -> None:
    """Progress line for a visited directory."""
    console.print(display_path(path), markup=False, highlight=False, emoji=False, soft_wrap=True)


def _add_scan_rows(table: Table, label: str, scan: ScanSummary) -> None:
    table.add_row(f"{label} files count:", str(scan.file_count))
    table.add_row(f"{label} files size:", format_size(scan.total_bytes))
    table.add_row(f"{label} files read speed:", format_rate(scan.total_bytes, scan.elapsed))


def display_summary(report: CompareReport, out: Optional[Console] = None) -> None:
    """Print the statistics block that follows a comparison."""
    out = out or console

    table = Table.grid(padding=(0, 1, 0, 0))
    table.add_column(justify="right", no_wrap=True)
    table.add_column(no_wrap=True)

    table.add_row("total read time:", format_duration(report.total_elapsed))
    table.add_row("", "")
    _add_scan_rows(table, "source", report.source)
    table.add_row("", "")
    _add_scan_rows(table, "destination", report.dest)
    table.add_row("", "")
    table.add_row("MISSING files:", str(len(report.missing)))
    if report.errors:
        table.add_row("scan errors:", f"{len(report.errors)} (partial scan)")

    out.print()
    out.print(table)

    if report.report_path is not None:
        out.print()
        out.print(
            f"Writing missing file report to: {display_path(report.report_path)}",
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
    elif report.report_error:
        reason = escape(display_path(report.report_error))
        out.print()
        out.print(
            f"[red]Could not write missing file report:[/red] {reason}",
            emoji=False,
            soft_wrap=True,
        )


def exit_code(report: CompareReport, strict: bool) -> int:
    """Process exit code for a finished comparison."""
    if not strict:
        return 0
    if report.error_count:
        return EXIT_ERRORS
    if report.missing:
        return EXIT_MISSING
    return 0


@app.command()
def compare(
    paths: Optional[List[str]] = typer.Argument(
        None,
        help="SOURCE directory followed by one or more DEST directories.",
        show_default=False,
    ),
    report_name: Optional[str] = typer.Option(
        None,
        "--report-name",
        help="Name of the report written inside SOURCE when files are missing.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Do not print each directory as it is scanned.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every hashed file.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit 1 on scan or report errors and 3 when files are missing.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Report files under SOURCE whose content is not found under any DEST."""
    if not paths or len(paths) < 2:
        typer.echo(USAGE)
        return

    try:
        config = get_config(
            report_name=report_name,
            show_progress=False if quiet else None,
            log_level="DEBUG" if verbose else None,
            log_file=log_file,
        )
    except ValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(2)

    setup_logging(level=config.log_level, log_file=config.log_file)

    source_root, dest_roots = paths[0], paths[1:]
    indexer = TreeIndexer(
        chunk_size=config.chunk_size,
        count_failed_reads=config.count_failed_reads,
        on_directory=print_directory if config.show_progress else None,
    )
    service = ReportService(indexer, report_name=config.report_name)

    report = service.compare(source_root, dest_roots)
    display_summary(report)

    if report.partial:
        logger.warning(f"Scan incomplete: {len(report.errors)} errors")

    code = exit_code(report, strict)
    if code:
        raise typer.Exit(code)
