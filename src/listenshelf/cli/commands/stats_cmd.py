# ABOUTME: The `listenshelf stats` command for headline reading numbers.
# ABOUTME: Shows total finished books, books finished this year, and years of reading.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from listenshelf.cli.options import export_option
from listenshelf.config import CATEGORIES
from listenshelf.export.loader import ExportReadError, load_export
from listenshelf.export.normalizer import load_category
from listenshelf.export.stats import reading_stats


@click.command("stats")
@export_option
def stats(export_path: Path) -> None:
    """Show reading statistics for an export."""
    console = Console()
    try:
        data = load_export(export_path)
    except ExportReadError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    finished = load_category(data, CATEGORIES["finished"])
    saved = load_category(data, CATEGORIES["saved"])
    summary = reading_stats(finished)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=16)
    table.add_column("Value", justify="right")

    table.add_row("Books finished", str(summary.total_books))
    table.add_row(f"In {summary.current_year}", str(summary.this_year_books))
    table.add_row("Years reading", str(summary.years_reading))
    table.add_row("Saved", str(len(saved)))

    console.print(table)
