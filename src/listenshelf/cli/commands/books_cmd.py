# ABOUTME: The `listenshelf books` command for listing the reading history.
# ABOUTME: Groups a category by year and joins each book with its cached cover and author.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from listenshelf.cli.options import category_choice, covers_map_option, export_option
from listenshelf.config import CATEGORIES
from listenshelf.covers.store import CoverStore
from listenshelf.export.loader import ExportReadError, load_export
from listenshelf.export.normalizer import group_by_year, load_category
from listenshelf.export.types import YearGroup


@click.command("books")
@export_option
@covers_map_option
@click.option(
    "-c",
    "--category",
    type=category_choice,
    default="finished",
    show_default=True,
    help="Export category to list.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output year groups as JSON for a page renderer.",
)
def books(export_path: Path, covers_map: Path, category: str, json_output: bool) -> None:
    """List books of one category grouped by year, newest first."""
    console = Console()
    try:
        data = load_export(export_path)
    except ExportReadError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        console.print("[dim]No books to show.[/dim]")
        raise SystemExit(1) from exc

    groups = group_by_year(load_category(data, CATEGORIES[category]))
    store = CoverStore.load(covers_map)

    if json_output:
        _print_json(category, groups, store)
        return

    _print_rich(console, category, groups, store)


def _print_json(category: str, groups: list[YearGroup], store: CoverStore) -> None:
    """Print year groups as JSON, each book carrying its cover path and author."""
    years = []
    for group in groups:
        books_data = []
        for record in group.books:
            entry = store.get(record.id) if record.id else None
            books_data.append(
                {
                    "id": record.id,
                    "title": record.title,
                    "date": record.date,
                    "year": record.year,
                    "isbns": record.isbns,
                    "cover": entry.path if entry else None,
                    "author": entry.author if entry else None,
                }
            )
        years.append({"year": group.year, "books": books_data})
    click.echo(json_lib.dumps({"category": category, "years": years}, indent=2, ensure_ascii=False))


def _print_rich(
    console: Console, category: str, groups: list[YearGroup], store: CoverStore
) -> None:
    """Print one table per year."""
    if not groups:
        console.print("[dim]No books yet.[/dim]")
        return

    total = 0
    for group in groups:
        count = len(group.books)
        total += count
        table = Table(title=f"{group.year} ({count} book{'s' if count != 1 else ''})")
        table.add_column("Title", style="bold")
        table.add_column("Author")
        table.add_column("Date", width=10)
        table.add_column("Cover", width=5)

        for record in group.books:
            entry = store.get(record.id) if record.id else None
            author = entry.author if entry and entry.author else None
            has_cover = entry is not None and entry.path is not None
            table.add_row(
                escape(record.title or ""),
                escape(author) if author else "[dim]unknown[/dim]",
                (record.date or "")[:10],
                "yes" if has_cover else "[dim]no[/dim]",
            )
        console.print(table)

    console.print(f"\n[dim]{total} {category} book(s)[/dim]")
