# ABOUTME: The `listenshelf fetch-covers` command for pre-fetching cover art.
# ABOUTME: Resolves covers and authors for every exported book and caches them locally.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)

from listenshelf.cli.options import category_choice, covers_map_option, export_option
from listenshelf.config import (
    DEFAULT_COVERS_DIR,
    DEFAULT_DELAY,
    DEFAULT_FETCH_CATEGORIES,
    FetchSettings,
)
from listenshelf.covers.cascade import CoverResolver
from listenshelf.covers.googlebooks import GoogleBooksSource
from listenshelf.covers.http import ShelfHttpClient
from listenshelf.covers.openlibrary import OpenLibrarySource
from listenshelf.covers.pipeline import BookOutcome, collect_candidates, fetch_covers
from listenshelf.covers.store import CoverStore
from listenshelf.covers.types import ResolutionState
from listenshelf.export.loader import ExportReadError, load_export

_STATE_LABELS = {
    ResolutionState.PRIMARY_ISBN: "Open Library (ISBN)",
    ResolutionState.SECONDARY_ISBN: "Google Books (ISBN)",
    ResolutionState.TITLE_SEARCH: "title search",
}


def _create_resolver(settings: FetchSettings) -> CoverResolver:
    """Create the default cascade: Open Library first, Google Books second."""
    http_client = ShelfHttpClient()
    return CoverResolver(
        primary=OpenLibrarySource(http_client, min_bytes=settings.primary_min_bytes),
        secondary=GoogleBooksSource(http_client, min_bytes=settings.secondary_min_bytes),
    )


def _make_progress(console: Console) -> Progress:
    """Create a Rich progress bar for the fetch loop."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
    )


def _report(console: Console, position: int, total: int, outcome: BookOutcome) -> None:
    """Print one status line per book."""
    progress = f"[dim]\\[{position}/{total}][/dim]"
    title = escape(outcome.candidate.title)
    state = outcome.state
    if state is ResolutionState.CACHED:
        console.print(f"{progress} SKIP: {title} [dim](already downloaded)[/dim]")
    elif state is ResolutionState.NO_COVER_WITH_AUTHOR:
        console.print(f"{progress} SKIP: {title} [dim](no cover, has author)[/dim]")
    elif outcome.has_cover:
        console.print(f"{progress} {title} [green]found via {_STATE_LABELS[state]}[/green]")
    elif outcome.entry.author:
        console.print(
            f"{progress} {title} [yellow]no cover[/yellow], author: {escape(outcome.entry.author)}"
        )
    else:
        console.print(f"{progress} {title} [yellow]no cover, no author[/yellow]")


@click.command("fetch-covers")
@export_option
@covers_map_option
@click.option(
    "--covers-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_COVERS_DIR,
    show_default=True,
    help="Directory for downloaded cover images.",
)
@click.option(
    "--delay",
    type=click.FloatRange(min=0.0),
    default=DEFAULT_DELAY,
    show_default=True,
    help="Seconds to wait between books that need lookups.",
)
@click.option(
    "-c",
    "--category",
    "categories",
    type=category_choice,
    multiple=True,
    help="Export category to fetch covers for (repeatable, default: finished and saved).",
)
@click.option(
    "--prune",
    is_flag=True,
    default=False,
    help="Drop covers map entries for books no longer in the export.",
)
@click.option(
    "--incremental/--no-incremental",
    default=True,
    help="Save the covers map after every looked-up book (default: --incremental).",
)
def fetch_covers_command(
    export_path: Path,
    covers_map: Path,
    covers_dir: Path,
    delay: float,
    categories: tuple[str, ...],
    prune: bool,
    incremental: bool,
) -> None:
    """Fetch cover images and authors for the books in an export."""
    console = Console()
    settings = FetchSettings(
        covers_dir=covers_dir,
        covers_map=covers_map,
        delay=delay,
        incremental=incremental,
    )

    try:
        data = load_export(export_path)
    except ExportReadError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    candidates = collect_candidates(data, categories or DEFAULT_FETCH_CATEGORIES)
    console.print(f"Found [bold]{len(candidates)}[/bold] unique book(s)\n")
    if not candidates:
        return

    store = CoverStore.load(settings.covers_map)
    if prune:
        dropped = store.prune(c.id for c in candidates)
        if dropped:
            console.print(f"[dim]Pruned {len(dropped)} stale covers map entry(s).[/dim]")

    resolver = _create_resolver(settings)
    progress = _make_progress(console)
    task_id = progress.add_task("Fetching covers", total=len(candidates))

    def on_progress(position: int, total: int, outcome: BookOutcome) -> None:
        _report(progress.console, position, total, outcome)
        progress.advance(task_id)

    with progress:
        summary = fetch_covers(
            candidates,
            store,
            resolver,
            covers_dir=settings.covers_dir,
            base_dir=settings.base_dir,
            delay=settings.delay,
            on_progress=on_progress,
            incremental=settings.incremental,
        )

    console.print(
        f"\nDone! Found covers for [bold]{summary.found}/{summary.total}[/bold] "
        f"books ({summary.percent_found}%)"
    )
    if summary.skipped:
        console.print(f"[dim]{summary.skipped} book(s) reused from earlier runs.[/dim]")
    console.print(f"Covers saved to: {settings.covers_dir}")
    console.print(f"Mapping saved to: {settings.covers_map}")
