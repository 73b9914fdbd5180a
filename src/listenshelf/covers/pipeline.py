# ABOUTME: Sequential cover fetch loop over the books of an export.
# ABOUTME: Skips books resolved by earlier runs, throttles between lookups, and persists results.

import hashlib
import logging
import os
import re
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from listenshelf.config import CATEGORIES, DEFAULT_DELAY, DEFAULT_FETCH_CATEGORIES
from listenshelf.covers.cascade import CoverResolver
from listenshelf.covers.store import CoverStore
from listenshelf.covers.types import BookCandidate, CoverEntry, ResolutionState
from listenshelf.export.loader import extract_category
from listenshelf.export.normalizer import normalize_entry

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9_.-]")


@dataclass
class BookOutcome:
    """What happened to one book during a fetch run."""

    candidate: BookCandidate
    state: ResolutionState
    entry: CoverEntry

    @property
    def has_cover(self) -> bool:
        return self.entry.path is not None


@dataclass
class FetchSummary:
    """Summary of a fetch run."""

    total: int = 0
    found: int = 0
    not_found: int = 0
    skipped: int = 0
    outcomes: list[BookOutcome] = field(default_factory=list)

    @property
    def resolved(self) -> int:
        """Books that needed network lookups this run."""
        return self.total - self.skipped

    @property
    def percent_found(self) -> int:
        return round(self.found / self.total * 100) if self.total else 0


# Called after each book with (position, total, outcome). Position is 1-based.
ProgressFn = Callable[[int, int, BookOutcome], None]


def dedupe_candidates(candidates: Iterable[BookCandidate]) -> list[BookCandidate]:
    """Drop repeated book ids, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[BookCandidate] = []
    for candidate in candidates:
        if candidate.id in seen:
            continue
        seen.add(candidate.id)
        unique.append(candidate)
    return unique


def collect_candidates(
    data: Any, categories: Iterable[str] = DEFAULT_FETCH_CATEGORIES
) -> list[BookCandidate]:
    """Build the unique list of books to resolve from a parsed export.

    Entries need an id and a title. Dates are irrelevant here, so undated
    books still get covers.
    """
    candidates: list[BookCandidate] = []
    for name in categories:
        category = CATEGORIES[name]
        for raw in extract_category(data, category.bucket):
            record = normalize_entry(raw, category.date_field, category.name)
            if not record.id or not record.title:
                continue
            candidates.append(
                BookCandidate(id=record.id, title=record.title, isbns=tuple(record.isbns))
            )
    return dedupe_candidates(candidates)


def cover_filename(book_id: str) -> str:
    """Deterministic image file name for a book id, distinct per id.

    Safe ids are used as-is. Ids with other characters are sanitized and get
    a hash suffix after "~", which never occurs in a safe id, so "a/b" and
    "a_b" map to different files.
    """
    safe = _UNSAFE_FILENAME_RE.sub("_", book_id)
    if safe == book_id:
        return f"{safe}.jpg"
    digest = hashlib.sha1(book_id.encode("utf-8")).hexdigest()[:12]
    return f"{safe}~{digest}.jpg"


def _stored_path(cover_file: Path, base_dir: Path | None) -> str:
    if base_dir is None:
        return cover_file.as_posix()
    return Path(os.path.relpath(cover_file, base_dir)).as_posix()


def _skip_entry(
    cover_file: Path, previous: CoverEntry | None, base_dir: Path | None
) -> tuple[ResolutionState, CoverEntry] | None:
    """Decide whether an earlier run already settled this book."""
    if cover_file.exists():
        author = previous.author if previous is not None else None
        return ResolutionState.CACHED, CoverEntry(_stored_path(cover_file, base_dir), author)
    # A failed image search is not retried once the author is known.
    if previous is not None and previous.path is None and previous.author:
        return ResolutionState.NO_COVER_WITH_AUTHOR, previous
    return None


def fetch_covers(
    candidates: list[BookCandidate],
    store: CoverStore,
    resolver: CoverResolver,
    *,
    covers_dir: Path,
    base_dir: Path | None = None,
    delay: float = DEFAULT_DELAY,
    sleep: Callable[[float], None] = time.sleep,
    on_progress: ProgressFn | None = None,
    incremental: bool = True,
) -> FetchSummary:
    """Resolve covers for every candidate, one book at a time.

    MUTATES store: each book's entry is replaced with the outcome of this
    run. Books already settled by an earlier run cost no network calls.
    After each book that did need lookups, the store is saved (when
    incremental) and the loop pauses for delay seconds. The store is saved
    once more at the end.

    Args:
        candidates: Books to resolve. Duplicate ids are resolved once.
        store: Covers map from previous runs.
        resolver: Cascade used for books that need lookups.
        covers_dir: Directory the images are written to.
        base_dir: Directory stored paths are made relative to.
        delay: Pause in seconds between resolved books.
        sleep: Sleep function, injectable for tests.
        on_progress: Optional callback invoked after each book.
        incremental: Save the store after every resolved book.

    Returns:
        FetchSummary with counts and per-book outcomes.
    """
    covers_dir.mkdir(parents=True, exist_ok=True)
    books = dedupe_candidates(candidates)
    summary = FetchSummary(total=len(books))

    for position, book in enumerate(books, start=1):
        cover_file = covers_dir / cover_filename(book.id)
        skip = _skip_entry(cover_file, store.get(book.id), base_dir)

        if skip is not None:
            state, entry = skip
            summary.skipped += 1
        else:
            resolution = resolver.resolve(book)
            state = resolution.state
            if resolution.cover is not None:
                cover_file.write_bytes(resolution.cover.data)
                entry = CoverEntry(_stored_path(cover_file, base_dir), resolution.author)
                logger.info(
                    "Cover for %s via %s (%s)", book.id, state.value, resolution.cover.source
                )
            else:
                entry = CoverEntry(None, resolution.author)
                logger.info("No cover for %s, author %s", book.id, resolution.author)

        store.set(book.id, entry)
        if entry.path is not None:
            summary.found += 1
        else:
            summary.not_found += 1

        outcome = BookOutcome(candidate=book, state=state, entry=entry)
        summary.outcomes.append(outcome)
        if on_progress is not None:
            on_progress(position, summary.total, outcome)

        if skip is None:
            if incremental:
                store.save()
            if delay > 0:
                sleep(delay)

    store.save()
    return summary
