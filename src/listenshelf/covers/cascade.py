# ABOUTME: Cover resolution cascade: ordered lookup strategies tried until one finds a cover.
# ABOUTME: Falls back to an author-only lookup when no strategy yields an image.

import logging
from collections.abc import Callable

from listenshelf.covers.provider import AuthorLookupSource, TitleSearchSource
from listenshelf.covers.types import BookCandidate, Resolution, ResolutionState, SourceResult

logger = logging.getLogger(__name__)

# A strategy takes a book and reports what one source made of it.
Strategy = Callable[[BookCandidate], SourceResult]


def each_isbn(lookup: Callable[[str], SourceResult]) -> Strategy:
    """Build a strategy that tries an ISBN lookup for every ISBN in order.

    The first found cover wins. Failures are collected so the caller can
    log them, but never stop the loop.
    """

    def attempt(book: BookCandidate) -> SourceResult:
        errors: list[str] = []
        for isbn in book.isbns:
            result = lookup(isbn)
            if result.found:
                return result
            if result.failed:
                errors.append(f"{isbn}: {result.error}")
        return SourceResult(error="; ".join(errors) or None)

    return attempt


class CoverResolver:
    """Runs the cover cascade for a single book.

    Order: primary source by each ISBN, secondary source by each ISBN,
    primary source title search. If all miss, tries to at least learn the
    author: secondary by each ISBN, then primary title search.
    """

    def __init__(self, primary: TitleSearchSource, secondary: AuthorLookupSource) -> None:
        self._primary = primary
        self._secondary = secondary
        self._strategies: list[tuple[ResolutionState, Strategy]] = [
            (ResolutionState.PRIMARY_ISBN, each_isbn(primary.cover_by_isbn)),
            (ResolutionState.SECONDARY_ISBN, each_isbn(secondary.cover_by_isbn)),
            (ResolutionState.TITLE_SEARCH, lambda book: primary.cover_by_title(book.title)),
        ]

    @property
    def strategies(self) -> list[tuple[ResolutionState, Strategy]]:
        return list(self._strategies)

    def resolve(self, book: BookCandidate) -> Resolution:
        """Resolve a cover and author for one book. Never raises on source errors."""
        failures: list[str] = []
        for state, strategy in self._strategies:
            result = strategy(book)
            if result.found:
                return Resolution(
                    state=state, cover=result.cover, author=result.author, failures=failures
                )
            if result.failed:
                logger.debug("%s failed for %s: %s", state.value, book.id, result.error)
                failures.append(f"{state.value}: {result.error}")

        author = self._resolve_author(book, failures)
        return Resolution(state=ResolutionState.AUTHOR_ONLY, author=author, failures=failures)

    def _resolve_author(self, book: BookCandidate, failures: list[str]) -> str | None:
        """Find an author without a cover. MUTATES failures with any errors seen."""
        for isbn in book.isbns:
            result = self._secondary.author_by_isbn(isbn)
            if result.author:
                return result.author
            if result.failed:
                failures.append(f"author {isbn}: {result.error}")

        result = self._primary.author_by_title(book.title)
        if result.failed:
            failures.append(f"author title: {result.error}")
        return result.author
