# ABOUTME: Cover-resolution package: sources, cascade, persisted covers map, and fetch loop.
# ABOUTME: Exports the types and entry points used by the CLI.

from listenshelf.covers.cascade import CoverResolver
from listenshelf.covers.googlebooks import GoogleBooksSource
from listenshelf.covers.http import CoverFetchError, HttpClient, ShelfHttpClient
from listenshelf.covers.openlibrary import OpenLibrarySource
from listenshelf.covers.pipeline import FetchSummary, collect_candidates, fetch_covers
from listenshelf.covers.store import CoverStore
from listenshelf.covers.types import BookCandidate, CoverEntry, ResolutionState

__all__ = [
    "BookCandidate",
    "CoverEntry",
    "CoverFetchError",
    "CoverResolver",
    "CoverStore",
    "FetchSummary",
    "GoogleBooksSource",
    "HttpClient",
    "OpenLibrarySource",
    "ResolutionState",
    "ShelfHttpClient",
    "collect_candidates",
    "fetch_covers",
]
