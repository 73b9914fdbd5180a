# ABOUTME: Google Books cover source, the secondary source of the cascade.
# ABOUTME: Looks volumes up by ISBN and downloads the largest offered image variant.

import logging
from typing import Any

from listenshelf.config import SECONDARY_MIN_BYTES
from listenshelf.covers.http import CoverFetchError, HttpClient
from listenshelf.covers.types import CoverImage, SourceResult

logger = logging.getLogger(__name__)

_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"

# Largest first.
_IMAGE_VARIANTS = ("large", "medium", "thumbnail", "smallThumbnail")


def parse_first_volume(data: dict[str, Any]) -> dict[str, Any] | None:
    """Return the volumeInfo of the first item in a volumes response."""
    items = data.get("items")
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return None
    info = items[0].get("volumeInfo")
    return info if isinstance(info, dict) else None


def parse_first_author(info: dict[str, Any]) -> str | None:
    authors = info.get("authors")
    if isinstance(authors, list) and authors and isinstance(authors[0], str) and authors[0]:
        return authors[0]
    return None


def select_image_url(info: dict[str, Any]) -> str | None:
    """Pick the largest image link and clean it up for download.

    Links come back as http with a page-curl effect; both are undone.
    """
    links = info.get("imageLinks")
    if not isinstance(links, dict):
        return None
    for variant in _IMAGE_VARIANTS:
        url = links.get(variant)
        if isinstance(url, str) and url:
            return url.replace("http://", "https://").replace("&edge=curl", "")
    return None


class GoogleBooksSource:
    """Cover source backed by the Google Books volumes API."""

    def __init__(self, http_client: HttpClient, *, min_bytes: int = SECONDARY_MIN_BYTES) -> None:
        self._http = http_client
        self._min_bytes = min_bytes

    @property
    def name(self) -> str:
        return "googlebooks"

    def cover_by_isbn(self, isbn: str) -> SourceResult:
        """Find a cover for an ISBN via the first matching volume."""
        try:
            info = self._lookup(isbn)
        except CoverFetchError as exc:
            logger.debug("Google Books lookup failed for %s: %s", isbn, exc)
            return SourceResult(error=str(exc))
        if info is None:
            return SourceResult()

        url = select_image_url(info)
        if url is None:
            return SourceResult()
        try:
            data = self._http.get_bytes(url)
        except CoverFetchError as exc:
            logger.debug("Google Books image fetch failed for %s: %s", url, exc)
            return SourceResult(error=str(exc))
        if len(data) < self._min_bytes:
            logger.debug("Rejecting %d-byte placeholder from %s", len(data), url)
            return SourceResult()

        return SourceResult(
            cover=CoverImage(data=data, source=self.name, url=url),
            author=parse_first_author(info),
        )

    def author_by_isbn(self, isbn: str) -> SourceResult:
        """Look up only the author of the volume with this ISBN."""
        try:
            info = self._lookup(isbn)
        except CoverFetchError as exc:
            logger.debug("Google Books author lookup failed for %s: %s", isbn, exc)
            return SourceResult(error=str(exc))
        if info is None:
            return SourceResult()
        return SourceResult(author=parse_first_author(info))

    def _lookup(self, isbn: str) -> dict[str, Any] | None:
        data = self._http.get(_VOLUMES_URL, params={"q": f"isbn:{isbn}"})
        return parse_first_volume(data)
