# ABOUTME: Open Library cover source, the primary source of the cascade.
# ABOUTME: Looks covers up by ISBN (search, then direct image) and by cleaned title.

import logging

from listenshelf.config import PRIMARY_MIN_BYTES
from listenshelf.covers.http import CoverFetchError, HttpClient
from listenshelf.covers.openlibrary_parser import (
    build_cover_id_url,
    build_cover_url,
    clean_title,
    parse_cover_id,
    parse_first_author,
    parse_search_docs,
)
from listenshelf.covers.types import CoverImage, SourceResult

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"
_TITLE_SEARCH_LIMIT = 5


class OpenLibrarySource:
    """Cover source backed by the Open Library search and covers APIs.

    Every public method returns a SourceResult. Fetch failures are recorded
    in SourceResult.error instead of being raised.
    """

    def __init__(self, http_client: HttpClient, *, min_bytes: int = PRIMARY_MIN_BYTES) -> None:
        self._http = http_client
        self._min_bytes = min_bytes

    @property
    def name(self) -> str:
        return "openlibrary"

    def cover_by_isbn(self, isbn: str) -> SourceResult:
        """Find a cover for an ISBN.

        Searches by ISBN and downloads the cover of the first hit. If that
        yields nothing usable, tries the direct by-ISBN image endpoint.
        """
        errors: list[str] = []
        author = None

        docs = self._search({"isbn": isbn, "limit": "1"}, errors)
        if docs:
            author = parse_first_author(docs[0])
            cover_id = parse_cover_id(docs[0])
            if cover_id is not None:
                image = self._download(build_cover_id_url(cover_id), errors)
                if image is not None:
                    return SourceResult(cover=image, author=author)

        image = self._download(build_cover_url(isbn), errors)
        if image is not None:
            return SourceResult(cover=image, author=author)
        return SourceResult(error="; ".join(errors) or None)

    def cover_by_title(self, title: str) -> SourceResult:
        """Find a cover by fuzzy title search, taking the first doc with a cover."""
        query = clean_title(title)
        if not query:
            return SourceResult()

        errors: list[str] = []
        docs = self._search({"title": query, "limit": str(_TITLE_SEARCH_LIMIT)}, errors)
        with_cover = next((doc for doc in docs if parse_cover_id(doc) is not None), None)
        if with_cover is not None:
            url = build_cover_id_url(parse_cover_id(with_cover))
            image = self._download(url, errors)
            if image is not None:
                return SourceResult(cover=image, author=parse_first_author(with_cover))
        return SourceResult(error="; ".join(errors) or None)

    def author_by_title(self, title: str) -> SourceResult:
        """Look up only the author of the best title match."""
        query = clean_title(title)
        if not query:
            return SourceResult()

        errors: list[str] = []
        docs = self._search({"title": query, "limit": "1"}, errors)
        author = parse_first_author(docs[0]) if docs else None
        return SourceResult(author=author, error="; ".join(errors) or None)

    def _search(self, params: dict[str, str], errors: list[str]) -> list[dict]:
        try:
            data = self._http.get(f"{_OL_BASE}/search.json", params=params)
        except CoverFetchError as exc:
            logger.debug("Open Library search failed for %s: %s", params, exc)
            errors.append(str(exc))
            return []
        return parse_search_docs(data)

    def _download(self, url: str, errors: list[str]) -> CoverImage | None:
        """Fetch an image, rejecting placeholder-sized bodies."""
        try:
            data = self._http.get_bytes(url)
        except CoverFetchError as exc:
            logger.debug("Open Library image fetch failed for %s: %s", url, exc)
            errors.append(str(exc))
            return None
        if len(data) < self._min_bytes:
            logger.debug("Rejecting %d-byte placeholder from %s", len(data), url)
            return None
        return CoverImage(data=data, source=self.name, url=url)
