# ABOUTME: Parsing helpers for Open Library search responses and cover URLs.
# ABOUTME: Pulls docs, cover ids, and author names out of loosely-shaped JSON.

import re
from typing import Any

_COVERS_BASE_URL = "https://covers.openlibrary.org/b"

_TITLE_JUNK_RE = re.compile(r"[^\w\s]")


def parse_search_docs(data: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the docs of a search.json response, dropping malformed items."""
    docs = data.get("docs")
    if not isinstance(docs, list):
        return []
    return [doc for doc in docs if isinstance(doc, dict)]


def parse_cover_id(doc: dict[str, Any]) -> int | None:
    """Return the cover_i identifier of a search doc, if it has one."""
    cover_id = doc.get("cover_i")
    if isinstance(cover_id, bool) or not isinstance(cover_id, int) or cover_id <= 0:
        return None
    return cover_id


def parse_first_author(doc: dict[str, Any]) -> str | None:
    """Return the first author_name of a search doc."""
    names = doc.get("author_name")
    if isinstance(names, list) and names and isinstance(names[0], str) and names[0]:
        return names[0]
    return None


def build_cover_id_url(cover_id: int, size: str = "L") -> str:
    """Build an Open Library cover image URL for a cover identifier.

    Args:
        cover_id: The cover_i value from a search doc.
        size: Image size, "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/id/{cover_id}-{size}.jpg"


def build_cover_url(isbn: str, size: str = "L") -> str:
    """Build an Open Library cover image URL for a given ISBN."""
    return f"{_COVERS_BASE_URL}/isbn/{isbn}-{size}.jpg"


def clean_title(title: str) -> str:
    """Reduce a title to a search-friendly form.

    Drops everything after the first colon, then after the first period,
    and replaces punctuation with spaces. "Dune: Deluxe Edition" -> "Dune".
    """
    head = title.split(":", 1)[0].split(".", 1)[0]
    return _TITLE_JUNK_RE.sub(" ", head).strip()
