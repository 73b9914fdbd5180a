# ABOUTME: Data structures for the cover-resolution pipeline.
# ABOUTME: Candidates in, source results and stored cover entries out.

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class BookCandidate:
    """A book to resolve a cover for: identity plus lookup keys."""

    id: str
    title: str
    isbns: tuple[str, ...] = ()


@dataclass
class CoverEntry:
    """One entry of the persisted covers map.

    path None means no cover was found. An entry can still carry an author
    in that case.
    """

    path: str | None = None
    author: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"path": self.path, "author": self.author}

    @classmethod
    def from_dict(cls, data: dict) -> "CoverEntry":
        path = data.get("path")
        author = data.get("author")
        return cls(
            path=path if isinstance(path, str) and path else None,
            author=author if isinstance(author, str) and author else None,
        )


@dataclass
class CoverImage:
    """Downloaded image bytes and where they came from."""

    data: bytes
    source: str
    url: str

    def __len__(self) -> int:
        return len(self.data)


@dataclass
class SourceResult:
    """Outcome of a single source call.

    Sources never raise. A network or parse problem comes back as error,
    a clean miss comes back with neither cover nor error.
    """

    cover: CoverImage | None = None
    author: str | None = None
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.cover is not None

    @property
    def failed(self) -> bool:
        return self.error is not None


class ResolutionState(Enum):
    """How a book's cover entry was decided, in cascade order."""

    CACHED = "cached"
    NO_COVER_WITH_AUTHOR = "no_cover_with_author"
    PRIMARY_ISBN = "primary_isbn"
    SECONDARY_ISBN = "secondary_isbn"
    TITLE_SEARCH = "title_search"
    AUTHOR_ONLY = "author_only"

    @property
    def is_skip(self) -> bool:
        return self in (ResolutionState.CACHED, ResolutionState.NO_COVER_WITH_AUTHOR)


@dataclass
class Resolution:
    """Result of running the cascade for one book."""

    state: ResolutionState
    cover: CoverImage | None = None
    author: str | None = None
    failures: list[str] = field(default_factory=list)
