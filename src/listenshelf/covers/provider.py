# ABOUTME: CoverSource protocol defining the contract for ISBN-keyed cover sources.
# ABOUTME: Title-search and author-lookup variants type the two ends of the cascade.

from typing import Protocol, runtime_checkable

from listenshelf.covers.types import SourceResult


@runtime_checkable
class CoverSource(Protocol):
    """Protocol for cover lookup services.

    Implementations return a SourceResult for every call and never raise,
    so the cascade can move on to the next ISBN or source.
    """

    @property
    def name(self) -> str: ...

    def cover_by_isbn(self, isbn: str) -> SourceResult: ...


@runtime_checkable
class TitleSearchSource(CoverSource, Protocol):
    """A cover source that can also search by title."""

    def cover_by_title(self, title: str) -> SourceResult: ...

    def author_by_title(self, title: str) -> SourceResult: ...


@runtime_checkable
class AuthorLookupSource(CoverSource, Protocol):
    """A cover source that can report the author of an ISBN without an image."""

    def author_by_isbn(self, isbn: str) -> SourceResult: ...
