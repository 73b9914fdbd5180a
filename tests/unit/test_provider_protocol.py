# ABOUTME: Unit tests for the CoverSource protocol.
# ABOUTME: Validates the protocol contracts, runtime_checkable behavior, and the real sources.

from listenshelf.covers.googlebooks import GoogleBooksSource
from listenshelf.covers.openlibrary import OpenLibrarySource
from listenshelf.covers.provider import AuthorLookupSource, CoverSource, TitleSearchSource
from listenshelf.covers.types import CoverImage, SourceResult
from tests.fixtures.fake_http import FakeHttpClient


class FakeSource:
    """Minimal implementation of CoverSource for testing."""

    @property
    def name(self) -> str:
        return "fake"

    def cover_by_isbn(self, isbn: str) -> SourceResult:
        return SourceResult(cover=CoverImage(data=b"x" * 10, source="fake", url=isbn))


class NotASource:
    """Missing cover_by_isbn, so it does not satisfy the protocol."""

    @property
    def name(self) -> str:
        return "broken"


class TestCoverSource:
    """Tests for CoverSource protocol."""

    def test_valid_implementation_is_instance(self) -> None:
        assert isinstance(FakeSource(), CoverSource)

    def test_invalid_implementation_is_not_instance(self) -> None:
        assert not isinstance(NotASource(), CoverSource)

    def test_cover_by_isbn_returns_result(self) -> None:
        result = FakeSource().cover_by_isbn("9780441013593")
        assert result.found
        assert not result.failed

    def test_plain_source_lacks_cascade_capabilities(self) -> None:
        """An ISBN-only source cannot fill either end of the cascade."""
        assert not isinstance(FakeSource(), TitleSearchSource)
        assert not isinstance(FakeSource(), AuthorLookupSource)


class TestCascadeRoles:
    """The concrete sources fill the roles the resolver asks for."""

    def test_open_library_searches_titles(self) -> None:
        assert isinstance(OpenLibrarySource(FakeHttpClient()), TitleSearchSource)

    def test_google_books_looks_up_authors(self) -> None:
        assert isinstance(GoogleBooksSource(FakeHttpClient()), AuthorLookupSource)
