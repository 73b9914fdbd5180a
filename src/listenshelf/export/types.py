# ABOUTME: Data structures produced by the reading-data normalizer.
# ABOUTME: BookRecord is the interchange format between the export, the cover fetcher, and display.

from dataclasses import dataclass, field


@dataclass
class BookRecord:
    """A single book from the export, cleaned up for downstream use.

    id and title come straight from the export and may be missing on broken
    entries. year is derived from date and stays None when the date is absent
    or unparseable, which keeps the record out of normalized listings.
    """

    id: str | None
    title: str | None
    isbns: list[str] = field(default_factory=list)
    date: str | None = None
    year: int | None = None
    category: str = ""

    @property
    def is_listable(self) -> bool:
        """Whether the record has what a dated listing needs."""
        return bool(self.title) and self.year is not None


@dataclass
class YearGroup:
    """Books sharing a year, for display."""

    year: int
    books: list[BookRecord] = field(default_factory=list)


@dataclass
class ReadingStats:
    """Headline numbers for the finished list."""

    total_books: int
    this_year_books: int
    years_reading: int
    current_year: int
