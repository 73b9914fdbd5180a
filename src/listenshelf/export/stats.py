# ABOUTME: Headline reading statistics for the finished list.
# ABOUTME: Counts total books, books finished this year, and distinct reading years.

from datetime import date

from listenshelf.export.types import BookRecord, ReadingStats


def reading_stats(records: list[BookRecord], today: date | None = None) -> ReadingStats:
    """Summarize a normalized record list.

    Args:
        records: Normalized records, typically the finished list.
        today: Reference date for "this year". Defaults to the current date.
    """
    current_year = (today or date.today()).year
    years = {r.year for r in records if r.year is not None}
    return ReadingStats(
        total_books=len(records),
        this_year_books=sum(1 for r in records if r.year == current_year),
        years_reading=len(years),
        current_year=current_year,
    )
