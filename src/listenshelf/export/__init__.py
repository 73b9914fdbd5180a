# ABOUTME: Reading-data package: loads the audiobook export and normalizes its buckets.
# ABOUTME: Exports the BookRecord type and the normalization entry points.

from listenshelf.export.loader import ExportReadError, extract_category, load_export
from listenshelf.export.normalizer import (
    extract_isbns,
    extract_year,
    group_by_year,
    load_category,
    normalize_all,
    normalize_entry,
    normalize_isbn,
)
from listenshelf.export.stats import reading_stats
from listenshelf.export.types import BookRecord, ReadingStats, YearGroup

__all__ = [
    "BookRecord",
    "ExportReadError",
    "ReadingStats",
    "YearGroup",
    "extract_category",
    "extract_isbns",
    "extract_year",
    "group_by_year",
    "load_category",
    "load_export",
    "normalize_all",
    "normalize_entry",
    "normalize_isbn",
    "reading_stats",
]
