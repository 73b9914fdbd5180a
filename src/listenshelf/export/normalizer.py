# ABOUTME: Normalizes raw export entries into BookRecords with clean ISBNs and derived years.
# ABOUTME: Also sorts, filters, and groups records for the finished/saved listings.

import re
from datetime import date, datetime
from typing import Any

from listenshelf.config import Category
from listenshelf.export.loader import extract_category
from listenshelf.export.types import BookRecord, YearGroup

_ISBN_JUNK_RE = re.compile(r"[^0-9X]")
_DATE_PREFIX_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})")

# Edition types in lookup order. eBook ISBNs hit cover APIs far more often.
_EDITION_PRIORITY = ("eBook", "audioBook")


def normalize_isbn(raw: Any) -> str:
    """Keep only digits and the ISBN-10 check character X, uppercased."""
    return _ISBN_JUNK_RE.sub("", str(raw).upper())


def _edition_is(edition: dict[str, Any], kind: str) -> bool:
    return edition.get("format") == kind or edition.get("type") == kind


def extract_isbns(editions: Any) -> list[str]:
    """Collect normalized ISBNs from an edition list in lookup order.

    eBook editions come first, then audioBook, then anything else carrying
    an ISBN. Duplicates (after normalization) keep their first position.
    """
    if not isinstance(editions, list):
        return []
    usable = [e for e in editions if isinstance(e, dict) and e.get("isbn")]

    ordered: list[dict[str, Any]] = []
    for kind in _EDITION_PRIORITY:
        ordered.extend(e for e in usable if _edition_is(e, kind))
    ordered.extend(usable)

    isbns: list[str] = []
    for edition in ordered:
        isbn = normalize_isbn(edition["isbn"])
        if isbn and isbn not in isbns:
            isbns.append(isbn)
    return isbns


def extract_year(value: Any) -> int | None:
    """Parse an ISO-8601 date or datetime string and return its year.

    Returns None for missing, non-string, or unparseable values.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).year
    except ValueError:
        pass

    # Fall back to a bare date prefix for odd time suffixes.
    match = _DATE_PREFIX_RE.match(text)
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1)).year
    except ValueError:
        return None


def _entry_id(raw: dict[str, Any]) -> str | None:
    # Finished and saved buckets disagree on the casing of this key.
    value = raw.get("bookId", raw.get("bookid"))
    if value is None or value == "":
        return None
    return str(value)


def normalize_entry(raw: dict[str, Any], date_field: str, category: str = "") -> BookRecord:
    """Turn one raw export entry into a BookRecord."""
    title = raw.get("title")
    raw_date = raw.get(date_field)
    return BookRecord(
        id=_entry_id(raw),
        title=title if isinstance(title, str) and title else None,
        isbns=extract_isbns(raw.get("editions")),
        date=raw_date if isinstance(raw_date, str) else None,
        year=extract_year(raw_date),
        category=category,
    )


def normalize_all(
    entries: list[dict[str, Any]], date_field: str, category: str = ""
) -> list[BookRecord]:
    """Normalize a bucket, keep titled and dated records, newest first.

    Sorting uses the raw date string; export dates are ISO-8601 so string
    order is chronological order.
    """
    records = [normalize_entry(raw, date_field, category) for raw in entries]
    listable = [r for r in records if r.is_listable]
    listable.sort(key=lambda r: r.date or "", reverse=True)
    return listable


def load_category(data: Any, category: Category) -> list[BookRecord]:
    """Extract and normalize one configured category from a parsed export."""
    entries = extract_category(data, category.bucket)
    return normalize_all(entries, category.date_field, category.name)


def group_by_year(records: list[BookRecord]) -> list[YearGroup]:
    """Group records by year, newest year first.

    Order within a year follows the input. Records without a year are skipped.
    """
    groups: dict[int, list[BookRecord]] = {}
    for record in records:
        if record.year is None:
            continue
        groups.setdefault(record.year, []).append(record)
    return [YearGroup(year=year, books=list(groups[year])) for year in sorted(groups, reverse=True)]
