# ABOUTME: Reads the audiobook service JSON export and pulls category buckets out of it.
# ABOUTME: Tolerates both the bucketed list shape and the flat mapping shape.

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class ExportReadError(Exception):
    """Raised when the export file cannot be read or parsed."""


def load_export(path: Path) -> Any:
    """Read and parse the export file.

    Args:
        path: Path to the JSON export.

    Returns:
        The parsed JSON document, unvalidated.

    Raises:
        ExportReadError: If the file is missing, unreadable, or not valid JSON.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExportReadError(f"Cannot read {path}: {exc}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ExportReadError(f"Malformed JSON in {path}: {exc}") from exc


def extract_category(data: Any, category_name: str) -> list[dict[str, Any]]:
    """Return the raw entries of one bucket, or an empty list if it is absent.

    The export is normally a list of {"type": ..., "books": [...]} buckets.
    Older exports use a flat {"<type>": [...]} mapping instead.
    Anything else yields no entries rather than an error.
    """
    if isinstance(data, list):
        # Repeated buckets of one type are read in order and concatenated.
        bucket_books = [
            bucket.get("books")
            for bucket in data
            if isinstance(bucket, dict) and bucket.get("type") == category_name
        ]
    elif isinstance(data, dict):
        bucket_books = [data.get(category_name)]
    else:
        bucket_books = []

    entries: list[dict[str, Any]] = []
    for books in bucket_books:
        if not isinstance(books, list):
            if books is not None:
                logger.warning("Bucket %s is not a list, ignoring it", category_name)
            continue
        entries.extend(entry for entry in books if isinstance(entry, dict))
    return entries
