# ABOUTME: Unit tests for reading the export file and extracting category buckets.
# ABOUTME: Covers both export shapes, absent buckets, and malformed input.

from pathlib import Path

import pytest

from listenshelf.export.loader import ExportReadError, extract_category, load_export
from tests.fixtures.exports import BUCKETED_EXPORT, FLAT_EXPORT


class TestLoadExport:
    """Tests for load_export."""

    def test_loads_valid_export(self, export_file: Path) -> None:
        """A valid export parses into the bucket list."""
        data = load_export(export_file)
        assert isinstance(data, list)
        assert data[0]["type"] == "myfinishedbooks"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing export is reported as ExportReadError."""
        with pytest.raises(ExportReadError, match="Cannot read"):
            load_export(tmp_path / "nope.json")

    def test_corrupt_file_raises(self, corrupt_export: Path) -> None:
        """Invalid JSON is reported as ExportReadError."""
        with pytest.raises(ExportReadError, match="Malformed JSON"):
            load_export(corrupt_export)


class TestExtractCategory:
    """Tests for extract_category."""

    def test_bucketed_shape(self) -> None:
        """Entries are found by bucket type in the list shape."""
        books = extract_category(BUCKETED_EXPORT, "mysavedbooks")
        assert [b["title"] for b in books] == ["Dune", "The Hobbit"]

    def test_flat_shape(self) -> None:
        """Entries are found by key in the flat mapping shape."""
        books = extract_category(FLAT_EXPORT, "myfinishedbooks")
        assert len(books) == 1
        assert books[0]["title"] == "Dune"

    def test_absent_bucket_is_empty(self) -> None:
        """Missing buckets yield an empty list in both shapes."""
        assert extract_category(BUCKETED_EXPORT, "mywishlist") == []
        assert extract_category(FLAT_EXPORT, "myreadbooks") == []

    def test_unexpected_shapes_do_not_raise(self) -> None:
        """Scalars, nulls, and odd bucket contents yield no entries."""
        assert extract_category(None, "myfinishedbooks") == []
        assert extract_category("text", "myfinishedbooks") == []
        assert extract_category([{"type": "myfinishedbooks"}], "myfinishedbooks") == []
        assert extract_category({"myfinishedbooks": "oops"}, "myfinishedbooks") == []
        assert extract_category([42, None], "myfinishedbooks") == []

    def test_non_dict_entries_are_dropped(self) -> None:
        """Only dict entries survive extraction."""
        data = [{"type": "mysavedbooks", "books": [{"title": "A"}, "junk", None]}]
        assert extract_category(data, "mysavedbooks") == [{"title": "A"}]

    def test_repeated_buckets_are_concatenated(self) -> None:
        """Every bucket of the requested type contributes, in export order."""
        data = [
            {"type": "myfinishedbooks", "books": [{"title": "A"}]},
            {"type": "mysavedbooks", "books": [{"title": "S"}]},
            {"type": "myfinishedbooks", "books": [{"title": "B"}, {"title": "C"}]},
        ]
        books = extract_category(data, "myfinishedbooks")
        assert [b["title"] for b in books] == ["A", "B", "C"]

    def test_malformed_repeat_does_not_hide_good_bucket(self) -> None:
        data = [
            {"type": "myfinishedbooks", "books": "oops"},
            {"type": "myfinishedbooks", "books": [{"title": "A"}]},
        ]
        assert extract_category(data, "myfinishedbooks") == [{"title": "A"}]
