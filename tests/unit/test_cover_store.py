# ABOUTME: Unit tests for the persisted covers map.
# ABOUTME: Covers loading, tolerant recovery from bad files, saving, and pruning.

import json
from pathlib import Path

from listenshelf.covers.store import CoverStore
from listenshelf.covers.types import CoverEntry


class TestCoverStoreLoad:
    """Tests for CoverStore.load."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = CoverStore.load(tmp_path / "covers.json")
        assert len(store) == 0

    def test_loads_entries(self, tmp_path: Path) -> None:
        path = tmp_path / "covers.json"
        path.write_text(
            json.dumps(
                {
                    "1": {"path": "covers/1.jpg", "author": "Frank Herbert"},
                    "2": {"path": None, "author": "Andy Weir"},
                    "3": {"path": None, "author": None},
                }
            )
        )
        store = CoverStore.load(path)
        assert store.get("1") == CoverEntry("covers/1.jpg", "Frank Herbert")
        assert store.get("2") == CoverEntry(None, "Andy Weir")
        assert store.get("3") == CoverEntry(None, None)
        assert "1" in store
        assert store.get("missing") is None

    def test_corrupt_file_is_empty(self, tmp_path: Path, caplog) -> None:
        path = tmp_path / "covers.json"
        path.write_text("{not json")
        store = CoverStore.load(path)
        assert len(store) == 0
        assert any("unreadable" in r.message for r in caplog.records)

    def test_non_object_file_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "covers.json"
        path.write_text("[1, 2]")
        assert len(CoverStore.load(path)) == 0

    def test_malformed_entries_are_skipped_or_cleaned(self, tmp_path: Path) -> None:
        path = tmp_path / "covers.json"
        path.write_text(json.dumps({"1": "junk", "2": {"path": 5, "author": ""}}))
        store = CoverStore.load(path)
        assert "1" not in store
        assert store.get("2") == CoverEntry(None, None)


class TestCoverStoreSave:
    """Tests for CoverStore.save."""

    def test_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "covers.json"
        store = CoverStore(path)
        store.set("1", CoverEntry("covers/1.jpg", "Frank Herbert"))
        store.set("2", CoverEntry(None, None))
        store.save()

        reloaded = CoverStore.load(path)
        assert reloaded.to_dict() == store.to_dict()

    def test_pretty_printed(self, tmp_path: Path) -> None:
        path = tmp_path / "covers.json"
        store = CoverStore(path)
        store.set("1", CoverEntry("covers/1.jpg", "Frank Herbert"))
        store.save()
        text = path.read_text()
        assert text.startswith("{\n  \"1\": {\n    \"path\"")
        assert json.loads(text) == {"1": {"path": "covers/1.jpg", "author": "Frank Herbert"}}

    def test_creates_parent_directory_and_leaves_no_temp_files(self, tmp_path: Path) -> None:
        path = tmp_path / "site" / "covers.json"
        CoverStore(path).save()
        assert path.exists()
        assert [p.name for p in path.parent.iterdir()] == ["covers.json"]

    def test_non_ascii_authors_kept_readable(self, tmp_path: Path) -> None:
        path = tmp_path / "covers.json"
        store = CoverStore(path)
        store.set("1", CoverEntry(None, "Selma Lagerlöf"))
        store.save()
        assert "Lagerlöf" in path.read_text(encoding="utf-8")


class TestCoverStorePrune:
    def test_prune_drops_unknown_ids(self, tmp_path: Path) -> None:
        store = CoverStore(tmp_path / "covers.json")
        store.set("1", CoverEntry("covers/1.jpg", None))
        store.set("2", CoverEntry(None, "A"))
        dropped = store.prune(["1"])
        assert dropped == ["2"]
        assert "2" not in store
        assert len(store) == 1
