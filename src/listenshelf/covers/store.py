# ABOUTME: Persisted covers map (covers.json): book id -> {path, author}.
# ABOUTME: Loaded at pipeline start, mutated per book, saved pretty-printed for diffing.

import json
import logging
import os
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path

from listenshelf.covers.types import CoverEntry

logger = logging.getLogger(__name__)


class CoverStore:
    """In-memory covers map bound to a JSON file on disk.

    The file is the only state that survives between runs. A missing or
    unreadable file starts an empty store rather than failing the run.
    """

    def __init__(self, path: Path, entries: dict[str, CoverEntry] | None = None) -> None:
        self.path = path
        self._entries: dict[str, CoverEntry] = dict(entries or {})

    @classmethod
    def load(cls, path: Path) -> "CoverStore":
        """Load a store from disk, or start empty if there is nothing usable."""
        if not path.exists():
            return cls(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable covers map %s: %s", path, exc)
            return cls(path)
        if not isinstance(data, dict):
            logger.warning("Ignoring covers map %s: expected a JSON object", path)
            return cls(path)

        entries = {
            str(book_id): CoverEntry.from_dict(value)
            for book_id, value in data.items()
            if isinstance(value, dict)
        }
        return cls(path, entries)

    def get(self, book_id: str) -> CoverEntry | None:
        return self._entries.get(book_id)

    def set(self, book_id: str, entry: CoverEntry) -> None:
        self._entries[book_id] = entry

    def items(self) -> Iterator[tuple[str, CoverEntry]]:
        return iter(self._entries.items())

    def prune(self, keep_ids: Iterable[str]) -> list[str]:
        """Drop entries whose id is not in keep_ids. Returns the dropped ids."""
        keep = set(keep_ids)
        dropped = [book_id for book_id in self._entries if book_id not in keep]
        for book_id in dropped:
            del self._entries[book_id]
        return dropped

    def to_dict(self) -> dict[str, dict[str, str | None]]:
        return {book_id: entry.to_dict() for book_id, entry in self._entries.items()}

    def save(self) -> None:
        """Write the full map to disk, replacing the previous file in one step."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def __contains__(self, book_id: object) -> bool:
        return book_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
