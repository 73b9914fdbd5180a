# ABOUTME: Default paths, thresholds, and export category definitions for listenshelf.
# ABOUTME: CLI options override these per invocation; FetchSettings bundles the pipeline knobs.

from dataclasses import dataclass
from pathlib import Path

DEFAULT_EXPORT_PATH = Path("BookBeat.json")
DEFAULT_COVERS_DIR = Path("covers")
DEFAULT_COVERS_MAP = Path("covers.json")

# Pause between books that needed network work. Third-party APIs are rate-limited.
DEFAULT_DELAY = 0.5

# Open Library serves tiny placeholder images when it has no cover.
PRIMARY_MIN_BYTES = 1000
# Google Books placeholders are larger, so its threshold is higher.
SECONDARY_MIN_BYTES = 2000


@dataclass(frozen=True)
class Category:
    """An export bucket and the date field that orders its entries."""

    name: str
    bucket: str
    date_field: str


CATEGORIES: dict[str, Category] = {
    "finished": Category("finished", "myfinishedbooks", "finishedDate"),
    "saved": Category("saved", "mysavedbooks", "date"),
    "read": Category("read", "myreadbooks", "finishedDate"),
}

# Buckets the cover fetcher walks unless told otherwise.
DEFAULT_FETCH_CATEGORIES = ("finished", "saved")


@dataclass
class FetchSettings:
    """Settings for a single fetch-covers run."""

    covers_dir: Path = DEFAULT_COVERS_DIR
    covers_map: Path = DEFAULT_COVERS_MAP
    delay: float = DEFAULT_DELAY
    primary_min_bytes: int = PRIMARY_MIN_BYTES
    secondary_min_bytes: int = SECONDARY_MIN_BYTES
    incremental: bool = True

    def __post_init__(self) -> None:
        if self.delay < 0:
            msg = f"delay must be non-negative, got {self.delay}"
            raise ValueError(msg)

    @property
    def base_dir(self) -> Path:
        """Directory that stored cover paths are relative to."""
        return self.covers_map.parent
