# ABOUTME: Shared pytest fixtures for listenshelf tests.
# ABOUTME: Provides sample export files (valid and malformed) and a covers workspace.

import json
from pathlib import Path

import pytest

from tests.fixtures.exports import BUCKETED_EXPORT, DUNE_ONLY_EXPORT


@pytest.fixture
def export_file(tmp_path: Path) -> Path:
    """Write the bucketed sample export to disk."""
    filepath = tmp_path / "BookBeat.json"
    filepath.write_text(json.dumps(BUCKETED_EXPORT), encoding="utf-8")
    return filepath


@pytest.fixture
def dune_export_file(tmp_path: Path) -> Path:
    """Write an export holding a single finished book, Dune."""
    filepath = tmp_path / "BookBeat.json"
    filepath.write_text(json.dumps(DUNE_ONLY_EXPORT), encoding="utf-8")
    return filepath


@pytest.fixture
def corrupt_export(tmp_path: Path) -> Path:
    """Create a file that is not valid JSON."""
    filepath = tmp_path / "BookBeat.json"
    filepath.write_text("{this is not json", encoding="utf-8")
    return filepath


@pytest.fixture
def covers_workspace(tmp_path: Path) -> tuple[Path, Path]:
    """A site directory holding covers/ and covers.json paths (not created)."""
    site = tmp_path / "site"
    site.mkdir()
    return site / "covers", site / "covers.json"
