"""
Pytest configuration and fixtures for tv-renamer tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tvrenamer.errors import EpisodeNotFound, SeriesNotFound


class StubMetadata:
    """In-memory stand-in for the TMDB client."""

    def __init__(self, titles=None, series=None):
        # {(season, episode): title}
        self.titles = titles or {}
        # {series name: series id}
        self.series = series if series is not None else {"Foo": 42}
        self.searches: list[tuple[str, str]] = []
        self.lookups: list[tuple[int, int, int]] = []

    def search_series(self, name: str, language: str) -> int:
        self.searches.append((name, language))
        if name not in self.series:
            raise SeriesNotFound(name)
        return self.series[name]

    def episode_title(self, series_id: int, season_no: int, episode_no: int) -> str:
        self.lookups.append((series_id, season_no, episode_no))
        try:
            return self.titles[(season_no, episode_no)]
        except KeyError:
            raise EpisodeNotFound(series_id, season_no, episode_no) from None


def make_files(directory: Path, names) -> list[Path]:
    """Create empty files named *names* in *directory* and return their paths."""
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for name in names:
        path = directory / name
        path.write_text(name)
        paths.append(path)
    return paths


def names_in(directory: Path) -> list[str]:
    """Sorted file names in *directory*."""
    return sorted(p.name for p in directory.iterdir() if p.is_file())


@pytest.fixture
def stub_metadata():
    """Stub lookup knowing series 'Foo' with two three-episode seasons."""
    return StubMetadata(titles={
        (1, 1): "Pilot",
        (1, 2): "The Return",
        (1, 3): "Finale?",
        (2, 1): "New Start",
        (2, 2): "Middle",
        (2, 3): "End",
    })


@pytest.fixture
def series_dir(tmp_path):
    """A 'Foo' series with 'Season 1' and 'Season 2', three episodes each."""
    base = tmp_path / "Foo"
    make_files(base / "Season 1", ["ep1.mkv", "ep2.mkv", "ep10.mkv"])
    make_files(base / "Season 2", ["a.mkv", "b.mkv", "c.mkv"])
    return base


@pytest.fixture(autouse=True)
def isolated_log_file(tmp_path, monkeypatch):
    """Keep the change log out of the real application-data directory."""
    monkeypatch.setenv("TVRENAMER_LOG_FILE", str(tmp_path / "changes.log"))
    return tmp_path / "changes.log"
