"""Tests for the directory scanner."""

import pytest

from tvrenamer.errors import ScanError
from tvrenamer.models import EntryKind, Episodes, Season, Seasons
from tvrenamer.scanner import (
    classify_entry,
    derive_season_number,
    natural_sort_key,
    scan,
    scan_season,
)
from tests.conftest import make_files


class TestNaturalSortKey:
    """Tests for natural_sort_key function."""

    def test_numeric_runs_compare_by_value(self):
        names = ["ep10.mkv", "ep2.mkv", "ep1.mkv"]
        assert sorted(names, key=natural_sort_key) == ["ep1.mkv", "ep2.mkv", "ep10.mkv"]

    def test_case_insensitive_text(self):
        names = ["b.mkv", "A.mkv", "c.mkv"]
        assert sorted(names, key=natural_sort_key) == ["A.mkv", "b.mkv", "c.mkv"]

    def test_mixed_runs(self):
        names = ["Show S1E10", "Show S1E9", "Show S2E1"]
        assert sorted(names, key=natural_sort_key) == ["Show S1E9", "Show S1E10", "Show S2E1"]


class TestDeriveSeasonNumber:
    """Tests for derive_season_number function."""

    @pytest.mark.parametrize("name,expected", [
        ("Season 2", 2),
        ("S02", 2),
        ("season_10", 10),
        ("Staffel 3 (2019)", 3),
    ])
    def test_number_found(self, name, expected):
        assert derive_season_number(name) == expected

    @pytest.mark.parametrize("name", ["Specials", "Extras", "Season 0", ""])
    def test_no_season(self, name):
        assert derive_season_number(name) is None


class TestClassifyEntry:
    """Tests for classify_entry function."""

    def test_season_directory(self, tmp_path):
        directory = tmp_path / "Season 4"
        directory.mkdir()
        result = classify_entry(directory)
        assert result.kind is EntryKind.SEASON_DIRECTORY
        assert result.season_no == 4

    def test_plain_directory_unrecognized(self, tmp_path):
        directory = tmp_path / "Extras"
        directory.mkdir()
        assert classify_entry(directory).kind is EntryKind.UNRECOGNIZED

    def test_episode_file(self, tmp_path):
        path = make_files(tmp_path, ["ep1.mkv"])[0]
        result = classify_entry(path)
        assert result.kind is EntryKind.EPISODE_FILE
        assert result.season_no is None

    def test_hidden_entries_unrecognized(self, tmp_path):
        path = make_files(tmp_path, [".DS_Store"])[0]
        hidden_dir = tmp_path / ".Season 1"
        hidden_dir.mkdir()
        assert classify_entry(path).kind is EntryKind.UNRECOGNIZED
        assert classify_entry(hidden_dir).kind is EntryKind.UNRECOGNIZED

    def test_missing_path_unrecognized(self, tmp_path):
        assert classify_entry(tmp_path / "nope").kind is EntryKind.UNRECOGNIZED


class TestScan:
    """Tests for scan function."""

    def test_season_directories(self, series_dir):
        result = scan(series_dir, 1)
        assert isinstance(result, Seasons)
        assert [s.season_no for s in result.seasons] == [1, 2]
        assert [len(s.episodes) for s in result.seasons] == [3, 3]
        assert [p.name for p in result.seasons[0].episodes] == ["ep1.mkv", "ep2.mkv", "ep10.mkv"]

    def test_season_directories_ordered_by_number(self, tmp_path):
        base = tmp_path / "Show"
        make_files(base / "Season 10", ["x.mkv"])
        make_files(base / "Season 2", ["y.mkv"])
        result = scan(base, 1)
        assert [s.season_no for s in result.seasons] == [2, 10]

    def test_non_season_directories_and_loose_files_skipped(self, series_dir):
        make_files(series_dir / "Extras", ["behind the scenes.mkv"])
        make_files(series_dir, ["poster.jpg"])
        result = scan(series_dir, 1)
        assert isinstance(result, Seasons)
        assert len(result.seasons) == 2
        all_episodes = [p for s in result.seasons for p in s.episodes]
        assert all(p.parent.name.startswith("Season") for p in all_episodes)

    def test_flat_directory(self, tmp_path):
        base = tmp_path / "Show"
        make_files(base, ["ep10.mkv", "ep2.mkv", "ep1.mkv"])
        result = scan(base, 3)
        assert isinstance(result, Episodes)
        assert result.season.season_no == 3
        assert [p.name for p in result.season.episodes] == ["ep1.mkv", "ep2.mkv", "ep10.mkv"]

    def test_flat_directory_skips_hidden_files(self, tmp_path):
        base = tmp_path / "Show"
        make_files(base, ["ep1.mkv", ".nfo"])
        result = scan(base, 1)
        assert [p.name for p in result.season.episodes] == ["ep1.mkv"]

    def test_empty_directory_is_empty_season(self, tmp_path):
        base = tmp_path / "Empty"
        base.mkdir()
        assert scan(base, 1) == Episodes(Season(1, ()))

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(ScanError) as excinfo:
            scan(tmp_path / "missing", 1)
        assert excinfo.value.path == tmp_path / "missing"
        assert "unable to read directory" in str(excinfo.value)

    def test_file_as_base_raises(self, tmp_path):
        path = make_files(tmp_path, ["file.mkv"])[0]
        with pytest.raises(ScanError):
            scan(path, 1)


class TestScanSeason:
    """Tests for scan_season function."""

    def test_ignores_subdirectories(self, series_dir):
        season = scan_season(series_dir / "Season 1", 7)
        assert season.season_no == 7
        assert len(season.episodes) == 3

    def test_season_dirs_not_treated_as_episodes(self, series_dir):
        assert scan_season(series_dir, 1).episodes == ()
