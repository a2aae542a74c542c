"""Directory scanner: works out which files belong to which season."""
import logging
import re
from pathlib import Path

from .errors import ScanError
from .models import Classification, EntryKind, Episodes, ScanResult, Season, Seasons

log = logging.getLogger(__name__)

DIGITS = re.compile(r'\d+')
NUMERIC_RUN = re.compile(r'(\d+)')


def natural_sort_key(name: str) -> tuple:
    """
    Sort key comparing numeric runs by value and text case-insensitively.

    ``"ep2"`` sorts before ``"ep10"``.
    """
    parts = NUMERIC_RUN.split(name)
    key = []
    for index, part in enumerate(parts):
        if index % 2:
            key.append((1, int(part), part))
        else:
            key.append((0, part.casefold(), part))
    return tuple(key)


def derive_season_number(name: str) -> int | None:
    """Return the season number found in a directory name, e.g. 'Season 2' -> 2."""
    match = DIGITS.search(name)
    if not match:
        return None
    number = int(match.group(0))
    return number if number > 0 else None


def classify_entry(path: Path) -> Classification:
    """
    Decide whether *path* is a season directory, an episode file, or neither.

    Args:
        path: A directory entry

    Returns:
        Classification with the season number for season directories
    """
    if path.name.startswith("."):
        return Classification(EntryKind.UNRECOGNIZED)
    if path.is_dir():
        season_no = derive_season_number(path.name)
        if season_no is None:
            return Classification(EntryKind.UNRECOGNIZED)
        return Classification(EntryKind.SEASON_DIRECTORY, season_no)
    if path.is_file():
        return Classification(EntryKind.EPISODE_FILE)
    return Classification(EntryKind.UNRECOGNIZED)


def _list_directory(directory: Path) -> list[tuple[Path, Classification]]:
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise ScanError(directory, e.strerror or str(e)) from e
    entries.sort(key=lambda p: natural_sort_key(p.name))
    return [(entry, classify_entry(entry)) for entry in entries]


def scan_season(directory: Path, season_no: int) -> Season:
    """
    Collect the episode files of one season directory.

    Args:
        directory: Directory holding the episode files
        season_no: Season number to assign

    Returns:
        Season with episodes in natural filename order
    """
    directory = Path(directory)
    episodes = tuple(
        entry for entry, found in _list_directory(directory)
        if found.kind is EntryKind.EPISODE_FILE
    )
    log.debug("Season %d: %d episode(s) in %s", season_no, len(episodes), directory)
    return Season(season_no=season_no, episodes=episodes)


def scan(base_directory: Path, season_index: int) -> ScanResult:
    """
    Inspect a series directory.

    If it holds season subdirectories ("Season 1", "S02", ...) each becomes a
    Season; other subdirectories and loose files are ignored. Otherwise its
    files are one season numbered *season_index*.

    Args:
        base_directory: Series directory
        season_index: Season number for a flat directory

    Returns:
        Seasons for the subdirectory layout, Episodes for a flat directory

    Raises:
        ScanError: If the directory cannot be read
    """
    base_directory = Path(base_directory)
    entries = _list_directory(base_directory)

    season_dirs = [
        (found.season_no, entry) for entry, found in entries
        if found.kind is EntryKind.SEASON_DIRECTORY
    ]
    if season_dirs:
        season_dirs.sort(key=lambda item: (item[0], natural_sort_key(item[1].name)))
        log.debug("Found %d season directories in %s", len(season_dirs), base_directory)
        return Seasons(tuple(scan_season(entry, number) for number, entry in season_dirs))

    episodes = tuple(
        entry for entry, found in entries
        if found.kind is EntryKind.EPISODE_FILE
    )
    log.debug("Flat directory %s: %d episode(s)", base_directory, len(episodes))
    return Episodes(Season(season_no=season_index, episodes=episodes))
