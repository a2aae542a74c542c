"""Data models for the tvrenamer package."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import TVRenamerError


@dataclass(frozen=True)
class Season:
    """A numbered group of episode files, in episode-assignment order."""
    season_no: int
    episodes: tuple[Path, ...] = ()


@dataclass(frozen=True)
class Episodes:
    """Scan result for a flat directory holding one season's files."""
    season: Season


@dataclass(frozen=True)
class Seasons:
    """Scan result for a directory of season subdirectories."""
    seasons: tuple[Season, ...] = ()


ScanResult = Episodes | Seasons


class EntryKind(Enum):
    SEASON_DIRECTORY = "season_directory"
    EPISODE_FILE = "episode_file"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Classification:
    """What a directory entry looks like to the scanner."""
    kind: EntryKind
    season_no: int | None = None


class TokenKind(Enum):
    TEXT = "text"
    SERIES = "series"
    SEASON = "season"
    EPISODE = "episode"
    TITLE = "title"


@dataclass(frozen=True)
class Token:
    """One piece of a naming template."""
    kind: TokenKind
    text: str = ""
    pad: int | None = None


@dataclass(frozen=True)
class Template:
    """An ordered sequence of tokens parsed from a template string."""
    tokens: tuple[Token, ...] = ()
    source: str = ""


@dataclass(frozen=True)
class RenderContext:
    """Values substituted into a template for one episode."""
    series: str
    season: int
    episode: int
    title: str = ""
    pad_length: int = 2


@dataclass(frozen=True)
class RenamePlan:
    """A resolved source -> target pair; *overwrites* marks an existing target."""
    source: Path
    target: Path
    season_no: int
    episode_no: int
    overwrites: bool = False
    @property
    def is_noop(self) -> bool:
        return self.source == self.target


class RunState(Enum):
    SCANNING = "scanning"
    RESOLVING = "resolving"
    CONFIRMING = "confirming"
    RENAMING = "renaming"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class RunOutcome:
    """What happened during one run."""
    state: RunState = RunState.SCANNING
    planned: list[RenamePlan] = field(default_factory=list)
    renamed: list[RenamePlan] = field(default_factory=list)
    error: TVRenamerError | None = None

    @property
    def aborted(self) -> bool:
        return self.state is RunState.ABORTED

    @property
    def exit_code(self) -> int:
        return 1 if self.aborted else 0
