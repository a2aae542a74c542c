"""
tv-renamer - TV Episode Renamer

Renames episode files into a consistent naming scheme, optionally with
episode titles looked up on TMDB.
"""
from .config import Arguments
from .errors import (
    TVRenamerError,
    ScanError,
    MetadataError,
    SeriesNotFound,
    EpisodeNotFound,
    TargetError,
    TargetErrorReason,
    RenameError,
    RunAborted,
    ChangeLogError,
)
from .models import (
    Season,
    Episodes,
    Seasons,
    Template,
    Token,
    TokenKind,
    RenderContext,
    RenamePlan,
    RunOutcome,
    RunState,
)
from .tokenizer import tokenize, render, default_template
from .scanner import scan, scan_season, classify_entry, natural_sort_key
from .metadata import MetadataLookup
from .resolver import resolve
from .executor import RenameExecutor, run, preview
from .changelog import ChangeLog

__version__ = "0.4.0"
__all__ = [
    "Arguments",
    "TVRenamerError",
    "ScanError",
    "MetadataError",
    "SeriesNotFound",
    "EpisodeNotFound",
    "TargetError",
    "TargetErrorReason",
    "RenameError",
    "RunAborted",
    "ChangeLogError",
    "Season",
    "Episodes",
    "Seasons",
    "Template",
    "Token",
    "TokenKind",
    "RenderContext",
    "RenamePlan",
    "RunOutcome",
    "RunState",
    "tokenize",
    "render",
    "default_template",
    "scan",
    "scan_season",
    "classify_entry",
    "natural_sort_key",
    "MetadataLookup",
    "resolve",
    "RenameExecutor",
    "run",
    "preview",
    "ChangeLog",
]
