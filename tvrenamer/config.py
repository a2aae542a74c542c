"""Run configuration and defaults.

One ``Arguments`` object describes a run for every shell. Capabilities such
as title lookup or the change log are plain flags on it rather than separate
code paths.
"""
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .models import Template
from .tokenizer import default_template


DEFAULT_SEASON_INDEX = 1
DEFAULT_EPISODE_INDEX = 1
DEFAULT_PAD_LENGTH = 2
DEFAULT_LANGUAGE = "en-US"

APP_NAME = "tv-renamer"
LOG_FILE_NAME = "changes.log"


def app_data_dir() -> Path:
    """Return the platform application-data directory for tv-renamer."""
    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA", Path.home()))
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / APP_NAME


def default_log_path() -> Path:
    """Location of the change log, overridable with TVRENAMER_LOG_FILE."""
    override = os.environ.get("TVRENAMER_LOG_FILE")
    if override:
        return Path(override).expanduser()
    return app_data_dir() / LOG_FILE_NAME


def load_api_key() -> str | None:
    """
    Load the TMDB API key from the environment or a .env file.

    Priority:
    1. TMDB_API_KEY environment variable
    2. .env file in current directory
    3. .env file in user home directory

    Returns:
        API key string or None if not found
    """
    api_key = os.environ.get("TMDB_API_KEY")
    if api_key:
        return api_key

    for env_path in (Path.cwd() / ".env", Path.home() / ".env"):
        if env_path.exists():
            load_dotenv(env_path)
            api_key = os.environ.get("TMDB_API_KEY")
            if api_key:
                return api_key

    return None


@dataclass(frozen=True)
class Arguments:
    """Everything one run needs to know."""
    base_directory: Path
    series_name: str = ""
    season_index: int = DEFAULT_SEASON_INDEX
    episode_index: int = DEFAULT_EPISODE_INDEX
    pad_length: int = DEFAULT_PAD_LENGTH
    template: Template = field(default_factory=default_template)
    language: str = DEFAULT_LANGUAGE
    dry_run: bool = False
    verbose: bool = False
    automatic: bool = False
    titles: bool = False
    no_name: bool = False
    log_changes: bool = False
    log_file: Path | None = None

    def __post_init__(self):
        object.__setattr__(self, "base_directory", Path(self.base_directory))
        if not self.series_name.strip():
            # Fall back to the directory name, e.g. ".../Breaking Bad" -> "Breaking Bad"
            name = Path(os.path.abspath(self.base_directory)).name
            object.__setattr__(self, "series_name", name)

    @property
    def reports_plan(self) -> bool:
        """Whether planned renames are shown before anything is touched."""
        return self.dry_run or self.verbose

    @property
    def change_log_path(self) -> Path:
        return self.log_file or default_log_path()
