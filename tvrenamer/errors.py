"""Exception classes for the renaming engine."""
from enum import Enum
from pathlib import Path


class TVRenamerError(Exception):
    """Base exception for all tv-renamer errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Convert exception to a dictionary for shells that report structured errors."""
        result = {"error": self.__class__.__name__, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class ScanError(TVRenamerError):
    """Raised when the base directory cannot be read."""

    def __init__(self, path: Path | str, reason: str | None = None):
        message = f"unable to read directory: {path}"
        super().__init__(message, reason)
        self.path = Path(path)
        self.reason = reason


class MetadataError(TVRenamerError):
    """Raised when the metadata service cannot answer a request."""


class SeriesNotFound(MetadataError):
    """Raised when a series search returns no usable result."""

    def __init__(self, name: str, details: str | None = None):
        super().__init__(f"invalid TV series: {name}", details)
        self.name = name


class EpisodeNotFound(MetadataError):
    """Raised when a season does not contain the requested episode."""

    def __init__(self, series_id: int, season_no: int, episode_no: int):
        message = f"series {series_id} has no episode S{season_no:02d}E{episode_no:02d}"
        super().__init__(message)
        self.series_id = series_id
        self.season_no = season_no
        self.episode_no = episode_no


class TargetErrorReason(Enum):
    EPISODE_DOES_NOT_EXIST = "episode_does_not_exist"
    EXTENSION = "extension"
    PARENT = "parent"


_TARGET_MESSAGES = {
    TargetErrorReason.EPISODE_DOES_NOT_EXIST: "unable to find episode {episode_no}",
    TargetErrorReason.EXTENSION: "unable to get extension",
    TargetErrorReason.PARENT: "unable to get parent filepath",
}


class TargetError(TVRenamerError):
    """Raised when a destination path cannot be computed for one episode."""

    def __init__(self, reason: TargetErrorReason, source: Path | str, episode_no: int):
        message = _TARGET_MESSAGES[reason].format(episode_no=episode_no)
        super().__init__(message, str(source))
        self.reason = reason
        self.source = Path(source)
        self.episode_no = episode_no


class RenameError(TVRenamerError):
    """Raised when the filesystem refuses a rename."""

    def __init__(self, source: Path, target: Path, reason: str):
        super().__init__(f"rename failed: {reason}", f"{source} -> {target}")
        self.source = source
        self.target = target
        self.reason = reason


class RunAborted(TVRenamerError):
    """Raised when the user stops a run, e.g. by declining an overwrite."""


class ChangeLogError(TVRenamerError):
    """Raised when the change log cannot be read or written."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"unable to use change log: {path}", reason)
        self.path = Path(path)
        self.reason = reason
