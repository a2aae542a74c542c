"""Append-only text log of executed renames.

Each run that renames something starts with a timestamp header, followed
by one ``source -> target`` line per rename::

    [2026-10-19 21:04:11]
    /tv/Show/Season 1/ep1.mkv -> /tv/Show/Season 1/Show - S01E01.mkv
"""
import logging
from datetime import datetime
from pathlib import Path

from .errors import ChangeLogError

log = logging.getLogger(__name__)


class ChangeLog:
    """Change log backed by a UTF-8 text file.

    Usage::

        changes = ChangeLog(path)
        changes.append_header()
        changes.append(source, target)
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _write(self, line: str) -> None:
        # surrogateescape keeps undecodable file names byte-for-byte
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8", errors="surrogateescape") as f:
                f.write(line + "\n")
        except OSError as e:
            raise ChangeLogError(self.path, e.strerror or str(e)) from e

    def append_header(self, when: datetime | None = None) -> None:
        """Start a new run section.

        Raises:
            ChangeLogError: If the log file cannot be written
        """
        timestamp = (when or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
        self._write(f"[{timestamp}]")
        log.debug("Change log header written to %s", self.path)

    def append(self, source: Path, target: Path) -> None:
        """Record one executed rename."""
        self._write(f"{source} -> {target}")

    def read_lines(self) -> list[str]:
        """Return the log's lines, or an empty list when there is no log yet."""
        if not self.path.exists():
            return []
        try:
            text = self.path.read_text(encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            raise ChangeLogError(self.path, e.strerror or str(e)) from e
        return text.splitlines()
