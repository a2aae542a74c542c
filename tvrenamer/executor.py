"""Rename executor: walks seasons, resolves targets and renames files.

A run goes SCANNING -> RESOLVING -> (CONFIRMING | RENAMING) -> DONE, or to
ABORTED on the first fatal error. Nothing is retried and renames already
done are not rolled back.
"""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable

from .changelog import ChangeLog
from .config import Arguments
from .errors import RenameError, RunAborted, TVRenamerError
from .metadata import MetadataLookup
from .models import Episodes, RenamePlan, RunOutcome, RunState, ScanResult, Season, Seasons
from .resolver import resolve
from .scanner import scan, scan_season

log = logging.getLogger(__name__)

ConfirmOverwrite = Callable[[RenamePlan], bool]
Reporter = Callable[[RenamePlan], None]


def decline_overwrite(plan: RenamePlan) -> bool:
    """Default confirmation callback: never overwrite."""
    return False


class RenameExecutor:
    """Drives one run over one series.

    Args:
        arguments: Run configuration
        metadata: Title lookup, needed when ``arguments.titles`` is set
        confirm: Asked before an existing file is overwritten
        report: Receives each planned rename in verbose or dry-run mode
        changes: Change log, used when ``arguments.log_changes`` is set
    """

    def __init__(
        self,
        arguments: Arguments,
        metadata: MetadataLookup | None = None,
        confirm: ConfirmOverwrite = decline_overwrite,
        report: Reporter | None = None,
        changes: ChangeLog | None = None,
    ):
        self.arguments = arguments
        self.metadata = metadata
        self.confirm = confirm
        self.report = report
        self.changes = changes
        if arguments.log_changes and changes is None:
            self.changes = ChangeLog(arguments.change_log_path)
        self.outcome = RunOutcome()
        self._series_id: int | None = None
        self._header_written = False

    # -- helpers -----------------------------------------------------

    def series_id(self) -> int | None:
        """Look the series up once and reuse the id for every season."""
        if not self.arguments.titles:
            return None
        if self._series_id is None:
            if self.metadata is None:
                raise ValueError("title lookup is enabled but no metadata lookup was given")
            self._series_id = self.metadata.search_series(
                self.arguments.series_name, self.arguments.language
            )
            log.info("Series %r has id %s", self.arguments.series_name, self._series_id)
        return self._series_id

    def _logging_changes(self) -> bool:
        return self.arguments.log_changes and self.changes is not None

    def _start_change_log(self) -> None:
        """Write the run header once, ahead of the first rename."""
        if self._logging_changes() and not self._header_written:
            self.changes.append_header()
            self._header_written = True

    def _log_change(self, plan: RenamePlan) -> None:
        if self._logging_changes():
            self.changes.append(plan.source, plan.target)

    def _execute(self, plan: RenamePlan, overwrite: bool) -> None:
        self._start_change_log()
        self.outcome.state = RunState.RENAMING
        try:
            if overwrite:
                plan.source.replace(plan.target)
            else:
                plan.source.rename(plan.target)
        except OSError as e:
            raise RenameError(plan.source, plan.target, e.strerror or str(e)) from e
        log.info("Renamed %s -> %s", plan.source, plan.target)
        self.outcome.renamed.append(plan)
        self._log_change(plan)

    # -- public API --------------------------------------------------

    def plan(self, source: Path, season_no: int, episode_no: int) -> RenamePlan:
        """Resolve one episode into a rename plan."""
        self.outcome.state = RunState.RESOLVING
        target = resolve(
            source, season_no, episode_no, self.arguments,
            self.metadata, self.series_id(),
        )
        return RenamePlan(source=source, target=target,
                          season_no=season_no, episode_no=episode_no,
                          overwrites=target != source and target.exists())

    def rename_season(self, season: Season, episode_no: int) -> list[RenamePlan]:
        """
        Resolve and rename every episode of *season* in order.

        Args:
            season: Season from the scanner
            episode_no: Number given to the first episode

        Returns:
            The plans handled for this season

        Raises:
            TargetError: If a target cannot be computed
            RunAborted: If an overwrite is declined
            RenameError: If the filesystem refuses a rename
            ChangeLogError: If an executed rename cannot be logged
        """
        plans = []
        for offset, source in enumerate(season.episodes):
            plan = self.plan(source, season.season_no, episode_no + offset)

            if plan.overwrites and not self.arguments.dry_run:
                self.outcome.state = RunState.CONFIRMING
                if not self.confirm(plan):
                    raise RunAborted("stopping the renaming process.",
                                     f"{plan.target} already exists")

            if self.arguments.reports_plan and self.report is not None:
                self.report(plan)
            self.outcome.planned.append(plan)
            plans.append(plan)

            if self.arguments.dry_run or plan.is_noop:
                continue
            self._execute(plan, plan.overwrites)
        return plans

    def rename_scan(self, result: ScanResult) -> None:
        """Rename everything a scan found; numbering restarts for each season."""
        if isinstance(result, Seasons):
            for season in result.seasons:
                self.rename_season(season, self.arguments.episode_index)
        else:
            self.rename_season(result.season, self.arguments.episode_index)

    def run(self) -> RunOutcome:
        """Scan the base directory and rename it; errors end the run as ABORTED."""
        try:
            self.outcome.state = RunState.SCANNING
            self.rename_scan(scan_directory(self.arguments))
        except TVRenamerError as e:
            log.debug("Run aborted: %s", e)
            self.outcome.state = RunState.ABORTED
            self.outcome.error = e
            return self.outcome

        self.outcome.state = RunState.DONE
        return self.outcome


def scan_directory(arguments: Arguments) -> ScanResult:
    """Scan the way the arguments ask: season detection or a single flat season."""
    if arguments.automatic:
        return scan(arguments.base_directory, arguments.season_index)
    return Episodes(scan_season(arguments.base_directory, arguments.season_index))


def run(
    arguments: Arguments,
    metadata: MetadataLookup | None = None,
    confirm: ConfirmOverwrite = decline_overwrite,
    report: Reporter | None = None,
) -> RunOutcome:
    """Execute one full run and return its outcome."""
    return RenameExecutor(arguments, metadata, confirm, report).run()


def preview(arguments: Arguments, metadata: MetadataLookup | None = None) -> list[RenamePlan]:
    """
    Compute every rename of a run without touching the filesystem.

    Raises:
        TVRenamerError: On the first scan, lookup or target error
    """
    executor = RenameExecutor(replace(arguments, dry_run=True, log_changes=False), metadata)
    executor.rename_scan(scan_directory(executor.arguments))
    return executor.outcome.planned
