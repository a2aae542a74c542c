#!/usr/bin/env python3
"""
tv-renamer - TV Episode Renamer

Command-line shell around the renaming engine.
"""
import argparse
import logging
import sys
from pathlib import Path

from .changelog import ChangeLog
from .config import (
    DEFAULT_EPISODE_INDEX,
    DEFAULT_LANGUAGE,
    DEFAULT_PAD_LENGTH,
    DEFAULT_SEASON_INDEX,
    Arguments,
)
from .errors import TVRenamerError
from .executor import RenameExecutor
from .models import RenamePlan
from .tokenizer import DEFAULT_TEMPLATE, tokenize
from .tmdb import TMDBClient

PROG = "tv-renamer"


def shorten_path(path: Path) -> str:
    """Show only the last two components, e.g. 'Season 1/ep1.mkv'."""
    parts = path.parts[-2:]
    return str(Path(*parts)) if parts else str(path)


def print_plan(plan: RenamePlan) -> None:
    """Print the planned rename, flagging one that replaces an existing file."""
    line = f"{shorten_path(plan.source)} -> {shorten_path(plan.target)}"
    if plan.overwrites:
        line += " (overwrites existing file)"
    print(line)


def print_error(error: TVRenamerError) -> None:
    """Print an error to stderr."""
    print(f"{PROG}: {error.message}", file=sys.stderr)
    if error.details:
        print(f"  {error.details}", file=sys.stderr)


def confirm_overwrite(plan: RenamePlan) -> bool:
    """
    Ask before overwriting an existing episode.

    Returns:
        True only if the user answers 'y'
    """
    print(
        f"{PROG}: episode to be renamed already exists:\n"
        f"{plan.target}\n"
        "Is it okay to overwrite? (y/n)",
        file=sys.stderr,
    )
    try:
        response = input().strip().lower()
    except EOFError:
        return False
    return response in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Rename TV episode files into a consistent naming scheme."
    )

    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=None,
        help="Series or season directory (default: current directory)"
    )
    parser.add_argument(
        "--dry-run", "-d",
        action="store_true",
        help="Show what would be renamed without actually renaming"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print every rename and show debug information"
    )
    parser.add_argument(
        "--episode-start", "-e",
        type=int,
        default=DEFAULT_EPISODE_INDEX,
        metavar="N",
        help=f"Number of the first episode (default: {DEFAULT_EPISODE_INDEX})"
    )
    parser.add_argument(
        "--season-number", "-s",
        type=int,
        default=DEFAULT_SEASON_INDEX,
        metavar="N",
        help=f"Season number of a flat directory (default: {DEFAULT_SEASON_INDEX})"
    )
    parser.add_argument(
        "--series-name", "-n",
        type=str,
        default="",
        metavar="NAME",
        help="Series name (default: name of the directory)"
    )
    parser.add_argument(
        "--template", "-t",
        type=str,
        default=DEFAULT_TEMPLATE,
        help=f"Naming template (default: '{DEFAULT_TEMPLATE}')"
    )
    parser.add_argument(
        "--pad-length", "-p",
        type=int,
        default=DEFAULT_PAD_LENGTH,
        metavar="N",
        help=f"Zero-pad season and episode numbers to N digits (default: {DEFAULT_PAD_LENGTH})"
    )
    parser.add_argument(
        "--automatic", "-a",
        action="store_true",
        help="Detect season subdirectories such as 'Season 1'"
    )
    parser.add_argument(
        "--titles",
        action="store_true",
        help="Look up episode titles on TMDB"
    )
    parser.add_argument(
        "--no-name",
        action="store_true",
        help="Leave the series name out of file names"
    )
    parser.add_argument(
        "--log-changes", "-l",
        action="store_true",
        help="Append executed renames to the change log"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Change log location"
    )
    parser.add_argument(
        "--show-log",
        action="store_true",
        help="Print the change log and exit"
    )
    parser.add_argument(
        "--language",
        type=str,
        default=DEFAULT_LANGUAGE,
        help=f"Language for TMDB titles (default: {DEFAULT_LANGUAGE})"
    )
    return parser


def _check_minimum(parser: argparse.ArgumentParser, name: str, value: int, minimum: int) -> None:
    if value < minimum:
        parser.error(f"{name} must be at least {minimum}, got {value}")


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    _check_minimum(parser, "episode start", parsed_args.episode_start, 1)
    _check_minimum(parser, "season number", parsed_args.season_number, 1)
    _check_minimum(parser, "pad length", parsed_args.pad_length, 0)

    logging.basicConfig(
        level=logging.DEBUG if parsed_args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    arguments = Arguments(
        base_directory=parsed_args.directory or Path.cwd(),
        series_name=parsed_args.series_name,
        season_index=parsed_args.season_number,
        episode_index=parsed_args.episode_start,
        pad_length=parsed_args.pad_length,
        template=tokenize(parsed_args.template),
        language=parsed_args.language,
        dry_run=parsed_args.dry_run,
        verbose=parsed_args.verbose,
        automatic=parsed_args.automatic,
        titles=parsed_args.titles,
        no_name=parsed_args.no_name,
        log_changes=parsed_args.log_changes,
        log_file=parsed_args.log_file,
    )

    if parsed_args.show_log:
        try:
            lines = ChangeLog(arguments.change_log_path).read_lines()
        except TVRenamerError as e:
            print_error(e)
            return 1
        for line in lines:
            print(line)
        return 0

    metadata = None
    if arguments.titles:
        try:
            metadata = TMDBClient(language=arguments.language)
        except TVRenamerError as e:
            print_error(e)
            return 1

    if arguments.dry_run:
        print("[DRY RUN - no files will be renamed]")

    executor = RenameExecutor(
        arguments,
        metadata=metadata,
        confirm=confirm_overwrite,
        report=print_plan,
    )
    outcome = executor.run()

    if outcome.error is not None:
        print_error(outcome.error)
    elif arguments.dry_run:
        print(f"Would rename: {len(outcome.planned)} file(s)")
    elif arguments.verbose:
        print(f"Renamed: {len(outcome.renamed)} file(s)")

    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())
