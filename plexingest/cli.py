#!/usr/bin/env python3
"""
plex-media-ingest

A CLI tool for filing movie and show rips into a Plex library using
TMDB metadata.
"""
import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .executor import execute_moves
from .models import MediaKind, MoveResult, ScanReport
from .prompts import ConsolePrompter
from .sniff import is_video_file
from .tmdb import TMDBClient, TMDBError
from .walker import DirectoryWalker

log = logging.getLogger(__name__)


def setup_logging(verbose: int, quiet: bool) -> None:
    """Map -q/-v flags onto a root log level."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def print_move(source: Path, destination: Path) -> None:
    """Print the move diff."""
    print("Move:")
    print(f"  {source}")
    print(f"  -> {destination}")


def print_report(report: ScanReport) -> None:
    """Print planned moves and skipped files."""
    for move in report.moves:
        print_move(move.source, move.destination)

    if report.skipped:
        print()
        print("Skipped:")
        for skipped in report.skipped:
            detail = f" ({skipped.detail})" if skipped.detail else ""
            print(f"  [SKIP] {skipped.path}")
            print(f"         Reason: {skipped.reason.value}{detail}")


def print_errors(results: list[MoveResult]) -> None:
    for result in results:
        if not result.success:
            print(f"  [ERROR] {result.source}")
            print(f"          {result.error}")


def confirm_proceed(count: int) -> bool:
    """
    Ask user to confirm proceeding with the moves.

    Args:
        count: Number of files to move

    Returns:
        True if user confirms, False otherwise
    """
    while True:
        try:
            response = input(f"\nProceed with moving {count} files? (y/n): ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            return False
        if response in ('y', 'yes'):
            return True
        if response in ('n', 'no'):
            return False
        print("Please enter 'y' or 'n'.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plex-media-ingest",
        description="File movie and show rips into a Plex library using TMDB metadata."
    )

    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=None,
        help="Directory to look for media in (default: current directory)"
    )
    parser.add_argument(
        "--show", "-s",
        action="store_true",
        help="Treat the directory as TV show content instead of movies"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="Custom config file"
    )
    parser.add_argument(
        "--first-run", "-f",
        action="store_true",
        help="Run the first run wizard even if a config exists"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be moved without actually moving"
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Move without asking for confirmation"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug)"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only show errors"
    )
    return parser


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed_args = build_parser().parse_args(args)
    setup_logging(parsed_args.verbose, parsed_args.quiet)

    path = parsed_args.path or Path.cwd()
    if not path.is_dir():
        print(f"Error: Not a directory: {path}")
        return 1

    try:
        config = load_config(parsed_args.config, parsed_args.first_run)
        client = TMDBClient(api_key=config.tmdb_key)
    except (ConfigError, TMDBError) as e:
        print(f"Error: {e}")
        return 1
    log.info("Library at %s", config.library)

    kind = MediaKind.SHOW if parsed_args.show else MediaKind.MOVIE
    walker = DirectoryWalker(client, ConsolePrompter(), config.library, is_video_file)
    report = walker.scan(path, kind)

    print()
    print_report(report)
    print("-" * 50)

    if not report.moves:
        print("No files to move.")
        return 0

    if parsed_args.dry_run:
        results = execute_moves(report.moves, dry_run=True)
        print_errors(results)
        print(f"Would move: {sum(r.success for r in results)} files")
        return 0

    if not parsed_args.yes and not confirm_proceed(len(report.moves)):
        print("Cancelled.")
        return 0

    print("\nMoving files...")
    results = execute_moves(report.moves)
    print_errors(results)

    moved = sum(1 for r in results if r.success and not r.skipped)
    unchanged = sum(1 for r in results if r.skipped)
    errors = sum(1 for r in results if not r.success)
    print("-" * 50)
    print(
        f"Moved: {moved} | Unchanged: {unchanged} | "
        f"Skipped: {len(report.skipped)} | Errors: {errors}"
    )
    return 0 if errors == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
