"""Move execution for planned move records."""
import logging
import shutil
from pathlib import Path

from .models import MoveRecord, MoveResult

log = logging.getLogger(__name__)


def move_file(source: Path, dest: Path, dry_run: bool) -> tuple[bool, str | None]:
    """
    Move a file into the library safely.

    Args:
        source: Source path
        dest: Destination path
        dry_run: If True, don't actually move

    Returns:
        Tuple of (success, error_message)
    """
    if not source.exists():
        return False, "Source file no longer exists"

    # Check if destination already exists (and is not the same file)
    if dest.exists() and source.resolve() != dest.resolve():
        return False, "Destination file already exists"

    if not dry_run:
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(source), str(dest))
        except OSError as e:
            return False, str(e)

    return True, None


def execute_moves(moves: list[MoveRecord], dry_run: bool = False) -> list[MoveResult]:
    """
    Perform every planned move, in order.

    A failing move is recorded and the rest still run. When several
    records share a destination only the first one is attempted, so a
    dry run reports the same failures a real run would.

    Args:
        moves: Planned moves
        dry_run: If True, only check that each move could run

    Returns:
        One MoveResult per record
    """
    results = []
    claimed: set[Path] = set()
    for move in moves:
        target = move.destination.resolve()
        if target in claimed:
            log.error("Could not move %s: duplicate destination %s", move.source, move.destination)
            results.append(MoveResult(
                source=str(move.source),
                destination=str(move.destination),
                success=False,
                error="Another file is already moving to this destination",
            ))
            continue
        claimed.add(target)

        if move.source.resolve() == target:
            results.append(MoveResult(
                source=str(move.source),
                destination=str(move.destination),
                success=True,
                skipped=True,
                skip_reason="Already in place",
            ))
            continue

        success, error = move_file(move.source, move.destination, dry_run)
        if error:
            log.error("Could not move %s: %s", move.source, error)
        elif not dry_run:
            log.info("Moved %s -> %s", move.source, move.destination)
        results.append(MoveResult(
            source=str(move.source),
            destination=str(move.destination),
            success=success,
            error=error,
        ))
    return results
