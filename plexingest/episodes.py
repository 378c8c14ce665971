"""Season/episode extraction for show files."""
import re

from .models import EpisodeRef

# Tried in order; the first pattern that matches anywhere wins.
EPISODE_PATTERNS = [
    # S01E04, s1.e4
    re.compile(r'S(?P<season>\d+)\.?E(?P<episode>\d+)', re.IGNORECASE),
    # 1x04
    re.compile(r'(?P<season>\d+)x(?P<episode>\d+)', re.IGNORECASE),
]


class ExtractionError(Exception):
    """Raised when a name carries no season/episode marker."""
    pass


def extract(path: str) -> EpisodeRef:
    """
    Extract season and episode numbers from a path.

    Args:
        path: File path or name

    Returns:
        EpisodeRef for the first matching pattern

    Raises:
        ExtractionError: If no pattern matches
    """
    for pattern in EPISODE_PATTERNS:
        match = pattern.search(path)
        if match:
            return EpisodeRef(
                season=int(match.group("season")),
                episode=int(match.group("episode")),
            )
    raise ExtractionError(f"No season/episode marker in {path!r}")
