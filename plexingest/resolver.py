"""Query resolution by token-drop narrowing.

The full token sequence is searched first.  While TMDB returns nothing,
the trailing token is dropped and the shorter query is tried, so the
leading (most distinguishing) words survive longest.
"""
from __future__ import annotations

import logging
from typing import Protocol, Sequence

from .models import Candidate, MediaKind
from .tmdb import TMDBError

log = logging.getLogger(__name__)


class NoMatchError(Exception):
    """Raised when no query built from the tokens finds anything."""
    pass


class SearchService(Protocol):
    def search(self, query: str, kind: MediaKind) -> list[Candidate]:
        ...


def is_season_folder(tokens: Sequence[str]) -> bool:
    """A show folder named 'Season ...' is a season, not a show title."""
    return bool(tokens) and tokens[0].lower() == "season"


def resolve(
    tokens: Sequence[str],
    kind: MediaKind,
    service: SearchService,
) -> list[Candidate]:
    """
    Search for the tokens, narrowing the query until something matches.

    Args:
        tokens: Significant tokens, most specific first
        kind: Movie or show search
        service: Search backend

    Returns:
        Non-empty list of candidates in service order

    Raises:
        NoMatchError: When every narrowed query came back empty, the
                      search transport failed, or the tokens name a
                      season folder
    """
    if kind is MediaKind.SHOW and is_season_folder(tokens):
        raise NoMatchError("Season folder, not a show name")

    remaining = list(tokens)
    while remaining:
        query = " ".join(remaining)
        log.debug("Searching TMDB (%s) for %r", kind.value, query)
        try:
            results = service.search(query, kind)
        except TMDBError as e:
            log.warning("Search for %r failed: %s", query, e)
            raise NoMatchError(f"Search failed for {query!r}") from e
        if results:
            return results
        remaining.pop()

    raise NoMatchError(f"Could not find {' '.join(tokens)!r} on TMDB")

