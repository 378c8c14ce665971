"""Tests for token-drop query resolution and disambiguation."""

import pytest

from plexingest.models import MediaKind
from plexingest.prompts import choose
from plexingest.resolver import NoMatchError, resolve
from tests.conftest import BREAKING_BAD, MATRIX, FakeSearchService, ScriptedPrompter


def test_full_query_match_returns_immediately() -> None:
    service = FakeSearchService({"The Matrix 1999": [MATRIX]})
    assert resolve(["The", "Matrix", "1999"], MediaKind.MOVIE, service) == [MATRIX]
    assert service.calls == [("The Matrix 1999", MediaKind.MOVIE)]


def test_trailing_tokens_are_dropped_until_match() -> None:
    service = FakeSearchService({"The Matrix": [MATRIX]})
    result = resolve(["The", "Matrix", "Remastered", "Edition"], MediaKind.MOVIE, service)
    assert result == [MATRIX]
    assert [q for q, _ in service.calls] == [
        "The Matrix Remastered Edition",
        "The Matrix Remastered",
        "The Matrix",
    ]


def test_exhausted_tokens_raise_no_match_within_bound() -> None:
    tokens = ["Nothing", "Matches", "Here"]
    service = FakeSearchService()
    with pytest.raises(NoMatchError):
        resolve(tokens, MediaKind.MOVIE, service)
    assert len(service.calls) <= len(tokens) + 1


def test_empty_tokens_fail_without_search() -> None:
    service = FakeSearchService()
    with pytest.raises(NoMatchError):
        resolve([], MediaKind.MOVIE, service)
    assert service.calls == []


def test_season_folder_short_circuits_for_shows() -> None:
    service = FakeSearchService({"Season 1": [BREAKING_BAD]})
    with pytest.raises(NoMatchError):
        resolve(["season", "1"], MediaKind.SHOW, service)
    assert service.calls == []


def test_season_prefix_is_searched_for_movies() -> None:
    service = FakeSearchService({"Season of the Witch": [MATRIX]})
    assert resolve(["Season", "of", "the", "Witch"], MediaKind.MOVIE, service) == [MATRIX]


def test_transport_failure_aborts_without_retry() -> None:
    service = FakeSearchService(fail=True)
    with pytest.raises(NoMatchError):
        resolve(["The", "Matrix"], MediaKind.MOVIE, service)
    assert len(service.calls) == 1


def test_service_order_is_kept() -> None:
    second = MATRIX.__class__(id=1, title="The Matrix Revisited", release_date="2001-11-19")
    service = FakeSearchService({"Matrix": [second, MATRIX]})
    assert resolve(["Matrix"], MediaKind.MOVIE, service) == [second, MATRIX]


def test_choose_returns_selected_candidate() -> None:
    prompter = ScriptedPrompter(selects=[1])
    assert choose([BREAKING_BAD, MATRIX], "somefile.mkv", prompter) is MATRIX
    assert "somefile.mkv" in prompter.labels[0]


def test_choose_cancel_returns_none() -> None:
    prompter = ScriptedPrompter(selects=[None])
    assert choose([MATRIX], "somefile.mkv", prompter) is None
