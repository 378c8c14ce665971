"""
Pytest configuration and fixtures for plexingest tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Sequence

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from plexingest.models import Candidate, MediaKind  # noqa: E402
from plexingest.tmdb import TMDBError  # noqa: E402

VIDEO_EXTENSIONS = {'.mkv', '.mp4', '.avi', '.m4v'}

MATRIX = Candidate(id=603, title="The Matrix", original_language="en",
                   release_date="1999-03-30", media_type="movie")
BREAKING_BAD = Candidate(id=1396, title="Breaking Bad", original_language="en",
                         release_date="2008-01-20", media_type="tv")


class FakeSearchService:
    """Search backend answering from a query -> results table."""

    def __init__(self, answers: dict[str, list[Candidate]] | None = None,
                 fail: bool = False):
        self.answers = answers or {}
        self.fail = fail
        self.calls: list[tuple[str, MediaKind]] = []

    def search(self, query: str, kind: MediaKind) -> list[Candidate]:
        self.calls.append((query, kind))
        if self.fail:
            raise TMDBError("connection refused")
        return list(self.answers.get(query, []))


class ScriptedPrompter:
    """Prompter replaying canned answers in order.

    ``select`` answers may be an int index or the option text.
    """

    def __init__(self, selects: Sequence[Any] = (), texts: Sequence[Any] = (),
                 confirms: Sequence[Any] = ()):
        self.selects = list(selects)
        self.texts = list(texts)
        self.confirms = list(confirms)
        self.labels: list[str] = []

    def select(self, label: str, options: Sequence[str]) -> int | None:
        self.labels.append(label)
        answer = self.selects.pop(0)
        if isinstance(answer, str):
            return list(options).index(answer)
        return answer

    def text(self, label: str, initial: str = "") -> str | None:
        self.labels.append(label)
        answer = self.texts.pop(0)
        if answer is ...:
            return initial
        return answer

    def confirm(self, label: str, default: bool = False) -> bool | None:
        self.labels.append(label)
        return self.confirms.pop(0)


def fake_is_video(path: Path) -> bool:
    return path.suffix.lower() in VIDEO_EXTENSIONS


def make_file(path: Path, size: int) -> Path:
    """Create a file of *size* bytes, parents included."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\0" * size)
    return path


@pytest.fixture
def library(tmp_path: Path) -> Path:
    return tmp_path / "library"


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    root = tmp_path / "incoming"
    root.mkdir()
    return root
