"""Tests for the command line entry point."""

from pathlib import Path
from typing import Any

import pytest

pytest.importorskip("magic")

from plexingest import cli  # noqa: E402
from plexingest.config import Config, ConfigError  # noqa: E402
from plexingest.models import MediaKind, ScanReport, SkipReason  # noqa: E402
from tests.conftest import make_file  # noqa: E402


class FakeWalker:
    """Stands in for DirectoryWalker and returns a canned report."""

    report = ScanReport()
    scanned: list = []

    def __init__(self, service: Any, prompter: Any, library: Path, is_video_file: Any):
        self.library = library

    def scan(self, directory: Path, kind: MediaKind) -> ScanReport:
        FakeWalker.scanned.append((directory, kind))
        return FakeWalker.report


@pytest.fixture
def wired(monkeypatch: Any, tmp_path: Path) -> Path:
    library = tmp_path / "library"
    monkeypatch.setattr(cli, "load_config",
                        lambda path, first: Config(tmdb_key="k", library=library))
    monkeypatch.setattr(cli, "TMDBClient", lambda api_key: object())
    monkeypatch.setattr(cli, "DirectoryWalker", FakeWalker)
    FakeWalker.report = ScanReport()
    FakeWalker.scanned = []
    return library


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args([])
    assert args.path is None
    assert not args.show
    assert not args.dry_run
    assert args.verbose == 0


def test_not_a_directory(tmp_path: Path, capsys: Any) -> None:
    assert cli.main([str(tmp_path / "missing")]) == 1
    assert "Not a directory" in capsys.readouterr().out


def test_config_error_exits(monkeypatch: Any, tmp_path: Path) -> None:
    def broken(path: Any, first: bool) -> Config:
        raise ConfigError("bad config")

    monkeypatch.setattr(cli, "load_config", broken)
    assert cli.main([str(tmp_path)]) == 1


def test_show_flag_and_nothing_to_move(wired: Path, tmp_path: Path, capsys: Any) -> None:
    FakeWalker.report.skip(tmp_path / "x.mkv", SkipReason.NO_MATCH)

    assert cli.main([str(tmp_path), "--show"]) == 0

    assert FakeWalker.scanned == [(tmp_path, MediaKind.SHOW)]
    out = capsys.readouterr().out
    assert "[SKIP]" in out
    assert "No files to move." in out


def test_dry_run_does_not_move(wired: Path, tmp_path: Path) -> None:
    source = make_file(tmp_path / "in" / "a.mkv", 10)
    dest = wired / "Movies" / "a.mkv"
    FakeWalker.report.add_move(source, dest)

    assert cli.main([str(tmp_path), "--dry-run"]) == 0

    assert source.exists()
    assert not dest.exists()


def test_yes_moves_without_prompt(wired: Path, tmp_path: Path) -> None:
    source = make_file(tmp_path / "in" / "a.mkv", 10)
    dest = wired / "Movies" / "a.mkv"
    FakeWalker.report.add_move(source, dest)

    assert cli.main([str(tmp_path), "--yes"]) == 0

    assert dest.exists()


def test_declined_confirmation_cancels(wired: Path, tmp_path: Path, monkeypatch: Any) -> None:
    source = make_file(tmp_path / "in" / "a.mkv", 10)
    FakeWalker.report.add_move(source, wired / "Movies" / "a.mkv")
    monkeypatch.setattr("builtins.input", lambda prompt="": "n")

    assert cli.main([str(tmp_path)]) == 0

    assert source.exists()
