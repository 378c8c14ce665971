"""Tests for header sniffing."""

from pathlib import Path
from typing import Any

import pytest

pytest.importorskip("magic")

from plexingest import sniff  # noqa: E402


def test_text_is_not_video(tmp_path: Path) -> None:
    path = tmp_path / "movie.srt"
    path.write_text("1\n00:00:01,000 --> 00:00:02,000\nHello\n", encoding="utf-8")
    assert sniff.is_video_file(path) is False


def test_empty_header_is_not_video() -> None:
    assert sniff.is_video(b"") is False


def test_video_mime_is_detected(monkeypatch: Any) -> None:
    monkeypatch.setattr(sniff.magic, "from_buffer", lambda data, mime: "video/x-matroska")
    assert sniff.is_video(b"\x1a\x45\xdf\xa3") is True


def test_header_is_bounded(tmp_path: Path) -> None:
    path = tmp_path / "big.bin"
    path.write_bytes(b"\x00" * (sniff.HEADER_SIZE * 2))
    assert len(sniff.read_header(path)) == sniff.HEADER_SIZE


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        sniff.is_video_file(tmp_path / "gone.mkv")
