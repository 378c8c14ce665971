"""Data models for the plexingest package."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class MediaKind(Enum):
    MOVIE = "movie"
    SHOW = "tv"


class ExtraKind(Enum):
    """Extra content types; values double as the library folder names."""
    IGNORE = "Ignore"
    EDITION = "Edition"
    BEHIND_THE_SCENES = "Behind The Scenes"
    DELETED_SCENES = "Deleted Scenes"
    FEATURETTES = "Featurettes"
    INTERVIEWS = "Interviews"
    SCENES = "Scenes"
    SHORTS = "Shorts"
    TRAILERS = "Trailers"
    OTHER = "Other"


@dataclass(frozen=True)
class Candidate:
    """A single TMDB search result."""
    id: int
    title: str
    original_language: str | None = None
    release_date: str | None = None
    media_type: str = "movie"

    @property
    def year(self) -> str | None:
        """Release (or first air) year, None when TMDB has no date."""
        if self.release_date and len(self.release_date) >= 4:
            return self.release_date[:4]
        return None

    def label(self) -> str:
        """Human readable line for selection prompts."""
        date = self.release_date or "unknown"
        language = self.original_language or "??"
        if self.media_type == "movie":
            return f"[MOVIE] {self.title} ({date}, {language}) (ID: {self.id})"
        if self.media_type == "tv":
            return f"[SHOW] {self.title} ({date}, {language}) (ID: {self.id})"
        return f"[{self.media_type}] {self.title} (ID: {self.id})"


@dataclass(frozen=True)
class Extra:
    """Classification of a non-primary video file."""
    kind: ExtraKind
    name: str = ""


@dataclass(frozen=True)
class SubtitleSpec:
    language: str
    forced: bool = False


@dataclass(frozen=True)
class EpisodeRef:
    season: int
    episode: int


@dataclass(frozen=True)
class MoveRecord:
    """One planned move from a source file into the library."""
    source: Path
    destination: Path


class SkipReason(Enum):
    NO_MATCH = "no TMDB match"
    CANCELLED = "cancelled by user"
    NO_PRIMARY = "no primary title established"
    EXTRACTION_FAILED = "no season/episode in name"
    IGNORED = "ignored by user"
    SAMPLE = "sample file"
    UNREADABLE = "unreadable"
    NO_EXTENSION = "no file extension"
    UNSUPPORTED = "not a video or subtitle file"


@dataclass
class SkippedFile:
    """A file that produced no move record, and why."""
    path: Path
    reason: SkipReason
    detail: str = ""


@dataclass
class ScanReport:
    """Result of scanning a directory tree."""
    moves: list[MoveRecord] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)

    def add_move(self, source: Path, destination: Path) -> None:
        self.moves.append(MoveRecord(source=source, destination=destination))

    def skip(self, path: Path, reason: SkipReason, detail: str = "") -> None:
        self.skipped.append(SkippedFile(path=path, reason=reason, detail=detail))

    def extend(self, other: "ScanReport") -> None:
        """Append the records of a sub-scope, keeping discovery order."""
        self.moves.extend(other.moves)
        self.skipped.extend(other.skipped)


@dataclass
class MoveResult:
    """Represents a move operation result."""
    source: str
    destination: str
    success: bool
    error: str | None = None
    skipped: bool = False
    skip_reason: str | None = None
