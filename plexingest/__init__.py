"""
plex-media-ingest - Plex Library Ingest

A CLI tool for filing media rips into a Plex library using TMDB metadata.
"""
from .models import (
    MediaKind,
    ExtraKind,
    Candidate,
    Extra,
    SubtitleSpec,
    EpisodeRef,
    MoveRecord,
    SkipReason,
    SkippedFile,
    ScanReport,
)
from .tokenizer import tokenize, search_tokens
from .resolver import resolve, NoMatchError
from .episodes import extract, ExtractionError
from .tmdb import TMDBClient, TMDBError
from .prompts import ConsolePrompter, choose
from .walker import DirectoryWalker

__version__ = "0.1.0"
__all__ = [
    "MediaKind",
    "ExtraKind",
    "Candidate",
    "Extra",
    "SubtitleSpec",
    "EpisodeRef",
    "MoveRecord",
    "SkipReason",
    "SkippedFile",
    "ScanReport",
    "tokenize",
    "search_tokens",
    "resolve",
    "NoMatchError",
    "extract",
    "ExtractionError",
    "TMDBClient",
    "TMDBError",
    "ConsolePrompter",
    "choose",
    "DirectoryWalker",
]
