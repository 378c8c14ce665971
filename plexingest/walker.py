"""Directory walker and file classification state machine.

Pure Python, no console I/O of its own.  The walker drives a scope
(one directory) through two states: no primary title yet, and primary
title established.  Human input and TMDB searches go through the
injected prompter and search service.

Movie scopes take their primary title from the largest video file;
every later video in the scope becomes an extra or an edition.  Show
scopes take their primary title from the directory name and file every
episode found beneath it.  A scope that never gets a primary title
hands each of its sub folders over as a fresh scope.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .episodes import ExtractionError, extract
from .models import (
    Candidate,
    Extra,
    ExtraKind,
    MediaKind,
    ScanReport,
    SkipReason,
    SubtitleSpec,
)
from .paths import (
    movie_edition_path,
    movie_extra_path,
    movie_path,
    movie_subtitle_path,
    show_episode_path,
    show_subtitle_path,
)
from .prompts import Prompter, choose
from .resolver import NoMatchError, SearchService, resolve
from .tokenizer import search_tokens, tokenize

log = logging.getLogger(__name__)

SUBTITLE_EXTENSIONS = {'srt', 'ass', 'ssa', 'smi', 'pgs', 'vob'}

# Any file whose path mentions this is skipped
SAMPLE_MARKER = "sample"


# ------------------------------------------------------------------
# Filesystem helpers
# ------------------------------------------------------------------

def is_hidden(path: Path) -> bool:
    return path.name.startswith('.')


def walk_files(folder: Path) -> list[Path]:
    """Every non-hidden file beneath *folder*, depth first, sorted by name."""
    found: list[Path] = []

    def on_error(error: OSError) -> None:
        log.error("Error walking the directory: %s", error)

    for root, dirs, files in os.walk(folder, onerror=on_error):
        dirs[:] = sorted(d for d in dirs if not d.startswith('.'))
        for name in sorted(files):
            if not name.startswith('.'):
                found.append(Path(root) / name)
    return found


def file_size(path: Path) -> int:
    """Size of a file, 0 when it vanished or can not be read."""
    try:
        return path.stat().st_size
    except OSError:
        return 0


def folder_size(folder: Path) -> int:
    """Total size of the files beneath *folder*."""
    return sum(file_size(file) for file in walk_files(folder))


def list_entries(directory: Path) -> tuple[list[Path], list[Path]]:
    """
    Split the immediate entries of a directory into files and folders.

    Both lists are sorted largest first, on the assumption that the
    main feature is the biggest file.  Equal sizes keep name order.

    Returns:
        (files, folders)
    """
    files: list[Path] = []
    folders: list[Path] = []
    for entry in sorted(directory.iterdir()):
        if is_hidden(entry):
            continue
        if entry.is_dir():
            folders.append(entry)
        elif entry.is_file():
            files.append(entry)

    files.sort(key=file_size, reverse=True)
    folders.sort(key=folder_size, reverse=True)
    return files, folders


def extension_of(path: Path) -> str:
    """File extension without the dot, empty when there is none."""
    return path.suffix[1:]


# ------------------------------------------------------------------
# Scope -- the state threaded through one directory traversal
# ------------------------------------------------------------------

@dataclass
class Scope:
    """One directory within which a single primary title applies."""
    directory: Path
    kind: MediaKind
    primary: Candidate | None = None
    # Directory the scan started from; sub scopes share it
    root: Path | None = None

    def establish(self, primary: Candidate) -> None:
        if self.primary is not None:
            raise RuntimeError(f"Primary title already set for {self.directory}")
        self.primary = primary

    def relative(self, path: Path) -> str:
        return _relative(path, self.directory)

    def from_root(self, path: Path) -> str:
        return _relative(path, self.root or self.directory)


def _relative(path: Path, base: Path) -> str:
    try:
        return str(path.relative_to(base))
    except ValueError:
        return path.name


# ------------------------------------------------------------------
# DirectoryWalker
# ------------------------------------------------------------------

class DirectoryWalker:
    """Classifies every file of a directory tree into move records.

    Constructor args:
        service:       Search backend (``search(query, kind)``).
        prompter:      Source of human input.
        library:       Root of the Plex library destination paths are built in.
        is_video_file: Callable telling whether a file holds video
                       content; may raise ``OSError``.
    """

    def __init__(
        self,
        service: SearchService,
        prompter: Prompter,
        library: Path,
        is_video_file: Callable[[Path], bool],
    ):
        self._service = service
        self._prompter = prompter
        self._library = library
        self._is_video_file = is_video_file

    # -- Public API ------------------------------------------------

    def scan(self, directory: Path, kind: MediaKind) -> ScanReport:
        """Classify everything under *directory* as movie or show content."""
        if not directory.is_dir():
            raise NotADirectoryError(str(directory))
        if kind is MediaKind.SHOW:
            return self._scan_show_scope(directory, directory)
        return self._scan_movie_scope(directory, directory)

    def _list_scope(
        self, directory: Path, report: ScanReport
    ) -> tuple[list[Path], list[Path]] | None:
        """List a scope directory; an unreadable one is skipped, not fatal."""
        try:
            return list_entries(directory)
        except OSError as e:
            log.error("Can not read directory %s: %s", directory, e)
            report.skip(directory, SkipReason.UNREADABLE, str(e))
            return None

    # -- Movie scopes ----------------------------------------------

    def _scan_movie_scope(self, directory: Path, root: Path) -> ScanReport:
        log.info("Scanning movie folder %s", directory)
        report = ScanReport()
        scope = Scope(directory, MediaKind.MOVIE, root=root)
        entries = self._list_scope(directory, report)
        if entries is None:
            return report
        files, folders = entries

        for file in files:
            self._check_movie_file(file, scope, report)

        if scope.primary is None:
            # Directory is only a container, try each folder on its own
            for folder in folders:
                report.extend(self._scan_movie_scope(folder, root))
        else:
            for folder in folders:
                for file in walk_files(folder):
                    self._check_movie_file(file, scope, report)
        return report

    def _check_movie_file(self, file: Path, scope: Scope, report: ScanReport) -> None:
        log.debug("Checking %s", file)
        video = self._sniff(file, scope, report)
        if video is None:
            return

        if video:
            if scope.primary is None:
                self._resolve_movie(file, scope, report)
            else:
                self._classify_extra(file, scope.primary, report)
            return

        extension = self._subtitle_extension(file, report)
        if extension is None:
            return
        if scope.primary is None:
            log.warning("Can not categorize subtitle %s without primary media, skipping", file)
            report.skip(file, SkipReason.NO_PRIMARY)
            return
        subtitle = self._ask_subtitle(file, report)
        if subtitle is not None:
            report.add_move(
                file, movie_subtitle_path(self._library, scope.primary, subtitle, extension)
            )

    def _resolve_movie(self, file: Path, scope: Scope, report: ScanReport) -> None:
        log.info("Found video file: %s", file)
        try:
            candidates = resolve(search_tokens(file.name), MediaKind.MOVIE, self._service)
        except NoMatchError as e:
            log.warning("Could not find a TMDB entry for %s: %s", file, e)
            report.skip(file, SkipReason.NO_MATCH, str(e))
            return

        primary = choose(candidates, str(file), self._prompter)
        if primary is None:
            report.skip(file, SkipReason.CANCELLED)
            return

        scope.establish(primary)
        report.add_move(file, movie_path(self._library, primary, extension_of(file)))

    def _classify_extra(self, file: Path, movie: Candidate, report: ScanReport) -> None:
        kinds = list(ExtraKind)
        index = self._prompter.select(
            f"Select extra type for '{file}' (Ignore to ignore the file, "
            "Edition to treat it as alternate edition of the main movie):",
            [kind.value for kind in kinds],
        )
        if index is None:
            report.skip(file, SkipReason.CANCELLED)
            return

        kind = kinds[index]
        if kind is ExtraKind.IGNORE:
            log.info("Ignoring %s", file)
            report.skip(file, SkipReason.IGNORED)
            return

        if kind is ExtraKind.EDITION:
            name = self._prompter.text(
                "Specify the edition's name (e.g. Director's Cut, Theatrical Version)"
            )
        else:
            name = self._prompter.text(
                f"Give this {kind.value} a descriptive name", initial=file.stem
            )
        if name is None:
            report.skip(file, SkipReason.CANCELLED)
            return
        if not name:
            report.skip(file, SkipReason.IGNORED, "empty name")
            return

        extension = extension_of(file)
        if kind is ExtraKind.EDITION:
            destination = movie_edition_path(self._library, movie, name, extension)
        else:
            destination = movie_extra_path(self._library, movie, Extra(kind, name), extension)
        report.add_move(file, destination)

    # -- Show scopes -----------------------------------------------

    def _scan_show_scope(self, directory: Path, root: Path) -> ScanReport:
        log.info("Found folder: %s", directory)
        report = ScanReport()
        entries = self._list_scope(directory, report)
        if entries is None:
            return report
        files, folders = entries
        primary = self._resolve_show(directory)

        if primary is None:
            for file in files:
                report.skip(file, SkipReason.NO_PRIMARY)
            for folder in folders:
                report.extend(self._scan_show_scope(folder, root))
            return report

        scope = Scope(directory, MediaKind.SHOW, primary, root=root)
        for file in files:
            self._check_show_file(file, scope, report)
        for folder in folders:
            for file in walk_files(folder):
                self._check_show_file(file, scope, report)
        return report

    def _resolve_show(self, directory: Path) -> Candidate | None:
        try:
            candidates = resolve(tokenize(directory.name), MediaKind.SHOW, self._service)
        except NoMatchError as e:
            log.info("No show found for folder %s: %s", directory, e)
            return None
        return choose(candidates, str(directory), self._prompter)

    def _check_show_file(self, file: Path, scope: Scope, report: ScanReport) -> None:
        log.debug("Checking %s", file)
        video = self._sniff(file, scope, report)
        if video is None:
            return

        extension = extension_of(file)
        if not video:
            extension = self._subtitle_extension(file, report)
            if extension is None:
                return

        try:
            episode = extract(scope.relative(file))
        except ExtractionError as e:
            log.warning("%s, skipping", e)
            report.skip(file, SkipReason.EXTRACTION_FAILED)
            return
        log.debug("Found season %02d, episode %02d", episode.season, episode.episode)

        if video:
            report.add_move(
                file, show_episode_path(self._library, scope.primary, episode, extension)
            )
            return

        subtitle = self._ask_subtitle(file, report)
        if subtitle is not None:
            report.add_move(
                file,
                show_subtitle_path(self._library, scope.primary, episode, subtitle, extension),
            )

    # -- Shared file rules -----------------------------------------

    def _sniff(self, file: Path, scope: Scope, report: ScanReport) -> bool | None:
        """Apply the sample rule, then sniff the header.

        Returns None when the file has already been skipped.
        """
        if SAMPLE_MARKER in scope.from_root(file).lower():
            log.info("Skipping sample %s", file)
            report.skip(file, SkipReason.SAMPLE)
            return None
        try:
            return self._is_video_file(file)
        except OSError as e:
            log.error("Can not get file header for %s: %s", file, e)
            report.skip(file, SkipReason.UNREADABLE, str(e))
            return None

    def _subtitle_extension(self, file: Path, report: ScanReport) -> str | None:
        """Return the extension of a subtitle file, recording a skip otherwise."""
        extension = extension_of(file)
        if not extension:
            log.error("File %s has no file extension", file)
            report.skip(file, SkipReason.NO_EXTENSION)
            return None
        if extension.lower() not in SUBTITLE_EXTENSIONS:
            log.info("%s is not a video file nor subtitle, skipping", file)
            report.skip(file, SkipReason.UNSUPPORTED)
            return None
        return extension

    def _ask_subtitle(self, file: Path, report: ScanReport) -> SubtitleSpec | None:
        language = self._prompter.text(
            "Specify ISO-639-1 (2-letter) language code (e.g. 'en', 'de') "
            f"or leave empty to discard for '{file}'"
        )
        if language is None:
            report.skip(file, SkipReason.CANCELLED)
            return None
        if not language:
            report.skip(file, SkipReason.IGNORED, "subtitle discarded")
            return None

        forced = self._prompter.confirm("Is this a forced sub?", default=False)
        if forced is None:
            report.skip(file, SkipReason.CANCELLED)
            return None
        return SubtitleSpec(language=language.lower(), forced=forced)
