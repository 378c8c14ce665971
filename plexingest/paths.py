"""Destination path synthesis following the Plex library naming scheme."""
import re
from pathlib import Path

from .models import Candidate, EpisodeRef, Extra, SubtitleSpec


MOVIES_FOLDER = "Movies"
SHOWS_FOLDER = "TV Shows"


def sanitize_filename(name: str) -> str:
    """
    Remove characters that are invalid in file names.

    Args:
        name: The name to sanitize

    Returns:
        Sanitized name safe for use as a path component
    """
    # Characters not allowed in Windows filenames: / \ : * ? " < > |
    # plus ASCII control characters
    sanitized = re.sub(r'[<>:"/\\|?*\x00-\x1f]', '', name)
    # Remove leading/trailing dots and spaces
    sanitized = sanitized.strip('. ')
    # Replace multiple spaces with single space
    sanitized = re.sub(r'\s+', ' ', sanitized)
    return sanitized


def media_folder_name(media: Candidate) -> str:
    """
    Format the library folder name for a movie or show.

    Format: {Title} ({Year}){tmdb-{id}}, or {Title} {tmdb-{id}} without a year
    """
    title = sanitize_filename(media.title)
    if media.year:
        return f"{title} ({media.year}){{tmdb-{media.id}}}"
    return f"{title} {{tmdb-{media.id}}}"


def format_episode_code(episode: EpisodeRef) -> str:
    return f"S{episode.season:02d}E{episode.episode:02d}"


def subtitle_suffix(subtitle: SubtitleSpec, extension: str) -> str:
    """Format the '.{lang}[.forced].{ext}' tail of a subtitle file name."""
    forced = ".forced" if subtitle.forced else ""
    return f".{subtitle.language.lower()}{forced}.{extension}"


def movie_path(library: Path, movie: Candidate, extension: str) -> Path:
    folder = media_folder_name(movie)
    return library / MOVIES_FOLDER / folder / f"{folder}.{extension}"


def movie_edition_path(
    library: Path, movie: Candidate, edition: str, extension: str
) -> Path:
    folder = media_folder_name(movie)
    label = sanitize_filename(edition)
    return library / MOVIES_FOLDER / folder / f"{folder} {{edition-{label}}}.{extension}"


def movie_extra_path(
    library: Path, movie: Candidate, extra: Extra, extension: str
) -> Path:
    """Extras live in a sub folder named after their kind."""
    folder = media_folder_name(movie)
    name = sanitize_filename(extra.name)
    return library / MOVIES_FOLDER / folder / extra.kind.value / f"{name}.{extension}"


def movie_subtitle_path(
    library: Path, movie: Candidate, subtitle: SubtitleSpec, extension: str
) -> Path:
    folder = media_folder_name(movie)
    return library / MOVIES_FOLDER / folder / f"{folder}{subtitle_suffix(subtitle, extension)}"


def _season_dir(library: Path, show: Candidate, episode: EpisodeRef) -> Path:
    return library / SHOWS_FOLDER / media_folder_name(show) / f"Season {episode.season:02d}"


def show_episode_path(
    library: Path, show: Candidate, episode: EpisodeRef, extension: str
) -> Path:
    """
    Format a show episode destination.

    Format: TV Shows/{folder}/Season {ss}/{Title} - S{ss}E{ee}.ext
    """
    name = f"{sanitize_filename(show.title)} - {format_episode_code(episode)}"
    return _season_dir(library, show, episode) / f"{name}.{extension}"


def show_subtitle_path(
    library: Path,
    show: Candidate,
    episode: EpisodeRef,
    subtitle: SubtitleSpec,
    extension: str,
) -> Path:
    name = f"{sanitize_filename(show.title)} - {format_episode_code(episode)}"
    return _season_dir(library, show, episode) / f"{name}{subtitle_suffix(subtitle, extension)}"
