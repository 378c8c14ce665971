"""Configuration loading, saving and the first-run wizard."""
import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from .tmdb import load_api_key, validate_api_key

log = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".plex-media-ingest"
CONFIG_FILE_NAME = "config.json"


def default_config_path() -> Path:
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


class ConfigError(Exception):
    """Raised when the configuration cannot be read or is incomplete."""
    pass


@dataclass
class Config:
    """TMDB credential and library location."""
    tmdb_key: str
    library: Path

    def to_dict(self) -> dict:
        data = asdict(self)
        data["library"] = str(self.library)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        try:
            return cls(tmdb_key=str(data["tmdb_key"]), library=Path(data["library"]))
        except (KeyError, TypeError) as e:
            raise ConfigError(f"Incomplete config, missing {e}") from e


def save_config(config: Config, path: Path) -> None:
    """Persist *config* as pretty JSON, creating parent folders."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)


def first_run() -> Config:
    """Ask for the TMDB token and library path on the console.

    Raises:
        ConfigError: If the user aborts or leaves an answer empty
    """
    print("Running first run wizard...")
    print("The API read access token can be found at "
          "https://www.themoviedb.org/settings/api (you must be logged in).")
    try:
        while True:
            tmdb_key = input("Enter your TMDB API Read Access Token: ").strip()
            valid, message = validate_api_key(tmdb_key)
            print(message)
            if valid:
                break
        library = input("Enter your Plex Media Library path: ").strip()
    except (EOFError, KeyboardInterrupt) as e:
        raise ConfigError("First run wizard aborted") from e

    if not library:
        raise ConfigError("Library path cannot be empty")
    return Config(tmdb_key=tmdb_key, library=Path(library).expanduser())


def load_config(path: Path | None = None, first: bool = False) -> Config:
    """
    Load the configuration file, running the wizard when needed.

    The TMDB_API_KEY environment variable (or .env file) overrides the
    stored token.

    Args:
        path: Config file; defaults to ~/.plex-media-ingest/config.json
        first: Force the first-run wizard

    Raises:
        ConfigError: If the file is unreadable or incomplete
    """
    path = path or default_config_path()

    if first or not path.exists():
        if not first:
            log.warning("Config not found, running first run wizard...")
        config = first_run()
        save_config(config, path)
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigError(f"There was an error reading the config file {path}: {e}") from e

    config = Config.from_dict(data)
    env_key = load_api_key()
    if env_key:
        config.tmdb_key = env_key
    return config
