"""TMDB API client module."""
import logging
import os
import time
from pathlib import Path
from typing import Any

import requests
from dotenv import load_dotenv

from .models import Candidate, MediaKind


TMDB_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_TIMEOUT = 120
RATE_LIMIT_DELAY = 0.25  # 250ms between requests to avoid rate limiting
DEFAULT_LANGUAGE = "en-US"

SEARCH_ENDPOINTS = {
    MediaKind.MOVIE: "/search/movie",
    MediaKind.SHOW: "/search/tv",
}

log = logging.getLogger(__name__)


def load_api_key() -> str | None:
    """
    Load the TMDB read access token from environment or .env file.

    Priority:
    1. TMDB_API_KEY environment variable
    2. .env file in current directory
    3. .env file in user home directory

    Returns:
        Token string or None if not found
    """
    api_key = os.environ.get("TMDB_API_KEY")
    if api_key:
        return api_key

    for env_path in (Path.cwd() / ".env", Path.home() / ".env"):
        if env_path.exists():
            load_dotenv(env_path)
            api_key = os.environ.get("TMDB_API_KEY")
            if api_key:
                return api_key

    return None


def _auth_headers(api_key: str) -> dict[str, str]:
    return {
        "Accept": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


def validate_api_key(api_key: str) -> tuple[bool, str]:
    """Test a read access token against the TMDB /configuration endpoint.

    Returns (success, message).
    """
    if not api_key or not api_key.strip():
        return False, "API key cannot be empty."
    try:
        resp = requests.get(
            f"{TMDB_BASE_URL}/configuration",
            headers=_auth_headers(api_key.strip()),
            timeout=10,
        )
        if resp.status_code == 200:
            return True, "API key is valid."
        if resp.status_code == 401:
            return False, "Invalid API key (401 Unauthorized)."
        return False, f"Unexpected response: HTTP {resp.status_code}"
    except requests.exceptions.Timeout:
        return False, "Connection timed out. Check your internet connection."
    except requests.exceptions.RequestException as e:
        return False, f"Connection error: {e}"


def candidate_from_result(result: dict[str, Any], kind: MediaKind) -> Candidate:
    """Build a Candidate from one entry of a TMDB ``results`` array."""
    if kind is MediaKind.SHOW:
        title = result.get("name") or result.get("title", "")
        date = result.get("first_air_date") or result.get("release_date")
    else:
        title = result.get("title") or result.get("name", "")
        date = result.get("release_date") or result.get("first_air_date")
    return Candidate(
        id=int(result["id"]),
        title=title,
        original_language=result.get("original_language"),
        release_date=date or None,
        media_type=result.get("media_type", kind.value),
    )


class TMDBError(Exception):
    """Exception raised for TMDB API and transport errors."""
    pass


class TMDBClient:
    """Client for the TMDB search API."""

    def __init__(
        self,
        api_key: str | None = None,
        language: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize TMDB client.

        Args:
            api_key: TMDB API read access token. If not provided, attempts
                     to load from env/.env.
            language: TMDB API language tag (e.g. "en-US"). Falls back to
                      DEFAULT_LANGUAGE when *None*.
            timeout: Seconds to wait for a response.

        Raises:
            TMDBError: If API key is not found
        """
        self.api_key = api_key or load_api_key()
        if not self.api_key:
            raise TMDBError(
                "TMDB API key not found.\n"
                "Set it using one of these methods:\n"
                "  1. Environment variable: export TMDB_API_KEY=your_token\n"
                "  2. Create a .env file with: TMDB_API_KEY=your_token\n"
                "  3. Run with --first-run to store it in the config file\n"
                "Get your API read access token at: "
                "https://www.themoviedb.org/settings/api"
            )
        self.language = language or DEFAULT_LANGUAGE
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(_auth_headers(self.api_key))
        self._last_request_time = 0.0

    def _rate_limit(self) -> None:
        """Apply rate limiting between requests."""
        elapsed = time.time() - self._last_request_time
        if elapsed < RATE_LIMIT_DELAY:
            time.sleep(RATE_LIMIT_DELAY - elapsed)
        self._last_request_time = time.time()

    def _request(self, endpoint: str, params: dict | None = None) -> dict:
        """
        Make a single request to the TMDB API.

        Args:
            endpoint: API endpoint (e.g., '/search/movie')
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            TMDBError: On any transport failure, non-2xx status or
                       undecodable body. Nothing is retried.
        """
        self._rate_limit()

        url = f"{TMDB_BASE_URL}{endpoint}"
        all_params = {"language": self.language, **(params or {})}
        log.debug("GET %s params=%s", endpoint, all_params)

        try:
            response = self.session.get(url, params=all_params, timeout=self.timeout)
            log.debug("Response status: %s", response.status_code)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout as e:
            raise TMDBError(f"Timeout requesting {endpoint}") from e
        except requests.exceptions.RequestException as e:
            raise TMDBError(f"Request error for {endpoint}: {e}") from e
        except ValueError as e:
            raise TMDBError(f"Invalid JSON from {endpoint}") from e

    def search(self, query: str, kind: MediaKind) -> list[Candidate]:
        """
        Search TMDB for a movie or show.

        Args:
            query: Search string
            kind: Which search endpoint to use

        Returns:
            Candidates in the order TMDB returned them; empty when
            nothing matched.

        Raises:
            TMDBError: On request failure or a malformed response
        """
        data = self._request(SEARCH_ENDPOINTS[kind], {
            "query": query,
            "include_adult": "false",
            "page": 1,
        })
        try:
            results = data.get("results") or []
            log.debug(
                "Found %d results (total_results=%s) for %r",
                len(results), data.get("total_results"), query,
            )
            return [candidate_from_result(r, kind) for r in results]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise TMDBError(f"Malformed search response for {query!r}: {e!r}") from e
