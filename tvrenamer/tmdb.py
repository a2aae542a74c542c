"""TMDB API client implementing the metadata lookup capability."""
import logging
import re
import time
from difflib import SequenceMatcher
from typing import Any

import requests

from .config import DEFAULT_LANGUAGE, load_api_key
from .errors import EpisodeNotFound, MetadataError, SeriesNotFound


TMDB_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_TIMEOUT = 10
RATE_LIMIT_DELAY = 0.25  # 250ms between requests to avoid rate limiting

log = logging.getLogger(__name__)


def normalize_for_comparison(text: str) -> str:
    """Normalize a string for comparison."""
    text = text.lower()
    text = re.sub(r'[^\w\s]', '', text)
    return re.sub(r'\s+', ' ', text).strip()


def similarity_score(s1: str, s2: str) -> float:
    """Calculate similarity between two strings."""
    return SequenceMatcher(
        None, normalize_for_comparison(s1), normalize_for_comparison(s2)
    ).ratio()


def choose_best_series(results: list[dict], name: str) -> dict:
    """
    Pick the search result that best matches *name*.

    Title similarity (best of localized and original name) ranks first, an
    exact normalized match earns a bonus, and popularity breaks ties.
    """
    name_norm = normalize_for_comparison(name)

    def score(result: dict) -> float:
        localized = result.get("name") or ""
        original = result.get("original_name") or ""
        title_sim = max(similarity_score(name, localized), similarity_score(name, original))
        exact = name_norm in (
            normalize_for_comparison(localized),
            normalize_for_comparison(original),
        )
        pop_bonus = min((result.get("popularity") or 0) / 1000, 1.0) * 0.05
        return title_sim + (0.3 if exact else 0.0) + pop_bonus

    return max(results, key=score)


class TMDBClient:
    """Client for TMDB API."""

    def __init__(
        self,
        api_key: str | None = None,
        language: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize TMDB client.

        Args:
            api_key: TMDB API key. If not provided, attempts to load from env/.env.
            language: Default TMDB language tag (e.g. "en-US").
            timeout: Request timeout in seconds.

        Raises:
            MetadataError: If API key is not found
        """
        self.api_key = api_key or load_api_key()
        if not self.api_key:
            raise MetadataError(
                "TMDB API key not found.",
                "Set it using one of these methods:\n"
                "  1. Environment variable: export TMDB_API_KEY=your_key\n"
                "  2. Create a .env file with: TMDB_API_KEY=your_key\n"
                "Get your free API key at: https://www.themoviedb.org/settings/api"
            )
        self.language = language or DEFAULT_LANGUAGE
        self.timeout = timeout
        self._last_request_time = 0.0
        self._series_language: dict[int, str] = {}
        self._seasons: dict[tuple[int, int], dict[int, str]] = {}

    def _rate_limit(self) -> None:
        """Apply rate limiting between requests."""
        elapsed = time.time() - self._last_request_time
        if elapsed < RATE_LIMIT_DELAY:
            time.sleep(RATE_LIMIT_DELAY - elapsed)
        self._last_request_time = time.time()

    def _request(self, endpoint: str, params: dict[str, Any]) -> dict | None:
        """
        Make a single request to the TMDB API.

        Args:
            endpoint: API endpoint (e.g., '/search/tv')
            params: Query parameters

        Returns:
            JSON response, or None when TMDB answers 404

        Raises:
            MetadataError: On any other failure
        """
        self._rate_limit()

        url = f"{TMDB_BASE_URL}{endpoint}"
        all_params = {"api_key": self.api_key, "language": self.language, **params}

        log_params = {k: v for k, v in all_params.items() if k != "api_key"}
        log.debug("GET %s params=%s", endpoint, log_params)

        try:
            response = requests.get(url, params=all_params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise MetadataError(f"TMDB request failed: {endpoint}", str(e)) from e

        log.debug("Response status: %s", response.status_code)
        if response.status_code == 404:
            return None

        try:
            response.raise_for_status()
            return response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise MetadataError(f"TMDB request failed: {endpoint}", str(e)) from e

    def search_series(self, name: str, language: str) -> int:
        """
        Search for a TV series on TMDB.

        Args:
            name: Series title to search for
            language: Language tag for the results

        Returns:
            TMDB series id of the best match

        Raises:
            SeriesNotFound: If TMDB has no match
        """
        data = self._request("/search/tv", {"query": name, "language": language})
        results = (data or {}).get("results") or []
        if not results:
            raise SeriesNotFound(name, "TMDB search returned no results")

        best = choose_best_series(results, name)
        series_id = best["id"]
        log.debug("TMDB found: id=%s, name=%r", series_id, best.get("name"))

        self._series_language[series_id] = language
        return series_id

    def _season_titles(self, series_id: int, season_no: int) -> dict[int, str]:
        key = (series_id, season_no)
        if key not in self._seasons:
            language = self._series_language.get(series_id, self.language)
            data = self._request(
                f"/tv/{series_id}/season/{season_no}", {"language": language}
            )
            episodes = (data or {}).get("episodes") or []
            self._seasons[key] = {
                ep["episode_number"]: ep.get("name") or ""
                for ep in episodes
                if "episode_number" in ep
            }
            log.debug("Season %d of %s has %d episode(s)",
                      season_no, series_id, len(self._seasons[key]))
        return self._seasons[key]

    def episode_title(self, series_id: int, season_no: int, episode_no: int) -> str:
        """
        Get an episode title from TMDB.

        The whole season is fetched once and kept for the life of the client,
        so an episode number past the end of the season is reported as
        missing rather than fetched.

        Args:
            series_id: TMDB series ID
            season_no: Season number
            episode_no: Episode number

        Returns:
            The episode title

        Raises:
            EpisodeNotFound: If the season has no such episode
        """
        titles = self._season_titles(series_id, season_no)
        if episode_no not in titles:
            raise EpisodeNotFound(series_id, season_no, episode_no)
        return titles[episode_no]
