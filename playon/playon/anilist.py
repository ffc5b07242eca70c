"""
AniList GraphQL client.

Supplies the single catalog operation the matcher needs, `search(query)`,
plus the lookups the CLI uses for display.
"""

from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import constants as c
from .config import AniListConfig, get_anilist_config
from .logging import get_logger, log_api_call, CatalogSearchError
from .models import MatchCandidate

logger = get_logger(__name__)

MEDIA_FIELDS = """
    id
    title {
        romaji
        english
        native
    }
    coverImage {
        large
        medium
    }
    episodes
    status
"""

SEARCH_ANIME_QUERY = """
query ($search: String, $perPage: Int) {
    Page(perPage: $perPage) {
        media(search: $search, type: ANIME) {%s}
    }
}
""" % MEDIA_FIELDS

ANIME_BY_ID_QUERY = """
query ($id: Int) {
    Media(id: $id, type: ANIME) {%s}
}
""" % MEDIA_FIELDS


def _create_retry_session(
    retries: int = c.ANILIST_RETRY_COUNT,
    backoff_factor: float = c.ANILIST_RETRY_BACKOFF_FACTOR,
    status_forcelist: tuple = (500, 502, 503, 504),
) -> requests.Session:
    """Creates a requests session with retry logic."""
    session = requests.Session()
    retry = Retry(
        total=retries,
        read=retries,
        connect=retries,
        backoff_factor=backoff_factor,
        status_forcelist=status_forcelist,
        allowed_methods=None,  # GraphQL goes over POST
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "Content-Type": "application/json",
        "Accept": "application/json",
    })
    return session


def candidate_from_media(media: Dict[str, Any]) -> MatchCandidate:
    """Converts an AniList Media object into a MatchCandidate."""
    title = media.get("title") or {}
    cover = media.get("coverImage") or {}
    return MatchCandidate(
        english=title.get("english"),
        romaji=title.get("romaji"),
        native=title.get("native"),
        anilist_id=media.get("id"),
        episodes=media.get("episodes"),
        status=media.get("status"),
        cover_image=cover.get("large") or cover.get("medium"),
    )


class AniListClient:
    def __init__(
        self,
        config: Optional[AniListConfig] = None,
        session: Optional[requests.Session] = None
    ):
        self.config = config or get_anilist_config()
        self.session = session or _create_retry_session(retries=self.config.max_retries)

    def _post(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        Sends a GraphQL request and returns its `data` member.

        Raises:
            CatalogSearchError: On transport errors, non-2xx responses,
                unreadable JSON or GraphQL-level errors.
        """
        url = self.config.api_url
        log_api_call(url, "POST", variables)

        try:
            response = self.session.post(
                url,
                json={"query": query, "variables": variables},
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.warning(f"AniList request failed ({variables}): {e}")
            raise CatalogSearchError(f"AniList request failed: {e}") from e
        except ValueError as e:
            logger.warning(f"AniList returned invalid JSON ({variables}): {e}")
            raise CatalogSearchError(f"Failed to parse AniList response: {e}") from e

        if not isinstance(payload, dict):
            raise CatalogSearchError("Unexpected AniList response shape")

        errors = payload.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            logger.warning(f"AniList query errors ({variables}): {messages}")
            raise CatalogSearchError(f"AniList query failed: {messages}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise CatalogSearchError("AniList response has no data")
        return data

    def search_anime(self, query: str, per_page: Optional[int] = None) -> List[Dict[str, Any]]:
        """Searches anime by title and returns the raw Media objects in AniList's order."""
        data = self._post(
            SEARCH_ANIME_QUERY,
            {"search": query, "perPage": per_page or self.config.per_page},
        )
        page = data.get("Page") or {}
        return page.get("media") or []

    def get_anime_by_id(self, anime_id: int) -> Optional[Dict[str, Any]]:
        """Fetches one anime by its AniList id."""
        data = self._post(ANIME_BY_ID_QUERY, {"id": anime_id})
        return data.get("Media")

    def search(self, query: str) -> Optional[MatchCandidate]:
        """
        Returns AniList's best guess for `query`, or None if there is none.

        This is the catalog operation the progressive matcher calls once
        per widening step.
        """
        results = self.search_anime(query)
        if not results:
            return None
        return candidate_from_media(results[0])
