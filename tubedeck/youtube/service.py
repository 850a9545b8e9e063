import httpx
import logging
from typing import Any, AsyncIterator
from ..config import get_settings
from ..exceptions import ValidationError, UpstreamError


# Fixed projection and page size for every proxied search
SEARCH_PART = "snippet"
SEARCH_TYPE = "video"
SEARCH_MAX_RESULTS = 24

MISSING_PARAMS_MESSAGE = "Missing query or API key"
UPSTREAM_FAILURE_MESSAGE = "Failed to fetch videos"

logger = logging.getLogger("youtube.search")


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency providing the client used for upstream calls"""
    async with httpx.AsyncClient() as client:
        yield client


def build_search_params(query: str, api_key: str) -> dict[str, Any]:
    return {
        "part": SEARCH_PART,
        "q": query,
        "type": SEARCH_TYPE,
        "maxResults": SEARCH_MAX_RESULTS,
        "key": api_key,
    }


async def search_videos(client: httpx.AsyncClient, query: str | None, api_key: str | None) -> Any:
    """
    Forward a search to the YouTube Data API v3 and return its JSON body verbatim.

    Args:
        client: HTTP client used for the single upstream request
        query: Free-text search term
        api_key: YouTube Data API key supplied by the caller

    Returns:
        The decoded upstream JSON, unmodified

    Raises:
        ValidationError: query or API key missing; no upstream call is made
        UpstreamError: non-success status, transport failure or undecodable body
    """
    if not query or not api_key:
        raise ValidationError(MISSING_PARAMS_MESSAGE)

    url = get_settings().youtube.search_url
    try:
        response = await client.get(url, params=build_search_params(query, api_key))
        if not response.is_success:
            raise UpstreamError(f"YouTube API request failed with status {response.status_code}")
        data = response.json()
    except UpstreamError as e:
        logger.error(f"YouTube API error: {e}")
        raise UpstreamError(UPSTREAM_FAILURE_MESSAGE) from e
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"YouTube API error: {type(e).__name__}: {e}")
        raise UpstreamError(UPSTREAM_FAILURE_MESSAGE) from e

    logger.info(f"YouTube search returned {len(data.get('items', [])) if isinstance(data, dict) else 0} items")
    return data
