import httpx
import logging
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import SearchResponseError
from ..youtube.models import SearchListResponse

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/youtube/search"


class ProxySearchClient:
    """Calls the proxy search endpoint and parses its body into a typed response."""

    def __init__(self, base_url: str, transport: httpx.AsyncBaseTransport | None = None):
        self.base_url = base_url
        self.transport = transport

    async def search(self, query: str, api_key: str) -> SearchListResponse:
        """
        Raises:
            SearchResponseError: error status, non-JSON body or unexpected shape
            httpx.HTTPError: the proxy could not be reached
        """
        async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport) as client:
            response = await client.get(SEARCH_PATH, params={"q": query, "key": api_key})

        if not response.is_success:
            raise SearchResponseError(
                f"Search proxy answered {response.status_code}",
                status_code=response.status_code
            )
        try:
            return SearchListResponse.model_validate_json(response.content)
        except PydanticValidationError as e:
            raise SearchResponseError(f"Unexpected search response shape: {e.error_count()} errors") from e
