import httpx
from fastapi import APIRouter, Depends, Query
from typing import Optional, Annotated
from .models import ErrorResponse
from .service import get_http_client, search_videos

router = APIRouter(
    prefix="/api/youtube",
    tags=["youtube"]
)


@router.get(
    "/search",
    responses={
        400: {"model": ErrorResponse, "description": "Missing query or API key"},
        500: {"model": ErrorResponse, "description": "Upstream search failed"},
    },
)
async def search(
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    q: Optional[str] = Query(default=None, description="Search text"),
    key: Optional[str] = Query(default=None, description="YouTube Data API v3 key"),
):
    """
    PUBLIC: Stateless pass-through to the YouTube search endpoint.

    Issues one ``search.list`` call (videos only, 24 results, snippet
    projection) and relays the upstream JSON unmodified. Errors are turned
    into ``{"error": ...}`` bodies by the application's exception handlers.
    """
    return await search_videos(client, q, key)
