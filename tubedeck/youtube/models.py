from pydantic import BaseModel, ConfigDict
from typing import Optional, Union


class Thumbnail(BaseModel):
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


class SearchSnippet(BaseModel):
    """Snippet projection of a search result (only the fields the dashboard reads)"""
    model_config = ConfigDict(extra="allow")

    title: str
    channelTitle: str
    publishedAt: str
    thumbnails: dict[str, Thumbnail]


class SearchResultId(BaseModel):
    model_config = ConfigDict(extra="allow")

    kind: Optional[str] = None
    videoId: Optional[str] = None


class SearchResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Union[SearchResultId, str]
    snippet: SearchSnippet

    @property
    def video_id(self) -> str:
        """The video id, whether the API nested it under ``id.videoId`` or not"""
        if isinstance(self.id, str):
            return self.id
        return self.id.videoId or ""


class SearchListResponse(BaseModel):
    """Shape of a YouTube Data API v3 ``search.list`` response"""
    model_config = ConfigDict(extra="allow")

    items: list[SearchResult]
    nextPageToken: Optional[str] = None
    regionCode: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
