"""Shared pytest fixtures for tubedeck tests.

Provides an isolated database, in-memory state stores, mock HTTP transports
for the upstream search API and the proxy, and a FastAPI test client.
"""

import os
import random
import tempfile
from pathlib import Path

import httpx
import pytest

# Settings and the engine are created at import time, so point them at a
# throwaway database before anything from tubedeck is imported.
_DB_DIR = tempfile.mkdtemp(prefix="tubedeck-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_DB_DIR) / 'test.db'}"
os.environ["ENVIRONMENT"] = "development"
os.environ.pop("SENTRY_DSN", None)

from fastapi.testclient import TestClient  # noqa: E402

from tubedeck.dashboard.client import ProxySearchClient  # noqa: E402
from tubedeck.dashboard.controller import get_dashboard  # noqa: E402
from tubedeck.dashboard.service import Dashboard, TimeBasedIds  # noqa: E402
from tubedeck.main import app  # noqa: E402
from tubedeck.storage.memory import InMemoryStateStore  # noqa: E402
from tubedeck.youtube.service import get_http_client  # noqa: E402


def make_search_item(video_id: str, title: str, channel: str = "Some Channel",
                     published_at: str = "2024-01-15T12:00:00Z") -> dict:
    """One item as returned by the YouTube search.list endpoint."""
    return {
        "kind": "youtube#searchResult",
        "etag": f"etag-{video_id}",
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {
            "publishedAt": published_at,
            "channelId": "UC123",
            "title": title,
            "description": "",
            "thumbnails": {
                "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg", "width": 120, "height": 90},
                "medium": {"url": f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg", "width": 320, "height": 180},
            },
            "channelTitle": channel,
            "liveBroadcastContent": "none",
        },
    }


@pytest.fixture
def search_payload():
    """A two-item upstream search response."""
    return {
        "kind": "youtube#searchListResponse",
        "etag": "abc",
        "nextPageToken": "CAIQAA",
        "regionCode": "US",
        "pageInfo": {"totalResults": 2, "resultsPerPage": 24},
        "items": [
            make_search_item("vid-a", "First result", "Channel A", "2024-01-15T12:00:00Z"),
            make_search_item("vid-b", "Second result", "Channel B", "2023-11-02T08:30:00Z"),
        ],
    }


class RecordingHandler:
    """httpx MockTransport handler that records requests and replays a response."""

    def __init__(self, status_code: int = 200, json=None, content: bytes | None = None, error: Exception | None = None):
        self.status_code = status_code
        self.json = json
        self.content = content
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)


@pytest.fixture
def upstream():
    """Install a mock upstream API behind the proxy endpoint.

    Returns a setter: ``upstream(status_code=..., json=...)`` gives back the
    RecordingHandler used for every upstream call.
    """
    def install(**kwargs) -> RecordingHandler:
        handler = RecordingHandler(**kwargs)

        async def override():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                yield client

        app.dependency_overrides[get_http_client] = override
        return handler

    yield install
    app.dependency_overrides.pop(get_http_client, None)


@pytest.fixture
def memory_store():
    return InMemoryStateStore()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_dashboard(memory_store, rng):
    """Build a loaded dashboard whose proxy calls go to a MockTransport handler."""
    def build(handler=None, store=None, ids=None) -> Dashboard:
        handler = handler or RecordingHandler(status_code=500, json={"error": "Failed to fetch videos"})
        client = ProxySearchClient("http://proxy.test", transport=httpx.MockTransport(handler))
        dashboard = Dashboard(store or memory_store, client, rng=rng, ids=ids or TimeBasedIds())
        dashboard.load()
        return dashboard
    return build


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    app.state.dashboard = None


@pytest.fixture
def dashboard_client(client, make_dashboard):
    """Test client whose dashboard routes use an in-memory dashboard."""
    dashboard = make_dashboard()
    app.dependency_overrides[get_dashboard] = lambda: dashboard
    return client, dashboard
