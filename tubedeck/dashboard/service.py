"""
Stateful dashboard: search results, selection, playlists and automation rules.

The dashboard owns every in-memory collection. The state store is a passive
serialization target that is read once by ``load()`` and rewritten in full
after each mutation.
"""
import httpx
import logging
import random
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from ..audit import DashboardEventType, log_dashboard_event
from ..exceptions import TubeDeckError
from ..storage.base import StateStore
from ..youtube.models import SearchResult
from .client import ProxySearchClient
from .models import AutomationRule, DashboardSnapshot, Playlist, Tab, Video

logger = logging.getLogger(__name__)

MOCK_VIDEO_COUNT = 12
MOCK_THUMBNAIL = "https://i.ytimg.com/vi/dQw4w9WgXcQ/mqdefault.jpg"
DEMO_QUERY = "demo"
DEFAULT_AUTOMATION_QUERY = "trending"
NOT_AVAILABLE = "N/A"
THUMBNAIL_QUALITIES = ("medium", "high", "default")


class TimeBasedIds:
    """Millisecond-timestamp ids that strictly increase within one session."""

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self.clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0

    def next(self, prefix: str) -> str:
        stamp = max(self.clock(), self._last + 1)
        self._last = stamp
        return f"{prefix}-{stamp}"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_locale_date(published_at: str) -> str:
    """Render an ISO-8601 timestamp as a short ``M/D/YYYY`` date string."""
    try:
        parsed = datetime.fromisoformat(published_at.replace("Z", "+00:00"))
    except ValueError:
        return published_at
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


def video_from_search_result(item: SearchResult) -> Video:
    """Map one upstream search item to a Video.

    The search endpoint carries no duration or view count, so both are "N/A".
    """
    thumbnails = item.snippet.thumbnails
    thumbnail = next((thumbnails[q].url for q in THUMBNAIL_QUALITIES if q in thumbnails), "")
    return Video(
        id=item.video_id,
        title=item.snippet.title,
        thumbnail=thumbnail,
        channel=item.snippet.channelTitle,
        views=NOT_AVAILABLE,
        published_at=format_locale_date(item.snippet.publishedAt),
        duration=NOT_AVAILABLE,
    )


def generate_mock_videos(query: str, rng: Optional[random.Random] = None) -> list[Video]:
    """Fabricate placeholder results used in demo mode and when search fails."""
    rng = rng or random.Random()
    return [
        Video(
            id=f"video-{i}",
            title=f"{query} - Tutorial Part {i + 1}",
            thumbnail=MOCK_THUMBNAIL,
            channel=f"Creator {i + 1}",
            views=f"{rng.randrange(1000)}K views",
            published_at=f"{rng.randrange(30)} days ago",
            duration=f"{rng.randrange(20) + 5}:{rng.randrange(60):02d}",
        )
        for i in range(MOCK_VIDEO_COUNT)
    ]


class Dashboard:
    """Single-user dashboard state machine with Search, Playlists and Automations tabs."""

    def __init__(
        self,
        store: StateStore,
        search_client: ProxySearchClient,
        rng: Optional[random.Random] = None,
        ids: Optional[TimeBasedIds] = None,
    ):
        self.store = store
        self.search_client = search_client
        self.rng = rng or random.Random()
        self.ids = ids or TimeBasedIds()

        self.active_tab: Tab = "search"
        self.search_query = ""
        self.videos: list[Video] = []
        self.playlists: list[Playlist] = []
        self.automations: list[AutomationRule] = []
        self.loading = False
        self.api_key = ""
        self.show_api_key_input = False
        self.demo_mode = False
        self.selected_videos: set[str] = set()

    # Credential gate

    def load(self) -> None:
        """Read all slots once. A missing credential shows the first-run gate."""
        saved_api_key = self.store.load_credential()
        if saved_api_key:
            self.api_key = saved_api_key
        else:
            self.show_api_key_input = True

        self.playlists = self.store.load_playlists()
        self.automations = self.store.load_automations()
        logger.info(
            f"Dashboard loaded: {len(self.playlists)} playlists, "
            f"{len(self.automations)} automations, credential {'present' if self.api_key else 'missing'}"
        )

    def save_api_key(self, api_key: str) -> None:
        self.api_key = api_key
        self.store.save_credential(api_key)
        self.show_api_key_input = False
        self.demo_mode = False
        log_dashboard_event(DashboardEventType.API_KEY_SAVED)

    def use_demo_mode(self) -> None:
        """Skip the gate without a credential and show mock results."""
        self.show_api_key_input = False
        self.demo_mode = True
        self.videos = self.generate_mock_videos(self.search_query.strip() or DEMO_QUERY)
        log_dashboard_event(DashboardEventType.DEMO_MODE_ENTERED)

    def open_api_settings(self) -> None:
        self.show_api_key_input = True

    def set_active_tab(self, tab: Tab) -> None:
        self.active_tab = tab

    # Search

    def generate_mock_videos(self, query: str) -> list[Video]:
        return generate_mock_videos(query, self.rng)

    async def search_videos(self) -> None:
        """Run one search for ``search_query``.

        Any failure of the live search (unreachable proxy, error status,
        malformed body) degrades to mock results instead of surfacing an error.
        """
        query = self.search_query
        if not query.strip() or not (self.api_key or self.demo_mode):
            return

        self.loading = True
        try:
            if self.demo_mode:
                self.videos = self.generate_mock_videos(query)
                return
            response = await self.search_client.search(query, self.api_key)
            # Non-video items (channels, playlists) carry no videoId and are skipped
            playable = [item for item in response.items if item.video_id]
            if len(playable) < len(response.items):
                logger.warning(f"Skipped {len(response.items) - len(playable)} search items without a video id")
            self.videos = [video_from_search_result(item) for item in playable]
            log_dashboard_event(DashboardEventType.SEARCH_COMPLETED, {"query": query, "results": len(self.videos)})
        except (httpx.HTTPError, TubeDeckError, ValueError) as e:
            logger.error(f"Search failed: {type(e).__name__}: {e}")
            self.videos = self.generate_mock_videos(query)
            log_dashboard_event(DashboardEventType.SEARCH_DEGRADED, {"query": query}, success=False)
        finally:
            self.loading = False

    def toggle_video_selection(self, video_id: str) -> None:
        if video_id in self.selected_videos:
            self.selected_videos.discard(video_id)
        else:
            self.selected_videos.add(video_id)

    # Playlists

    def find_playlist(self, playlist_id: str) -> Optional[Playlist]:
        return next((p for p in self.playlists if p.id == playlist_id), None)

    def create_playlist(self, name: str) -> Optional[Playlist]:
        if not name or not name.strip():
            return None

        playlist = Playlist(
            id=self.ids.next("playlist"),
            name=name,
            videos=[],
            created_at=utc_timestamp(),
        )
        self.playlists = [*self.playlists, playlist]
        self.store.save_all_playlists(self.playlists)
        log_dashboard_event(DashboardEventType.PLAYLIST_CREATED, {"playlist_id": playlist.id})
        return playlist

    def add_videos_to_playlist(self, playlist_id: str) -> None:
        """Append the selected results to a playlist and clear the selection.

        Videos already in the playlist are appended again.
        """
        playlist = self.find_playlist(playlist_id)
        if playlist is None:
            return

        videos_to_add = [v for v in self.videos if v.id in self.selected_videos]
        playlist.videos.extend(videos_to_add)

        self.store.save_all_playlists(self.playlists)
        self.selected_videos = set()
        log_dashboard_event(
            DashboardEventType.VIDEOS_ADDED,
            {"playlist_id": playlist_id, "count": len(videos_to_add)}
        )

    def delete_playlist(self, playlist_id: str) -> None:
        # Rules targeting this playlist are kept; see dangling_automations()
        self.playlists = [p for p in self.playlists if p.id != playlist_id]
        self.store.save_all_playlists(self.playlists)
        log_dashboard_event(DashboardEventType.PLAYLIST_DELETED, {"playlist_id": playlist_id})

    # Automations

    def add_automation(self) -> AutomationRule:
        rule = AutomationRule(
            id=self.ids.next("automation"),
            type="search",
            query=self.search_query or DEFAULT_AUTOMATION_QUERY,
            action="add_to_playlist",
            frequency="daily",
            enabled=True,
        )
        self.automations = [*self.automations, rule]
        self.store.save_all_automations(self.automations)
        log_dashboard_event(DashboardEventType.AUTOMATION_CREATED, {"automation_id": rule.id})
        return rule

    def toggle_automation(self, automation_id: str) -> None:
        self.automations = [
            a.model_copy(update={"enabled": not a.enabled}) if a.id == automation_id else a
            for a in self.automations
        ]
        self.store.save_all_automations(self.automations)
        log_dashboard_event(DashboardEventType.AUTOMATION_TOGGLED, {"automation_id": automation_id})

    def delete_automation(self, automation_id: str) -> None:
        self.automations = [a for a in self.automations if a.id != automation_id]
        self.store.save_all_automations(self.automations)
        log_dashboard_event(DashboardEventType.AUTOMATION_DELETED, {"automation_id": automation_id})

    def dangling_automations(self) -> list[str]:
        """Ids of rules whose target playlist no longer exists."""
        playlist_ids = {p.id for p in self.playlists}
        return [
            a.id for a in self.automations
            if a.target_playlist is not None and a.target_playlist not in playlist_ids
        ]

    def snapshot(self) -> DashboardSnapshot:
        return DashboardSnapshot(
            active_tab=self.active_tab,
            search_query=self.search_query,
            loading=self.loading,
            demo_mode=self.demo_mode,
            show_api_key_input=self.show_api_key_input,
            has_api_key=bool(self.api_key),
            videos=self.videos,
            selected_videos=sorted(self.selected_videos),
            playlists=self.playlists,
            automations=self.automations,
            dangling_automations=self.dangling_automations(),
        )
