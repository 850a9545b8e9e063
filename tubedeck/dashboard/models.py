from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Literal, Optional

Tab = Literal["search", "playlists", "automations"]
RuleType = Literal["search", "channel", "trending"]
RuleAction = Literal["add_to_playlist", "download", "notify"]


class StoredModel(BaseModel):
    """Base for everything persisted in a state slot (camelCase on disk)"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Video(StoredModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    thumbnail: str
    channel: str
    views: str
    published_at: str
    duration: str


class Playlist(StoredModel):
    id: str
    name: str
    videos: list[Video] = Field(default_factory=list)  # Duplicates allowed
    created_at: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Playlist name cannot be empty')
        return v


class AutomationRule(StoredModel):
    """Declarative description of a recurring search-and-collect action.

    Rules are records only: nothing executes them and nothing writes
    ``last_run``.
    """
    id: str
    type: RuleType = "search"
    query: str
    action: RuleAction = "add_to_playlist"
    target_playlist: Optional[str] = None
    frequency: str = "daily"
    last_run: Optional[str] = None
    enabled: bool = True


class DashboardSnapshot(BaseModel):
    """Read-only view of the dashboard state. Never carries the credential."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    active_tab: Tab
    search_query: str
    loading: bool
    demo_mode: bool
    show_api_key_input: bool
    has_api_key: bool
    videos: list[Video]
    selected_videos: list[str]
    playlists: list[Playlist]
    automations: list[AutomationRule]
    dangling_automations: list[str]
