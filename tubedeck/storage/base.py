"""
Flat key/value state store for the dashboard.

Three independent text slots hold the API credential, the playlists and the
automation rules. Collections are always rewritten whole: there is no
patching, merging or versioning, and the last writer wins.
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Optional
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..audit import DashboardEventType, log_dashboard_event
from ..dashboard.models import AutomationRule, Playlist
from ..exceptions import StateStoreCorruptedError

logger = logging.getLogger(__name__)

CREDENTIAL_SLOT = "youtube_api_key"
PLAYLISTS_SLOT = "playlists"
AUTOMATIONS_SLOT = "automations"

_playlists_adapter = TypeAdapter(list[Playlist])
_automations_adapter = TypeAdapter(list[AutomationRule])


class StateStore(ABC):
    """Slot-level persistence interface injected into the dashboard."""

    def __init__(self, reset_on_corruption: bool = False):
        self.reset_on_corruption = reset_on_corruption

    @abstractmethod
    def get_slot(self, key: str) -> Optional[str]:
        """Return the raw text stored under ``key``, or None if absent"""

    @abstractmethod
    def set_slot(self, key: str, value: str) -> None:
        """Overwrite the raw text stored under ``key``"""

    def load_credential(self) -> Optional[str]:
        return self.get_slot(CREDENTIAL_SLOT)

    def save_credential(self, value: str) -> None:
        self.set_slot(CREDENTIAL_SLOT, value)

    def load_playlists(self) -> list[Playlist]:
        return self._load_collection(PLAYLISTS_SLOT, _playlists_adapter)

    def save_all_playlists(self, playlists: list[Playlist]) -> None:
        self._save_collection(PLAYLISTS_SLOT, playlists)

    def load_automations(self) -> list[AutomationRule]:
        return self._load_collection(AUTOMATIONS_SLOT, _automations_adapter)

    def save_all_automations(self, automations: list[AutomationRule]) -> None:
        self._save_collection(AUTOMATIONS_SLOT, automations)

    def _load_collection(self, key: str, adapter: TypeAdapter) -> list:
        raw = self.get_slot(key)
        if not raw:
            return []
        try:
            return adapter.validate_json(raw)
        except PydanticValidationError as e:
            if not self.reset_on_corruption:
                logger.error(f"Stored slot '{key}' is malformed ({e.error_count()} errors)")
                raise StateStoreCorruptedError(key, e.errors()[0]["msg"]) from e
            logger.warning(f"Stored slot '{key}' is malformed, resetting it to empty")
            log_dashboard_event(DashboardEventType.STATE_SLOT_RESET, {"slot": key}, success=False)
            return []

    def _save_collection(self, key: str, items: list) -> None:
        payload = json.dumps([item.to_storage() for item in items])
        self.set_slot(key, payload)
        logger.debug(f"Saved {len(items)} entries to slot '{key}'")