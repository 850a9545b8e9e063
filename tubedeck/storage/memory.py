from typing import Optional
from .base import StateStore


class InMemoryStateStore(StateStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, slots: Optional[dict[str, str]] = None, reset_on_corruption: bool = False):
        super().__init__(reset_on_corruption=reset_on_corruption)
        self.slots: dict[str, str] = dict(slots or {})

    def get_slot(self, key: str) -> Optional[str]:
        return self.slots.get(key)

    def set_slot(self, key: str, value: str) -> None:
        self.slots[key] = value
