"""
Key/value slot entity backing the dashboard's local state store.
"""
from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime, timezone

from ..database.core import Base


def _utcnow():
    return datetime.now(timezone.utc)


class StateSlot(Base):
    """One named text slot (credential, playlists or automation rules)."""

    __tablename__ = "state_slots"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<StateSlot(key='{self.key}', size={len(self.value or '')})>"
