from typing import Optional
from sqlalchemy.orm import Session, sessionmaker

from .base import StateStore
from ..entities.state_slot import StateSlot


class SqlStateStore(StateStore):
    """Stores each slot as one row of the ``state_slots`` table."""

    def __init__(self, session_factory: sessionmaker, reset_on_corruption: bool = False):
        super().__init__(reset_on_corruption=reset_on_corruption)
        self.session_factory = session_factory

    def get_slot(self, key: str) -> Optional[str]:
        db: Session = self.session_factory()
        try:
            slot = db.get(StateSlot, key)
            return slot.value if slot else None
        finally:
            db.close()

    def set_slot(self, key: str, value: str) -> None:
        db: Session = self.session_factory()
        try:
            slot = db.get(StateSlot, key)
            if slot is None:
                db.add(StateSlot(key=key, value=value))
            else:
                slot.value = value
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
