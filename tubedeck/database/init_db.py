"""
Database initialization utilities
"""

import logging
from sqlalchemy import text
from .core import engine, Base
from ..entities.state_slot import StateSlot  # noqa: F401  (registers the table)

logger = logging.getLogger(__name__)


def init_database(bind=None) -> bool:
    """
    Create the state slot table if it does not exist yet.
    There are no migrations: the schema is a single key/value table.
    """
    bind = bind or engine
    try:
        Base.metadata.create_all(bind=bind)
        logger.info(f"Database initialized at {bind.url.render_as_string(hide_password=True)}")
        return True
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        return False


def check_database_connection(bind=None) -> bool:
    """Check if database connection is working"""
    bind = bind or engine
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


if __name__ == "__main__":
    if check_database_connection():
        init_database()
    else:
        print("Please check your database connection and try again.")
