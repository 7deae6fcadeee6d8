"""
Database Initialization - Create the application tables.
"""
from typing import Optional

from knowyourself.core.logging_config import get_logger
from knowyourself.database.connection import DatabaseConnection, get_database
from knowyourself.database.models import Base

logger = get_logger(__name__)


def init_tables(db: Optional[DatabaseConnection] = None) -> bool:
    """
    Create all tables if they don't exist.

    Called once during application startup.

    Returns:
        True if tables were created successfully
    """
    try:
        db = db or get_database()
        Base.metadata.create_all(db.engine)
        logger.info("Database tables initialized successfully")
        return True

    except Exception as e:
        logger.error(f"Failed to initialize tables: {e}")
        raise
