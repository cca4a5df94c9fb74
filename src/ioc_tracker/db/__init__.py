"""Database module."""
from ioc_tracker.db.connection import (
    DatabaseManager,
    close_database,
    get_session,
    health_check,
    init_database,
)
from ioc_tracker.db.models import Base, Entry

__all__ = [
    "Base",
    "DatabaseManager",
    "Entry",
    "close_database",
    "get_session",
    "health_check",
    "init_database",
]
