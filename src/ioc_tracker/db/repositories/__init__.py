"""
Repositories Package
====================

Data access for the entries table.
"""

from ioc_tracker.db.repositories.base import EntryStore
from ioc_tracker.db.repositories.entries_repo import EntriesRepository

__all__ = ["EntryStore", "EntriesRepository"]
