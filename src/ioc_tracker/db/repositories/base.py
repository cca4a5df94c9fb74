"""
Entry Store Protocol
====================

The storage capability the ingestion pipeline and API depend on.
EntriesRepository implements it over SQLAlchemy; tests substitute an
in-memory fake.
"""

from collections.abc import Sequence
from typing import Protocol

from ioc_tracker.db.models import Entry
from ioc_tracker.schemas.entries import Category, EntryCreate, EntryStats


class EntryStore(Protocol):
    """Append-only store of indicator entries."""

    async def insert_many(self, records: Sequence[EntryCreate]) -> None:
        """Write all records in one statement and commit them."""
        ...

    async def insert_one(self, record: EntryCreate) -> Entry:
        """Write one record, commit, and return it with its id."""
        ...

    async def query_by_filters(
        self,
        query: str | None = None,
        category: Category | None = None,
    ) -> list[Entry]:
        """Search entries; best value matches first, then newest first."""
        ...

    async def count_by_category(self) -> EntryStats:
        """Count all entries, split by category."""
        ...
