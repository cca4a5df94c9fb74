"""
Entries Repository
==================

Data access layer for the entries table.

Follows Repository Pattern: Abstracts database operations.

Every write commits immediately, so each bulk chunk is durable on its
own; a later chunk failing does not undo earlier ones.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import case, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ioc_tracker.db.models import Entry
from ioc_tracker.schemas.entries import Category, EntryCreate, EntryStats
from ioc_tracker.utils.clock import utc_now_iso
from ioc_tracker.utils.errors import PersistenceError
from ioc_tracker.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LIST_LIMIT = 500


class EntriesRepository:
    """
    Repository for entries table operations.

    Table Schema:
        id: int (PK, autoincrement)
        value: text
        type: str ('ipv4', 'ipv6', 'md5', 'sha1', 'sha256')
        category: str ('ip', 'hash')
        remark: text | None
        timestamp: str (ISO-8601)
        metadata: text | None (JSON)
    """

    def __init__(self, session: AsyncSession, list_limit: int = DEFAULT_LIST_LIMIT) -> None:
        """
        Initialize repository with async session.

        Args:
            session: SQLAlchemy async session
            list_limit: Row cap for listings without any filter
        """
        self._session = session
        self._list_limit = list_limit

    async def insert_many(self, records: Sequence[EntryCreate]) -> None:
        """
        Insert records with a single multi-row INSERT and commit.

        Args:
            records: Candidate entries, already chunked by the caller

        Raises:
            PersistenceError: If the statement or commit fails
        """
        if not records:
            return

        rows = [self._to_row(record) for record in records]

        try:
            await self._session.execute(insert(Entry.__table__).values(rows))
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error("Bulk insert failed", count=len(rows), error=str(e))
            raise PersistenceError(
                message="Failed to insert entries",
                details={"count": len(rows), "error": str(e)},
            ) from e

        logger.debug("Entries inserted", count=len(rows))

    async def insert_one(self, record: EntryCreate) -> Entry:
        """
        Insert a single entry and commit.

        Args:
            record: Candidate entry

        Returns:
            Persisted Entry with its assigned id

        Raises:
            PersistenceError: If the insert or commit fails
        """
        row = self._to_row(record)
        entry = Entry(
            value=row["value"],
            type=row["type"],
            category=row["category"],
            remark=row["remark"],
            timestamp=row["timestamp"],
            meta=row["metadata"],
        )

        try:
            self._session.add(entry)
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error("Insert failed", value=record.value[:64], error=str(e))
            raise PersistenceError(
                message="Failed to insert entry",
                details={"error": str(e)},
            ) from e

        logger.debug("Entry created", entry_id=entry.id, type=entry.type)
        return entry

    async def query_by_filters(
        self,
        query: str | None = None,
        category: Category | None = None,
    ) -> list[Entry]:
        """
        Search entries by value and/or category.

        Value matching is a case-insensitive substring match. Results are
        ranked exact match first, then prefix match, then other substring
        matches; within a rank, newest first. Without any filter the newest
        ``list_limit`` entries are returned.

        Args:
            query: Text to look for in the value (blank means no filter)
            category: Restrict to one category

        Returns:
            Matching entries in rank order
        """
        query = (query or "").strip() or None
        category = Category(category) if category is not None else None
        stmt = select(Entry)

        if category is not None:
            stmt = stmt.where(Entry.category == category.value)

        if query:
            rank = case(
                (func.lower(Entry.value) == query.lower(), 0),
                (Entry.value.istartswith(query, autoescape=True), 1),
                else_=2,
            )
            stmt = stmt.where(Entry.value.icontains(query, autoescape=True))
            stmt = stmt.order_by(rank, Entry.timestamp.desc(), Entry.id.desc())
        else:
            stmt = stmt.order_by(Entry.timestamp.desc(), Entry.id.desc())

        if query is None and category is None:
            stmt = stmt.limit(self._list_limit)

        result = await self._session.execute(stmt)
        entries = list(result.scalars().all())

        logger.debug(
            "Entries queried",
            query=query,
            category=category.value if category else None,
            count=len(entries),
        )
        return entries

    async def count_by_category(self) -> EntryStats:
        """
        Count entries grouped by category.

        Returns:
            EntryStats with total, ips and hashes
        """
        stmt = select(Entry.category, func.count(Entry.id)).group_by(Entry.category)
        result = await self._session.execute(stmt)
        counts = {category: count for category, count in result.all()}

        return EntryStats(
            total=sum(counts.values()),
            ips=counts.get(Category.IP.value, 0),
            hashes=counts.get(Category.HASH.value, 0),
        )

    @staticmethod
    def _to_row(record: EntryCreate) -> dict[str, Any]:
        """Column-keyed values for an INSERT."""
        return {
            "value": record.value,
            "type": record.type.value,
            "category": record.category.value,
            "remark": record.remark,
            "timestamp": record.timestamp or utc_now_iso(),
            "metadata": record.metadata,
        }
