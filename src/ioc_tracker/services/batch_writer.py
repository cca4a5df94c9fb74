"""Chunked persistence of candidate entries.

Large uploads are split into contiguous chunks so no single INSERT
exceeds the database's bound-parameter limit. Chunks are written
sequentially in input order, each committed on its own: if chunk N
fails, chunks 0..N-1 stay in the store.
"""
from collections.abc import Iterator, Sequence
from typing import TypeVar

from ioc_tracker.db.models import Entry
from ioc_tracker.db.repositories.base import EntryStore
from ioc_tracker.schemas.entries import EntryCreate
from ioc_tracker.utils.clock import utc_now_iso
from ioc_tracker.utils.errors import PersistenceError
from ioc_tracker.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 500

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield contiguous slices of at most ``size`` items."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield items[start:start + size]


def with_default_timestamp(record: EntryCreate) -> EntryCreate:
    """Return the record with ``timestamp`` set to now if it has none."""
    if record.timestamp:
        return record
    return record.model_copy(update={"timestamp": utc_now_iso()})


async def persist_batch(
    store: EntryStore,
    records: Sequence[EntryCreate],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> None:
    """Write records to the store in order, ``chunk_size`` rows per statement.

    Args:
        store: Target store
        records: Candidate entries in the order they should be written
        chunk_size: Maximum rows per insert

    Raises:
        PersistenceError: If any chunk fails; earlier chunks stay committed
        ValueError: If chunk_size is not positive
    """
    written = 0
    for index, chunk in enumerate(chunked(records, chunk_size)):
        prepared = [with_default_timestamp(record) for record in chunk]
        try:
            await store.insert_many(prepared)
        except PersistenceError as e:
            e.details.setdefault("chunk_index", index)
            e.details.setdefault("rows_committed", written)
            logger.error(
                "Chunk write failed",
                chunk_index=index,
                rows_committed=written,
                error=e.message,
            )
            raise
        except Exception as e:
            logger.error(
                "Chunk write failed",
                chunk_index=index,
                rows_committed=written,
                error=str(e),
            )
            raise PersistenceError(
                message=f"Failed to write chunk {index}: {e}",
                details={"chunk_index": index, "rows_committed": written},
            ) from e

        written += len(prepared)
        logger.debug("Chunk written", chunk_index=index, rows=len(prepared))

    logger.info("Batch persisted", rows=written, chunk_size=chunk_size)


async def persist_one(store: EntryStore, record: EntryCreate) -> Entry:
    """Write a single record and return the stored entry with its id."""
    return await store.insert_one(with_default_timestamp(record))
