"""
Entries Routes
==============

Endpoints:
- GET  /api/entries - Search/filter entries
- POST /api/entries - Create a single entry
- GET  /api/stats   - Aggregate counts
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from ioc_tracker.api.dependencies import get_entry_store
from ioc_tracker.db.repositories.base import EntryStore
from ioc_tracker.schemas.entries import Category, EntryCreate, EntryRead, EntryStats
from ioc_tracker.services.batch_writer import persist_one
from ioc_tracker.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/entries",
    response_model=list[EntryRead],
    summary="Search entries",
)
async def list_entries(
    store: Annotated[EntryStore, Depends(get_entry_store)],
    q: Annotated[str | None, Query(description="Value search text")] = None,
    category: Annotated[Category | None, Query(description="ip or hash")] = None,
) -> list[EntryRead]:
    """
    Return entries matching ``q`` and/or ``category``.

    Exact value matches rank first, then prefix matches, then substring
    matches; newest first within each rank.
    """
    entries = await store.query_by_filters(q, category)
    return [EntryRead.model_validate(entry) for entry in entries]


@router.get(
    "/stats",
    response_model=EntryStats,
    summary="Entry counts",
)
async def get_stats(
    store: Annotated[EntryStore, Depends(get_entry_store)],
) -> EntryStats:
    """Return total, ip and hash counts."""
    return await store.count_by_category()


@router.post(
    "/entries",
    response_model=EntryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create entry",
)
async def create_entry(
    payload: EntryCreate,
    store: Annotated[EntryStore, Depends(get_entry_store)],
) -> EntryRead:
    """Store one entry; the timestamp defaults to now."""
    entry = await persist_one(store, payload)
    logger.info("Entry created", entry_id=entry.id, type=entry.type)
    return EntryRead.model_validate(entry)
