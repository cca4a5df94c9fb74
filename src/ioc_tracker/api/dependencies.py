"""
API Dependencies
================

FastAPI dependency providers. Tests override ``get_entry_store`` to run
the routes against an in-memory store.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends

from ioc_tracker.config.settings import get_settings
from ioc_tracker.db.connection import get_session
from ioc_tracker.db.repositories.base import EntryStore
from ioc_tracker.db.repositories.entries_repo import EntriesRepository
from ioc_tracker.services.ingestion_service import IngestionService


async def get_entry_store() -> AsyncGenerator[EntryStore, None]:
    """Yield a repository bound to a fresh database session."""
    settings = get_settings()
    async with get_session() as session:
        yield EntriesRepository(session, list_limit=settings.list_limit)


def get_ingestion_service(
    store: Annotated[EntryStore, Depends(get_entry_store)],
) -> IngestionService:
    """Build the upload pipeline around the request's store."""
    return IngestionService(store, chunk_size=get_settings().batch_chunk_size)
