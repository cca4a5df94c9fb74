"""
Services Package
================

Ingestion pipeline and batch persistence.
"""

from ioc_tracker.services.batch_writer import (
    DEFAULT_CHUNK_SIZE,
    chunked,
    persist_batch,
    persist_one,
)
from ioc_tracker.services.ingestion_service import IngestionResult, IngestionService

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "IngestionResult",
    "IngestionService",
    "chunked",
    "persist_batch",
    "persist_one",
]
