"""
Schemas Package
===============

Pydantic models for entries, API requests and responses.
"""

from ioc_tracker.schemas.entries import (
    Category,
    EntryCreate,
    EntryRead,
    EntryStats,
    IndicatorType,
)
from ioc_tracker.schemas.responses import (
    ErrorResponse,
    HealthCheckResponse,
    UploadResponse,
)

__all__ = [
    "Category",
    "EntryCreate",
    "EntryRead",
    "EntryStats",
    "IndicatorType",
    "ErrorResponse",
    "HealthCheckResponse",
    "UploadResponse",
]
