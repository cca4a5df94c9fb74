"""
Custom Exception Classes
========================

Application-specific exceptions for proper error handling.

A row without a usable value is not an error: the normalizer skips it
and the ingestion result counts it separately.
"""

from typing import Any


class IndicatorTrackerError(Exception):
    """Base exception for the ioc-tracker service."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnsupportedFormatError(IndicatorTrackerError):
    """Raised when an upload's extension has no registered reader."""

    pass


class ParsingError(IndicatorTrackerError):
    """Raised when file bytes cannot be parsed as the declared format."""

    pass


class PersistenceError(IndicatorTrackerError):
    """
    Raised when a store write fails.

    Chunks committed before the failure are not rolled back, so callers
    must assume a partial import.
    """

    pass


class FileSizeError(IndicatorTrackerError):
    """Raised when an upload exceeds the maximum allowed size."""

    pass
