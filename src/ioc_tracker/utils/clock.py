"""Timestamp helpers."""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """
    Current UTC time as an ISO-8601 string with millisecond precision.

    Example:
        >>> utc_now_iso()
        '2024-05-01T12:30:45.123Z'
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
