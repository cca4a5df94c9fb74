"""
Row Normalizer
==============

Maps a spreadsheet row with arbitrary column headers to an EntryCreate.

Uploaded files come from many sources, so headers vary in name and case.
Candidate keys are probed in a fixed priority order; the first key whose
cell is non-empty wins. Keys are matched case-sensitively.

A row without any usable value is skipped (``normalize_row`` returns
None); this is not an error.
"""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from ioc_tracker.classification.classifier import category_for, classify
from ioc_tracker.ingest.table_reader import is_missing
from ioc_tracker.schemas.entries import EntryCreate
from ioc_tracker.utils.clock import utc_now_iso

VALUE_KEYS: tuple[str, ...] = ("IP", "ip", "Hash", "hash", "value")
REMARK_KEYS: tuple[str, ...] = ("Remark", "remark", "notes")


def normalize_row(row: Mapping[str, Any]) -> EntryCreate | None:
    """
    Build a candidate entry from one spreadsheet row.

    Args:
        row: Header-keyed cells of a single row

    Returns:
        EntryCreate with classified type/category, or None to skip the row

    Example:
        >>> normalize_row({"IP": " 10.0.0.1 ", "notes": "test"})
        EntryCreate(value='10.0.0.1', type=<IndicatorType.IPV4: 'ipv4'>, ...)
        >>> normalize_row({"foo": "bar"}) is None
        True
    """
    raw_value = first_present(row, VALUE_KEYS)
    if raw_value is None:
        return None

    value = str(raw_value).strip()
    indicator_type = classify(value)
    raw_remark = first_present(row, REMARK_KEYS)

    return EntryCreate(
        value=value,
        type=indicator_type,
        category=category_for(indicator_type),
        remark="" if raw_remark is None else str(raw_remark),
        timestamp=utc_now_iso(),
        metadata=snapshot_row(row),
    )


def first_present(row: Mapping[str, Any], keys: Sequence[str]) -> Any | None:
    """
    Return the first non-empty cell among ``keys``, in order.

    Missing keys, None, NaN and whitespace-only strings count as empty.
    """
    for key in keys:
        cell = row.get(key)
        if is_missing(cell):
            continue
        if isinstance(cell, str) and not cell.strip():
            continue
        return cell
    return None


def snapshot_row(row: Mapping[str, Any]) -> str:
    """Serialize the full source row to JSON; non-JSON cells are stringified."""
    return json.dumps(dict(row), default=str, ensure_ascii=False)
