"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the ioc-tracker test suite.

Environment variables are set before any application module is imported
so the cached settings point at an in-memory SQLite database.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("ENVIRONMENT", "development")

from collections.abc import Sequence
from io import BytesIO

import pytest
from openpyxl import Workbook

from ioc_tracker.db.models import Entry
from ioc_tracker.schemas.entries import Category, EntryCreate, EntryStats
from ioc_tracker.utils.errors import PersistenceError


class FakeEntryStore:
    """
    In-memory EntryStore.

    Records every insert_many call size in ``insert_calls`` and can be told
    to fail on a given call index via ``fail_on_call``.
    """

    def __init__(self) -> None:
        self.entries: list[Entry] = []
        self.insert_calls: list[int] = []
        self.fail_on_call: int | None = None
        self._next_id = 1

    async def insert_many(self, records: Sequence[EntryCreate]) -> None:
        if self.fail_on_call == len(self.insert_calls):
            raise PersistenceError(message="simulated write failure")
        self.insert_calls.append(len(records))
        for record in records:
            self._add(record)

    async def insert_one(self, record: EntryCreate) -> Entry:
        return self._add(record)

    async def query_by_filters(
        self,
        query: str | None = None,
        category: Category | None = None,
    ) -> list[Entry]:
        matches = list(self.entries)
        if category is not None:
            matches = [e for e in matches if e.category == Category(category).value]
        # newest first, then stable-sort by rank
        matches.sort(key=lambda e: (e.timestamp, e.id), reverse=True)
        query = (query or "").strip().lower()
        if query:
            matches = [e for e in matches if query in e.value.lower()]

            def rank(entry: Entry) -> int:
                value = entry.value.lower()
                if value == query:
                    return 0
                return 1 if value.startswith(query) else 2

            matches.sort(key=rank)
        return matches

    async def count_by_category(self) -> EntryStats:
        ips = sum(1 for e in self.entries if e.category == Category.IP.value)
        return EntryStats(total=len(self.entries), ips=ips, hashes=len(self.entries) - ips)

    def _add(self, record: EntryCreate) -> Entry:
        entry = Entry(
            id=self._next_id,
            value=record.value,
            type=record.type.value,
            category=record.category.value,
            remark=record.remark,
            timestamp=record.timestamp,
            meta=record.metadata,
        )
        self._next_id += 1
        self.entries.append(entry)
        return entry


@pytest.fixture
def fake_store() -> FakeEntryStore:
    """Empty in-memory store."""
    return FakeEntryStore()


@pytest.fixture
def sample_rows():
    """Spreadsheet rows with mixed header spellings."""
    return [
        {"IP": "192.168.1.10", "Remark": "internal scanner"},
        {"ip": "2001:0db8:85a3:0000:0000:8a2e:0370:7334", "notes": "v6 beacon"},
        {"Hash": "d41d8cd98f00b204e9800998ecf8427e", "remark": "empty file md5"},
        {"hash": "da39a3ee5e6b4b0d3255bfef95601890afd80709"},
        {"value": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"},
        {"comment": "row without a value"},
    ]


def build_xlsx(*sheets: list[list]) -> bytes:
    """Build an .xlsx workbook in memory; each argument is one sheet's rows."""
    wb = Workbook()
    for index, rows in enumerate(sheets):
        ws = wb.active if index == 0 else wb.create_sheet(f"Sheet{index + 1}")
        for row in rows:
            ws.append(row)
    buffer = BytesIO()
    wb.save(buffer)
    wb.close()
    return buffer.getvalue()


@pytest.fixture
def xlsx_builder():
    """Return the in-memory workbook builder."""
    return build_xlsx
