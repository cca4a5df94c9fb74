"""
Unit Tests for the Ingestion Service
====================================

End-to-end pipeline tests against the in-memory store.
"""

import pytest

from ioc_tracker.services.ingestion_service import IngestionResult, IngestionService
from ioc_tracker.utils.errors import ParsingError, UnsupportedFormatError


def csv_bytes(lines: list[str]) -> bytes:
    return ("\n".join(lines) + "\n").encode("utf-8")


class TestIngestCsv:
    """CSV uploads."""

    @pytest.mark.asyncio
    async def test_large_upload_is_chunked(self, fake_store) -> None:
        lines = ["IP,Remark"] + [f"10.1.{i // 256}.{i % 256},row {i}" for i in range(1200)]
        service = IngestionService(fake_store)

        result = await service.ingest(csv_bytes(lines), "bulk.csv")

        assert result == IngestionResult(imported_count=1200, skipped_count=0)
        assert fake_store.insert_calls == [500, 500, 200]
        assert fake_store.entries[0].remark == "row 0"
        assert fake_store.entries[-1].remark == "row 1199"

    @pytest.mark.asyncio
    async def test_mixed_types_and_skips(self, fake_store) -> None:
        lines = [
            "IP,Hash,notes",
            "192.168.0.1,,gateway",
            ",d41d8cd98f00b204e9800998ecf8427e,md5",
            ",,nothing",
            "fe80:0000:0000:0000:0202:b3ff:fe1e:8329,,v6",
        ]
        service = IngestionService(fake_store)

        result = await service.ingest(csv_bytes(lines), "mixed.CSV")

        assert result.imported_count == 3
        assert result.skipped_count == 1
        assert [e.type for e in fake_store.entries] == ["ipv4", "md5", "ipv6"]
        assert [e.category for e in fake_store.entries] == ["ip", "hash", "ip"]

    @pytest.mark.asyncio
    async def test_stats_match_import(self, fake_store) -> None:
        lines = [
            "value",
            "1.1.1.1",
            "2.2.2.2",
            "da39a3ee5e6b4b0d3255bfef95601890afd80709",
        ]

        await IngestionService(fake_store).ingest(csv_bytes(lines), "v.csv")
        stats = await fake_store.count_by_category()

        assert (stats.total, stats.ips, stats.hashes) == (3, 2, 1)

    @pytest.mark.asyncio
    async def test_chunk_size_is_configurable(self, fake_store) -> None:
        lines = ["value"] + [f"10.0.0.{i}" for i in range(5)]

        await IngestionService(fake_store, chunk_size=2).ingest(csv_bytes(lines), "a.csv")

        assert fake_store.insert_calls == [2, 2, 1]

    @pytest.mark.asyncio
    async def test_metadata_holds_source_row(self, fake_store) -> None:
        await IngestionService(fake_store).ingest(
            csv_bytes(["IP,Source", "9.9.9.9,quad9"]), "m.csv"
        )

        assert fake_store.entries[0].meta == '{"IP": "9.9.9.9", "Source": "quad9"}'


class TestIngestExcel:
    """Spreadsheet uploads."""

    @pytest.mark.asyncio
    async def test_xlsx_upload(self, fake_store, xlsx_builder) -> None:
        content = xlsx_builder(
            [
                ["Hash", "Remark"],
                ["e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855", "sha"],
                [None, "no value"],
            ]
        )

        result = await IngestionService(fake_store).ingest(content, "feed.xlsx")

        assert result.imported_count == 1
        assert result.skipped_count == 1
        assert fake_store.entries[0].type == "sha256"
        assert fake_store.entries[0].remark == "sha"


class TestIngestFailures:
    """Failures leave the store untouched."""

    @pytest.mark.asyncio
    async def test_unsupported_extension(self, fake_store) -> None:
        with pytest.raises(UnsupportedFormatError):
            await IngestionService(fake_store).ingest(b"IP\n1.1.1.1\n", "data.txt")

        assert fake_store.entries == []
        assert fake_store.insert_calls == []

    @pytest.mark.asyncio
    async def test_unreadable_workbook(self, fake_store) -> None:
        with pytest.raises(ParsingError) as exc_info:
            await IngestionService(fake_store).ingest(b"garbage", "broken.xlsx")

        assert exc_info.value.__cause__ is not None
        assert fake_store.entries == []

    @pytest.mark.asyncio
    async def test_reader_exception_is_wrapped(self, fake_store) -> None:
        class ExplodingReader:
            async def read(self, content: bytes):
                raise KeyError("boom")

        service = IngestionService(fake_store, reader_factory=lambda name: ExplodingReader())

        with pytest.raises(ParsingError) as exc_info:
            await service.ingest(b"anything", "x.csv")

        assert isinstance(exc_info.value.__cause__, KeyError)
        assert exc_info.value.details["error_type"] == "KeyError"
        assert fake_store.entries == []

    @pytest.mark.asyncio
    async def test_ragged_csv_writes_nothing(self, fake_store) -> None:
        content = csv_bytes(["value", "1.2.3.4,first note", "5.6.7.8,second note"])

        with pytest.raises(ParsingError):
            await IngestionService(fake_store).ingest(content, "x.csv")

        assert fake_store.entries == []
        assert fake_store.insert_calls == []

    @pytest.mark.asyncio
    async def test_all_rows_skipped(self, fake_store) -> None:
        result = await IngestionService(fake_store).ingest(
            csv_bytes(["comment", "hello", "world"]), "c.csv"
        )

        assert result == IngestionResult(imported_count=0, skipped_count=2)
        assert fake_store.insert_calls == []
