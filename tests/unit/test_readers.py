"""
Unit Tests for Upload Readers
=============================

Tests for CsvReader and ExcelReader.
"""

import pytest

from ioc_tracker.ingest.csv_reader import CsvReader
from ioc_tracker.ingest.excel_reader import ExcelReader
from ioc_tracker.utils.errors import ParsingError


class TestCsvReader:
    """Tests for CsvReader."""

    @pytest.fixture
    def reader(self) -> CsvReader:
        return CsvReader()

    @pytest.mark.asyncio
    async def test_header_row_supplies_keys(self, reader: CsvReader) -> None:
        content = b"IP,Remark\n10.0.0.1,scanner\n10.0.0.2,proxy\n"

        rows = await reader.read(content)

        assert rows == [
            {"IP": "10.0.0.1", "Remark": "scanner"},
            {"IP": "10.0.0.2", "Remark": "proxy"},
        ]

    @pytest.mark.asyncio
    async def test_blank_lines_are_skipped(self, reader: CsvReader) -> None:
        content = b"value,notes\n1.1.1.1,a\n\n\n2.2.2.2,b\n"

        rows = await reader.read(content)

        assert [row["value"] for row in rows] == ["1.1.1.1", "2.2.2.2"]

    @pytest.mark.asyncio
    async def test_empty_cells_are_empty_strings(self, reader: CsvReader) -> None:
        rows = await reader.read(b"IP,Hash\n,d41d8cd98f00b204e9800998ecf8427e\n")

        assert rows == [{"IP": "", "Hash": "d41d8cd98f00b204e9800998ecf8427e"}]

    @pytest.mark.asyncio
    async def test_cells_stay_strings(self, reader: CsvReader) -> None:
        """Numeric-looking cells are not converted."""
        rows = await reader.read(b"value,remark\n0001,42\n")

        assert rows == [{"value": "0001", "remark": "42"}]

    @pytest.mark.asyncio
    async def test_byte_order_mark_is_stripped(self, reader: CsvReader) -> None:
        rows = await reader.read(b"\xef\xbb\xbfIP,Remark\n8.8.8.8,dns\n")

        assert list(rows[0].keys()) == ["IP", "Remark"]

    @pytest.mark.asyncio
    async def test_latin1_fallback(self, reader: CsvReader) -> None:
        rows = await reader.read("IP,Remark\n8.8.8.8,café\n".encode("latin-1"))

        assert rows[0]["Remark"] == "café"

    @pytest.mark.asyncio
    async def test_empty_content(self, reader: CsvReader) -> None:
        assert await reader.read(b"") == []
        assert await reader.read(b"  \n") == []

    @pytest.mark.asyncio
    async def test_header_only(self, reader: CsvReader) -> None:
        assert await reader.read(b"IP,Remark\n") == []

    @pytest.mark.asyncio
    async def test_malformed_rows_raise(self, reader: CsvReader) -> None:
        with pytest.raises(ParsingError) as exc_info:
            await reader.read(b"a,b\n1,2\n1,2,3,4\n")

        assert exc_info.value.details["format"] == "csv"
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_longer_first_record_raises(self, reader: CsvReader) -> None:
        """An extra field must not turn the first column into an index."""
        content = b"value\n1.2.3.4,first note\n5.6.7.8,second note\n"

        with pytest.raises(ParsingError):
            await reader.read(content)

    @pytest.mark.asyncio
    async def test_shorter_record_raises(self, reader: CsvReader) -> None:
        with pytest.raises(ParsingError) as exc_info:
            await reader.read(b"IP,Remark\n10.0.0.1,ok\n10.0.0.2\n")

        assert exc_info.value.details == {"format": "csv", "record": 3}

    @pytest.mark.asyncio
    async def test_trailing_empty_field_is_kept(self, reader: CsvReader) -> None:
        rows = await reader.read(b"IP,Remark\n10.0.0.1,\n")

        assert rows == [{"IP": "10.0.0.1", "Remark": ""}]

    def test_supported_extensions(self, reader: CsvReader) -> None:
        assert reader.supported_extensions == ["csv"]
        assert reader.can_handle(".CSV")
        assert not reader.can_handle("xlsx")


class TestExcelReader:
    """Tests for ExcelReader."""

    @pytest.fixture
    def reader(self) -> ExcelReader:
        return ExcelReader()

    @pytest.mark.asyncio
    async def test_reads_first_sheet_only(self, reader: ExcelReader, xlsx_builder) -> None:
        content = xlsx_builder(
            [["IP", "Remark"], ["10.0.0.1", "first sheet"]],
            [["IP", "Remark"], ["10.0.0.2", "second sheet"]],
        )

        rows = await reader.read(content)

        assert rows == [{"IP": "10.0.0.1", "Remark": "first sheet"}]

    @pytest.mark.asyncio
    async def test_empty_cells_are_omitted(self, reader: ExcelReader, xlsx_builder) -> None:
        content = xlsx_builder(
            [
                ["IP", "Hash", "notes"],
                [None, "d41d8cd98f00b204e9800998ecf8427e", "md5 only"],
            ]
        )

        rows = await reader.read(content)

        assert rows == [{"Hash": "d41d8cd98f00b204e9800998ecf8427e", "notes": "md5 only"}]

    @pytest.mark.asyncio
    async def test_blank_rows_are_dropped(self, reader: ExcelReader, xlsx_builder) -> None:
        content = xlsx_builder(
            [
                ["value"],
                ["1.1.1.1"],
                [None],
                ["2.2.2.2"],
            ]
        )

        rows = await reader.read(content)

        assert [row["value"] for row in rows] == ["1.1.1.1", "2.2.2.2"]

    @pytest.mark.asyncio
    async def test_numeric_cells_keep_native_type(self, reader: ExcelReader, xlsx_builder) -> None:
        rows = await reader.read(xlsx_builder([["value", "remark"], ["1.1.1.1", 7]]))

        assert rows[0]["remark"] == 7

    @pytest.mark.asyncio
    async def test_garbage_bytes_raise(self, reader: ExcelReader) -> None:
        with pytest.raises(ParsingError) as exc_info:
            await reader.read(b"this is not a workbook")

        assert exc_info.value.details["format"] == "excel"

    def test_supported_extensions(self, reader: ExcelReader) -> None:
        assert reader.supported_extensions == ["xlsx", "xls"]
