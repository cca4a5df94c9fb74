"""
Excel Reader
============

Reads the first worksheet of an .xlsx or .xls upload.

The first row supplies the keys. Empty cells are omitted from each row
dict and fully empty rows are dropped. Numeric and date cells keep their
native Python types.

The pandas engine is picked from the file signature rather than the
extension: openpyxl for OOXML, xlrd for legacy BIFF workbooks.
"""

import io

import pandas as pd

from ioc_tracker.ingest.table_reader import Row, TableReader
from ioc_tracker.utils.errors import ParsingError
from ioc_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class ExcelReader(TableReader):
    """
    Spreadsheet reader for Excel workbooks.

    Only the first sheet is read; additional sheets are ignored.
    """

    def __init__(self, sheet_name: str | int = 0, engine: str | None = None) -> None:
        """
        Initialize Excel reader.

        Args:
            sheet_name: Sheet name or index (default: first sheet)
            engine: Force a pandas engine (None = detect from content)
        """
        self._sheet_name = sheet_name
        self._engine = engine

    @property
    def supported_extensions(self) -> list[str]:
        """Return supported file extensions."""
        return ["xlsx", "xls"]

    async def read(self, content: bytes) -> list[Row]:
        """
        Parse workbook bytes into rows.

        Args:
            content: Raw workbook bytes

        Returns:
            Rows of the first sheet in order

        Raises:
            ParsingError: If the bytes are not a readable workbook
        """
        try:
            df = pd.read_excel(
                io.BytesIO(content),
                sheet_name=self._sheet_name,
                header=0,
                dtype=object,
                engine=self._engine,
            )
        except Exception as e:
            raise ParsingError(
                message=f"Excel parsing error: {e}",
                details={"format": "excel", "error_type": type(e).__name__},
            ) from e

        df = df.dropna(how="all")
        rows = self._frame_to_rows(df, drop_missing=True)

        logger.debug(
            "Excel sheet read",
            sheet=self._sheet_name,
            row_count=len(rows),
            columns=list(df.columns),
        )
        return rows
