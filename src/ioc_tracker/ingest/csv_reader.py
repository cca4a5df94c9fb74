"""CSV upload reader."""
import io

import pandas as pd

from ioc_tracker.ingest.table_reader import Row, TableReader
from ioc_tracker.utils.errors import ParsingError
from ioc_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class CsvReader(TableReader):
    """Reads delimited text with the first line as header.

    Every cell is read as a string; empty cells become "" so the
    normalizer sees exactly what the file contained. Blank lines are
    skipped. Every record must have as many fields as the header line,
    otherwise ParsingError. A UTF-8 decode failure is retried as latin-1.
    """

    def __init__(self, delimiter: str = ",", encoding: str = "utf-8-sig") -> None:
        self._delimiter = delimiter
        self._encoding = encoding

    @property
    def supported_extensions(self) -> list[str]:
        return ["csv"]

    async def read(self, content: bytes) -> list[Row]:
        if not content.strip():
            logger.debug("Empty CSV upload")
            return []

        try:
            try:
                df = self._read_frame(content, self._encoding)
            except UnicodeDecodeError as e:
                logger.warning("CSV decode failed, retrying as latin-1", error=str(e))
                df = self._read_frame(content, "latin-1")
        except pd.errors.EmptyDataError:
            return []
        except pd.errors.ParserError as e:
            raise ParsingError(
                message=f"CSV parsing error: {e}",
                details={"format": "csv"},
            ) from e

        df = self._apply_header(df)
        rows = self._frame_to_rows(df)
        logger.debug("CSV read", row_count=len(rows), columns=list(df.columns))
        return rows

    @staticmethod
    def _apply_header(df: pd.DataFrame) -> pd.DataFrame:
        """Promote the first line to column names and reject short records.

        The header is read as an ordinary record so it fixes the record length
        and pandas never infers an index column from a longer first row.
        Longer records fail in the tokenizer; shorter ones come back padded
        with NaN (real empty cells are "" because NA parsing is off).
        """
        header = [str(cell) for cell in df.iloc[0]]
        data = df.iloc[1:]
        short = data.isna().any(axis=1)
        if short.any():
            line = int(short.idxmax()) + 1
            raise ParsingError(
                message=f"CSV parsing error: record {line} has fewer than {len(header)} fields",
                details={"format": "csv", "record": line},
            )
        data = data.reset_index(drop=True)
        data.columns = header
        return data

    def _read_frame(self, content: bytes, encoding: str) -> pd.DataFrame:
        return pd.read_csv(
            io.BytesIO(content),
            sep=self._delimiter,
            encoding=encoding,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
