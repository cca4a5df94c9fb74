"""
Table Reader Abstract Base Class
================================

Defines the interface for turning uploaded file bytes into header-keyed
rows. Each implementation handles one family of formats (CSV, Excel).

Contract:
    - Input: raw file bytes
    - Output: list of dicts, one per data row, in file order
    - The first row is the header row and supplies the keys
    - Blank rows are skipped
    - Unreadable bytes raise ParsingError
"""

from abc import ABC, abstractmethod
from typing import Any

import pandas as pd

Row = dict[str, Any]


class TableReader(ABC):
    """
    Abstract base class for upload readers.

    Usage:
        reader = CsvReader()
        rows = await reader.read(content)
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """
        Return list of supported file extensions.

        Returns:
            List of extensions (lowercase, without dot)
        """
        ...

    @abstractmethod
    async def read(self, content: bytes) -> list[Row]:
        """
        Parse file bytes into rows keyed by header.

        Args:
            content: Raw uploaded bytes

        Returns:
            Rows in original order

        Raises:
            ParsingError: If the bytes cannot be parsed
        """
        ...

    def can_handle(self, extension: str) -> bool:
        """Check whether this reader accepts the extension."""
        return extension.lower().lstrip(".") in self.supported_extensions

    @staticmethod
    def _frame_to_rows(df: pd.DataFrame, drop_missing: bool = False) -> list[Row]:
        """
        Convert a DataFrame into a list of header-keyed dicts.

        Args:
            df: Parsed frame with header-derived columns
            drop_missing: Omit cells that are None/NaN instead of keeping them

        Returns:
            One dict per frame row
        """
        df.columns = [str(column) for column in df.columns]
        rows: list[Row] = df.to_dict(orient="records")
        if not drop_missing:
            return rows
        return [
            {key: value for key, value in row.items() if not is_missing(value)}
            for row in rows
        ]


def is_missing(value: Any) -> bool:
    """True for None and scalar NaN/NaT cells."""
    if value is None:
        return True
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))
