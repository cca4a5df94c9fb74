"""
Reader Factory - Format Selection
=================================

Selects the TableReader for an upload from its filename extension.
Unknown extensions are rejected before any bytes are parsed.
"""

from ioc_tracker.ingest.csv_reader import CsvReader
from ioc_tracker.ingest.excel_reader import ExcelReader
from ioc_tracker.ingest.table_reader import TableReader
from ioc_tracker.utils.errors import UnsupportedFormatError
from ioc_tracker.utils.logger import get_logger

logger = get_logger(__name__)


# Registry of available readers
_READER_REGISTRY: dict[str, type[TableReader]] = {
    "csv": CsvReader,
    "xlsx": ExcelReader,
    "xls": ExcelReader,
}


def get_file_extension(filename: str) -> str:
    """
    Lowercase text after the last dot, or "" when there is no dot.

    Example:
        >>> get_file_extension("Indicators.XLSX")
        'xlsx'
    """
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


class ReaderFactory:
    """
    Factory for creating upload readers.

    Usage:
        reader = ReaderFactory.create("csv")
        reader = ReaderFactory.for_filename("indicators.xlsx")
    """

    @staticmethod
    def create(extension: str) -> TableReader:
        """
        Create a reader for the given extension.

        Args:
            extension: File extension without the dot (case-insensitive)

        Returns:
            TableReader implementation for the extension

        Raises:
            UnsupportedFormatError: If no reader is registered for it
        """
        reader_class = _READER_REGISTRY.get(extension.lower())
        if reader_class is None:
            raise UnsupportedFormatError(
                message="Unsupported file format",
                details={
                    "extension": extension,
                    "supported_types": ReaderFactory.get_supported_types(),
                },
            )

        logger.debug("Creating reader", extension=extension, reader=reader_class.__name__)
        return reader_class()

    @staticmethod
    def for_filename(filename: str) -> TableReader:
        """
        Create a reader based on the filename's extension.

        Raises:
            UnsupportedFormatError: If the extension is missing or unknown
        """
        return ReaderFactory.create(get_file_extension(filename))

    @staticmethod
    def get_supported_types() -> list[str]:
        """Return the registered extensions."""
        return list(_READER_REGISTRY.keys())

    @staticmethod
    def is_supported(filename: str) -> bool:
        """Check if a filename has a registered extension."""
        return get_file_extension(filename) in _READER_REGISTRY
