"""
Ingest Package
==============

Upload readers and row normalization.
"""

from ioc_tracker.ingest.csv_reader import CsvReader
from ioc_tracker.ingest.excel_reader import ExcelReader
from ioc_tracker.ingest.reader_factory import ReaderFactory, get_file_extension
from ioc_tracker.ingest.row_normalizer import normalize_row
from ioc_tracker.ingest.table_reader import Row, TableReader

__all__ = [
    "CsvReader",
    "ExcelReader",
    "ReaderFactory",
    "Row",
    "TableReader",
    "get_file_extension",
    "normalize_row",
]
