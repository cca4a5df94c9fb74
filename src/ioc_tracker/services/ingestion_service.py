"""
Ingestion Service
=================

Upload pipeline: bytes + filename in, imported count out.

Flow:
    1. Pick a reader from the filename extension (UnsupportedFormatError
       if none; nothing has been parsed yet)
    2. Read all rows (ParsingError on bad bytes; nothing is written)
    3. Normalize rows in order, dropping rows without a value
    4. Persist the survivors in chunks

Failures propagate to the caller; there are no automatic retries.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ioc_tracker.db.repositories.base import EntryStore
from ioc_tracker.ingest.reader_factory import ReaderFactory
from ioc_tracker.ingest.row_normalizer import normalize_row
from ioc_tracker.ingest.table_reader import TableReader
from ioc_tracker.schemas.entries import EntryCreate
from ioc_tracker.services.batch_writer import DEFAULT_CHUNK_SIZE, persist_batch
from ioc_tracker.utils.errors import ParsingError
from ioc_tracker.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class IngestionResult:
    """Outcome of one upload."""

    imported_count: int
    skipped_count: int = 0


class IngestionService:
    """
    Parses, classifies and stores uploaded indicator spreadsheets.

    Args:
        store: Where entries are written
        reader_factory: Maps a filename to a TableReader; raises
            UnsupportedFormatError for unknown extensions
        chunk_size: Maximum rows per insert statement
    """

    def __init__(
        self,
        store: EntryStore,
        reader_factory: Callable[[str], TableReader] = ReaderFactory.for_filename,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._store = store
        self._reader_factory = reader_factory
        self._chunk_size = chunk_size

    async def ingest(self, content: bytes, filename: str) -> IngestionResult:
        """
        Import one uploaded file.

        Args:
            content: Raw file bytes
            filename: Original filename; only its extension is used

        Returns:
            IngestionResult with the number of entries written

        Raises:
            UnsupportedFormatError: Extension is not csv/xlsx/xls
            ParsingError: Bytes could not be parsed
            PersistenceError: A chunk failed to write (earlier chunks remain)
        """
        log = logger.bind(filename=filename, size_bytes=len(content))

        reader = self._reader_factory(filename)

        try:
            rows = await reader.read(content)
        except ParsingError:
            log.warning("Upload could not be parsed")
            raise
        except Exception as e:
            log.warning("Upload could not be parsed", error=str(e))
            raise ParsingError(
                message=f"Failed to parse {filename}: {e}",
                details={"filename": filename, "error_type": type(e).__name__},
            ) from e

        records: list[EntryCreate] = []
        for row in rows:
            record = normalize_row(row)
            if record is not None:
                records.append(record)

        skipped = len(rows) - len(records)
        log.info("Upload normalized", rows=len(rows), accepted=len(records), skipped=skipped)

        await persist_batch(self._store, records, chunk_size=self._chunk_size)

        log.info("Upload imported", imported=len(records))
        return IngestionResult(imported_count=len(records), skipped_count=skipped)
