#!/usr/bin/env python3
"""Import a local CSV/XLSX/XLS file of indicators into the database.

Runs the same pipeline as POST /api/upload, without the HTTP layer.

Usage:
    python scripts/import_file.py indicators.csv
    python scripts/import_file.py feed.xlsx --database-url sqlite+aiosqlite:///./data/dashboard.sqlite
"""
import argparse
import asyncio
import sys
from pathlib import Path

from ioc_tracker.config.settings import get_settings
from ioc_tracker.db.connection import close_database, get_session, init_database
from ioc_tracker.db.repositories.entries_repo import EntriesRepository
from ioc_tracker.services.ingestion_service import IngestionService
from ioc_tracker.utils.errors import IndicatorTrackerError
from ioc_tracker.utils.logger import configure_logging


async def import_file(path: Path, database_url: str | None = None) -> int:
    """Ingest one file and return the number of entries written.

    Args:
        path: File to import; its extension selects the reader
        database_url: Override for settings.database_url

    Returns:
        Imported entry count
    """
    settings = get_settings()
    if database_url:
        settings = settings.model_copy(update={"database_url": database_url})

    await init_database(settings)
    try:
        async with get_session() as session:
            store = EntriesRepository(session, list_limit=settings.list_limit)
            service = IngestionService(store, chunk_size=settings.batch_chunk_size)
            result = await service.ingest(path.read_bytes(), path.name)
    finally:
        await close_database()

    print(f"Imported {result.imported_count} entries from {path.name} "
          f"({result.skipped_count} rows skipped)")
    return result.imported_count


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Import an indicator spreadsheet (csv, xlsx, xls)",
    )
    parser.add_argument("path", type=Path, help="File to import")
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy async URL (default: DATABASE_URL / settings)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for pipeline events (default: WARNING)",
    )
    args = parser.parse_args()

    if not args.path.is_file():
        print(f"File not found: {args.path}", file=sys.stderr)
        return 1

    configure_logging(level=args.log_level)

    try:
        asyncio.run(import_file(args.path, args.database_url))
    except IndicatorTrackerError as e:
        print(f"Import failed: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
