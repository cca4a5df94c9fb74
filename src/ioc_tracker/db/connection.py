"""
Database Connection Management
==============================

Async engine and session management using SQLAlchemy AsyncIO.
Provides schema creation on start-up, session lifecycle and health checks.
"""

import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ioc_tracker.config.settings import Settings, get_settings
from ioc_tracker.db.models import Base
from ioc_tracker.utils.errors import PersistenceError
from ioc_tracker.utils.logger import get_logger

logger = get_logger(__name__)


def _engine_options(database_url: str, settings: Settings) -> dict[str, Any]:
    """
    Engine keyword arguments for the given backend.

    In-memory SQLite needs a single shared connection; file SQLite uses
    the driver defaults; server databases get a sized pool.
    """
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            return {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return {}

    return {
        "pool_size": settings.db_pool_min,
        "max_overflow": settings.db_pool_max - settings.db_pool_min,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
    }


class DatabaseManager:
    """
    Owns the async engine and session factory.

    Features:
        - Creates the entries table and indexes if missing
        - Session lifecycle management
        - Health check functionality
    """

    _instance: "DatabaseManager | None" = None
    _engine: AsyncEngine | None = None
    _session_factory: async_sessionmaker[AsyncSession] | None = None

    def __new__(cls) -> "DatabaseManager":
        """Singleton pattern to ensure single database manager."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    async def initialize(cls, settings: Settings | None = None) -> "DatabaseManager":
        """
        Create the engine and ensure the schema exists.

        Args:
            settings: Application settings (uses default if not provided)

        Returns:
            DatabaseManager instance

        Raises:
            PersistenceError: If the engine or schema cannot be created
        """
        instance = cls()

        if instance._engine is not None:
            logger.debug("Database already initialized, reusing engine")
            return instance

        settings = settings or get_settings()

        try:
            safe_url = make_url(settings.database_url).render_as_string(hide_password=True)
            logger.info("Initializing database", url=safe_url)

            instance._engine = create_async_engine(
                settings.database_url,
                echo=False,
                **_engine_options(settings.database_url, settings),
            )

            async with instance._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            instance._session_factory = async_sessionmaker(
                instance._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            logger.info("Database initialized successfully")
            return instance

        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            instance._engine = None
            instance._session_factory = None
            raise PersistenceError(
                message="Database initialization failed",
                details={"error": str(e)},
            ) from e

    @classmethod
    async def close(cls) -> None:
        """
        Dispose the engine.

        Should be called during application shutdown.
        """
        instance = cls._instance

        if instance is None or instance._engine is None:
            logger.debug("Database not initialized, nothing to close")
            return

        logger.info("Closing database engine")
        await instance._engine.dispose()
        instance._engine = None
        instance._session_factory = None
        cls._instance = None
        logger.info("Database engine closed")

    @classmethod
    @asynccontextmanager
    async def get_session(cls) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session.

        Yields:
            AsyncSession instance; rolled back if the block raises

        Raises:
            PersistenceError: If database is not initialized

        Usage:
            async with DatabaseManager.get_session() as session:
                result = await session.execute(...)
        """
        instance = cls._instance

        if instance is None or instance._session_factory is None:
            raise PersistenceError(
                message="Database not initialized",
                details={"hint": "Call DatabaseManager.initialize() first"},
            )

        async with instance._session_factory() as session:
            try:
                yield session
            except Exception as e:
                await session.rollback()
                logger.error("Database session error, rolled back", error=str(e))
                raise

    @classmethod
    async def health_check(cls) -> dict:
        """
        Check database connection health.

        Returns:
            Health check result dict, e.g. {"status": "healthy", "latency_ms": 1.2}
        """
        instance = cls._instance

        if instance is None or instance._engine is None:
            return {"status": "not_initialized", "error": "Database not initialized"}

        start = time.perf_counter()

        try:
            async with instance._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            latency = (time.perf_counter() - start) * 1000
            return {
                "status": "healthy",
                "latency_ms": round(latency, 2),
            }

        except Exception as e:
            return {
                "status": "unhealthy",
                "error": str(e),
            }


# Convenience functions for direct import
async def init_database(settings: Settings | None = None) -> DatabaseManager:
    """Initialize database engine and schema."""
    return await DatabaseManager.initialize(settings)


async def close_database() -> None:
    """Dispose database engine."""
    await DatabaseManager.close()


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async database session."""
    async with DatabaseManager.get_session() as session:
        yield session


async def health_check() -> dict:
    """Check database health."""
    return await DatabaseManager.health_check()
