"""
Database Infrastructure
=======================

Manages database connections, session lifecycle, and engine configuration.

Uses SQLAlchemy 2.0 async engines. Every engine created here carries a
ConnectionSettingsListener, so new connections get their session
settings applied and establishment failures surface as
DatabaseConnectionError.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dbsession.config import Settings, get_settings
from dbsession.infrastructure.database.bridge import attach_connection_listeners
from dbsession.infrastructure.database.listeners import ConnectionSettingsListener
from dbsession.shared.infrastructure.logging import get_logger, redact_url

logger = get_logger(__name__)

# Global engine and session maker
_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """
    Get the database engine.

    Returns:
        AsyncEngine: SQLAlchemy async engine

    Raises:
        RuntimeError: If engine has not been initialized
    """
    if _engine is None:
        raise RuntimeError("Database engine not initialized. Call init_database() first.")
    return _engine


def _is_memory_sqlite(url: URL) -> bool:
    # In-memory SQLite gets a StaticPool, which takes no sizing arguments
    if url.get_backend_name() != "sqlite":
        return False
    return url.database in (None, "", ":memory:") or url.query.get("mode") == "memory"


def _engine_options(settings: Settings) -> Dict[str, Any]:
    db = settings.general.database
    options: Dict[str, Any] = {
        "echo": db.echo,
        "pool_pre_ping": True,  # Verify connections before using
    }
    if not _is_memory_sqlite(make_url(db.url)):
        options["pool_size"] = db.pool_size
        options["max_overflow"] = db.max_overflow
    return options


def init_database(settings: Optional[Settings] = None) -> AsyncEngine:
    """
    Initialize the database engine and session maker.

    Should be called during application startup.

    Args:
        settings: Settings to use; defaults to the cached application settings

    Returns:
        AsyncEngine: The initialized engine
    """
    global _engine, _session_maker

    settings = settings or get_settings()
    database_url = settings.general.database.url

    # asyncpg expects ssl= rather than libpq's sslmode=
    if make_url(database_url).get_driver_name() == "asyncpg":
        database_url = database_url.replace("sslmode=", "ssl=")

    _engine = create_async_engine(database_url, **_engine_options(settings))
    attach_connection_listeners(
        _engine,
        ConnectionSettingsListener(settings, get_logger("dbsession.connection")),
    )

    _session_maker = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,  # Prevent lazy loading after commit
        autocommit=False,
        autoflush=False,
    )

    logger.info("Database engine initialized", extra={"url": redact_url(database_url)})
    return _engine


async def close_database() -> None:
    """
    Close the database engine and dispose of connections.

    Should be called during application shutdown.
    """
    global _engine, _session_maker

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_maker = None


@asynccontextmanager
async def get_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Async context manager for database sessions.

    Commits when the block exits cleanly, rolls back and re-raises on error.

    Usage:
        async with get_session_context() as session:
            await session.execute(text("SELECT 1"))

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    if _session_maker is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    async with _session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
