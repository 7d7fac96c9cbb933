"""
Database session management with async SQLAlchemy 2.0.
One session per request: services only flush, the request commits.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from geomonitor.core.config import settings
from geomonitor.core.logging import get_logger

logger = get_logger(__name__)

# Global engine and sessionmaker
engine: AsyncEngine = None
async_session_maker: async_sessionmaker[AsyncSession] = None


def _engine_options(database_url: str) -> Dict[str, Any]:
    # SQLite (local runs) has no connection pool to size
    if make_url(database_url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }


def create_engine() -> AsyncEngine:
    """Create the async engine for ``settings.DATABASE_URL``."""
    global engine

    options = _engine_options(settings.DATABASE_URL)
    engine = create_async_engine(settings.DATABASE_URL, echo=False, **options)

    logger.info(
        "Database engine created",
        extra={
            "backend": make_url(settings.DATABASE_URL).get_backend_name(),
            "pool_size": options.get("pool_size"),
        },
    )
    return engine


def create_sessionmaker() -> async_sessionmaker[AsyncSession]:
    global async_session_maker

    if engine is None:
        create_engine()

    async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return async_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting database session.

    Everything a request writes, audit events included, is committed
    together when the request succeeds and rolled back when it fails.
    """
    if async_session_maker is None:
        create_sessionmaker()

    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Initialize database connection."""
    if async_session_maker is None:
        create_sessionmaker()
    logger.info("Database initialized")


async def close_db() -> None:
    """Close database connections."""
    global engine, async_session_maker

    if engine is not None:
        await engine.dispose()
        engine = None
        async_session_maker = None
        logger.info("Database connections closed")
