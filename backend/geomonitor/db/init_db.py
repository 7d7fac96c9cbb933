"""
Database bootstrapping.
"""

from geomonitor.db import session as db_session
from geomonitor.db.base import Base
from geomonitor.core.logging import get_logger

import geomonitor.models  # noqa: F401  registers all tables on Base.metadata

logger = get_logger(__name__)


async def create_tables() -> None:
    """
    Create all database tables.
    Intended for local development; deployed databases are migrated out of band.
    """
    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(
        "Database tables initialized",
        extra={"tables": sorted(Base.metadata.tables.keys())},
    )
