"""
Database table creation script.

Creates the channel, message, attachment, user document and user tables from
the ORM metadata.

Dependencies: sqlalchemy, backend.configs
System role: Database schema initialization

Usage:
    python -m backend.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from backend.boundary.db.base import Base
from backend.boundary.db.connection import get_async_engine

# Import models to register them with Base.metadata
from backend.boundary.db import models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables are left unchanged.

    Args:
        engine: Engine to use; a NullPool engine from settings when None

    Raises:
        SQLAlchemyError: If the database is unreachable or DDL fails
    """
    owned = engine is None
    engine = engine or get_async_engine(pooled=False)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(
            f"{__name__}:create_all_tables - Tables ready",
            extra={"tables": sorted(Base.metadata.tables)},
        )
    finally:
        if owned:
            await engine.dispose()


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.

    Args:
        engine: Engine to use; a NullPool engine from settings when None
    """
    owned = engine is None
    engine = engine or get_async_engine(pooled=False)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning(f"{__name__}:drop_all_tables - All tables dropped")
    finally:
        if owned:
            await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_all_tables())
