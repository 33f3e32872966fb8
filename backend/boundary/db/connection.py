"""
Database connection management.

Provides the async SQLAlchemy engine and session factories used by
the API process and background workers.

Dependencies: sqlalchemy, backend.configs
System role: Database connection lifecycle management
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from backend.configs import get_settings


def get_async_engine(pooled: bool = True) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    The API process uses a pooled engine. Background workers pass
    pooled=False because each job runs on its own event loop and pooled
    connections cannot cross loops.

    Args:
        pooled: Use the default async connection pool, or NullPool when False

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails
    """
    db_config = get_settings().database

    if not pooled:
        return create_async_engine(
            db_config.async_database_url,
            echo=db_config.echo_sql,
            poolclass=NullPool,
        )

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Bind an async session factory to an engine.

    Args:
        engine: Async engine to bind

    Returns:
        async_sessionmaker: Factory with autoflush off and expire_on_commit off
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return create_session_factory(get_async_engine())

