"""
Base CRUD operations for SQLAlchemy models.

Provides generic Create, Read, Update, Delete operations that can be
inherited and extended by model-specific CRUD classes, plus the shared
embedding-flag queries used by ingestion sweeps.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Generic, Sequence, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from backend.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic base class for CRUD operations.

    Subclasses specify the model class and can override or extend
    these methods for model-specific behavior.

    Attributes:
        model: The SQLAlchemy model class to operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        """
        Initialize CRUD with target model.

        Args:
            model: SQLAlchemy model class for database operations
        """
        self.model = model

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Create a new record in the database.

        Args:
            session: Async database session
            **kwargs: Model field values

        Returns:
            Created model instance with generated ID and timestamps
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: str) -> ModelT | None:
        """
        Retrieve a single record by primary key.

        Args:
            session: Async database session
            id: String primary key

        Returns:
            Model instance if found, None otherwise
        """
        return await session.get(self.model, id)

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Retrieve all records with optional pagination.

        Args:
            session: Async database session
            limit: Maximum number of records to return (None for all)
            offset: Number of records to skip

        Returns:
            Sequence of model instances
        """
        stmt = select(self.model).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_by_id(self, session: AsyncSession, id: str, **kwargs) -> bool:
        """
        Update a record by primary key.

        Args:
            session: Async database session
            id: String primary key
            **kwargs: Fields to update with new values

        Returns:
            True if a row was updated, False if not found
        """
        stmt = (
            update(self.model)
            .where(self.model.id == id)
            .values(**kwargs)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def delete_by_id(self, session: AsyncSession, id: str) -> bool:
        """
        Delete a record by primary key.

        Args:
            session: Async database session
            id: String primary key

        Returns:
            True if record was deleted, False if not found
        """
        stmt = delete(self.model).where(self.model.id == id)
        result = await session.execute(stmt)
        return result.rowcount > 0


class EmbeddableCRUD(BaseCRUD[ModelT]):
    """
    CRUD base for models carrying the has_embedding completion flag.

    Subclasses narrow the sweep selection by overriding `_unembedded_filters`.
    """

    def _unembedded_filters(self) -> list[ColumnElement[bool]]:
        return [self.model.has_embedding.is_(False)]

    async def get_unembedded(self, session: AsyncSession, limit: int) -> Sequence[ModelT]:
        """
        Select sources that still need ingestion, oldest first.

        Args:
            session: Async database session
            limit: Maximum number of rows to return

        Returns:
            Sequence of model instances with has_embedding False
        """
        stmt = (
            select(self.model)
            .where(*self._unembedded_filters())
            .order_by(self.model.created_at)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def mark_embedded(self, session: AsyncSession, id: str) -> bool:
        """Set the completion flag once every chunk is in the index."""
        return await self.update_by_id(session, id, has_embedding=True)

    async def reset_embedding(self, session: AsyncSession, id: str) -> bool:
        """Clear the completion flag so the source is picked up again."""
        return await self.update_by_id(session, id, has_embedding=False)
