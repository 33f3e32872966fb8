"""
Message CRUD operations.

Provides message lookups with their channel eagerly loaded (ingestion
needs channel context for metadata) and the unembedded-message sweep
selection, which skips soft-deleted messages.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Message persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import ColumnElement

from backend.boundary.db.CRUD.base_crud import EmbeddableCRUD
from backend.boundary.db.models.message_model import MessageModel


class MessageCRUD(EmbeddableCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        """Initialize MessageCRUD with MessageModel."""
        super().__init__(MessageModel)

    def _unembedded_filters(self) -> list[ColumnElement[bool]]:
        return [
            MessageModel.has_embedding.is_(False),
            MessageModel.is_deleted.is_(False),
        ]

    async def get_with_channel(self, session: AsyncSession, message_id: str) -> MessageModel | None:
        """
        Retrieve a message with its channel loaded.

        Args:
            session: Async database session
            message_id: Message primary key

        Returns:
            MessageModel with `channel` populated, None if not found
        """
        stmt = (
            select(MessageModel)
            .options(selectinload(MessageModel.channel))
            .where(MessageModel.id == message_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


message_crud = MessageCRUD()
