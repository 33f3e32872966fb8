"""
Attachment CRUD operations.

Provides attachment lookups with the owning message and channel loaded,
and the unembedded-PDF sweep selection.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Attachment persistence operations
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import ColumnElement

from backend.boundary.db.CRUD.base_crud import EmbeddableCRUD
from backend.boundary.db.models.attachment_model import AttachmentModel
from backend.boundary.db.models.message_model import MessageModel


class AttachmentCRUD(EmbeddableCRUD[AttachmentModel]):
    """CRUD operations for AttachmentModel."""

    def __init__(self) -> None:
        """Initialize AttachmentCRUD with AttachmentModel."""
        super().__init__(AttachmentModel)

    def _unembedded_filters(self) -> list[ColumnElement[bool]]:
        return [
            AttachmentModel.has_embedding.is_(False),
            func.lower(AttachmentModel.content_type).like("%pdf%"),
        ]

    async def get_with_message(
        self,
        session: AsyncSession,
        attachment_id: str,
    ) -> AttachmentModel | None:
        """
        Retrieve an attachment with its message and the message's channel loaded.

        Args:
            session: Async database session
            attachment_id: Attachment primary key

        Returns:
            AttachmentModel with `message.channel` populated, None if not found
        """
        stmt = (
            select(AttachmentModel)
            .options(selectinload(AttachmentModel.message).selectinload(MessageModel.channel))
            .where(AttachmentModel.id == attachment_id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


attachment_crud = AttachmentCRUD()
