"""
User document CRUD operations.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: Personal document persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import EmbeddableCRUD
from backend.boundary.db.models.user_document_model import UserDocumentModel


class UserDocumentCRUD(EmbeddableCRUD[UserDocumentModel]):
    """CRUD operations for UserDocumentModel."""

    def __init__(self) -> None:
        """Initialize UserDocumentCRUD with UserDocumentModel."""
        super().__init__(UserDocumentModel)

    async def get_by_user(
        self,
        session: AsyncSession,
        user_id: str,
    ) -> Sequence[UserDocumentModel]:
        """
        Retrieve every document owned by a user, newest first.

        Args:
            session: Async database session
            user_id: Owner user ID

        Returns:
            Sequence of UserDocumentModels
        """
        stmt = (
            select(UserDocumentModel)
            .where(UserDocumentModel.user_id == user_id)
            .order_by(UserDocumentModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


user_document_crud = UserDocumentCRUD()
