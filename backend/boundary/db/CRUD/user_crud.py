"""
User CRUD operations.

Dependencies: sqlalchemy, backend.boundary.db.models
System role: User persistence operations
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD.base_crud import BaseCRUD
from backend.boundary.db.models.user_model import UserModel


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def get_by_name(self, session: AsyncSession, name: str) -> UserModel | None:
        """Retrieve a user by handle, None if nobody has it."""
        result = await session.execute(select(UserModel).where(UserModel.name == name))
        return result.scalar_one_or_none()


user_crud = UserCRUD()
