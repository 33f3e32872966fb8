"""
User ORM model.

A user's name addresses their persona bot (`@<name>-bot`) and their
optional system prompt overrides the default persona.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: User lookup and persona storage
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, StringIDMixin, TimestampMixin


class UserModel(Base, StringIDMixin, TimestampMixin):
    """
    User ORM model.

    Attributes:
        id: String primary key, the sender_id on the user's messages
        name: Unique handle used in bot mentions
        system_prompt: Optional persona for the user's bot
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    system_prompt: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, name={self.name})>"
