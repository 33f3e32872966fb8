"""
Channel ORM model.

A channel is a shared conversation (or a direct-message pair) whose
messages and PDF attachments form the channel bot's retrieval scope.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Channel persistence and bot persona storage
"""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, StringIDMixin, TimestampMixin


class ChannelModel(Base, StringIDMixin, TimestampMixin):
    """
    Channel ORM model.

    Attributes:
        id: String primary key
        name: Display name
        is_dm: True for direct-message conversations
        system_prompt: Optional bot persona for this channel
        messages: Messages posted in the channel
    """

    __tablename__ = "channels"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_dm: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    system_prompt: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=None,
        doc="Channel-specific bot persona, falls back to the default persona when unset",
    )

    messages = relationship(
        "MessageModel",
        back_populates="channel",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<ChannelModel(id={self.id}, name={self.name}, is_dm={self.is_dm})>"
