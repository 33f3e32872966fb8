"""
Message ORM model.

Chat messages are the primary retrieval source for the channel bot.
Threaded replies (including bot answers) reference their parent.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Message persistence and embedding state tracking
"""

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, EmbeddingFlagMixin, StringIDMixin, TimestampMixin


class MessageModel(Base, StringIDMixin, TimestampMixin, EmbeddingFlagMixin):
    """
    Message ORM model.

    Attributes:
        id: String primary key
        channel_id: Owning channel
        sender_id: Author user ID ("bot" for channel bot replies)
        content: Message body, may contain rich-text markup
        parent_message_id: Thread parent, None for top-level messages
        is_deleted: Soft-delete flag, deleted messages are never embedded
        has_embedding: Completion flag for ingestion
        attachments: Files attached to the message
    """

    __tablename__ = "messages"

    channel_id: Mapped[str] = mapped_column(
        ForeignKey("channels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[str] = mapped_column(String(64), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    parent_message_id: Mapped[str | None] = mapped_column(
        ForeignKey("messages.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    channel = relationship("ChannelModel", back_populates="messages")
    attachments = relationship(
        "AttachmentModel",
        back_populates="message",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return (
            f"<MessageModel(id={self.id}, channel_id={self.channel_id}, "
            f"has_embedding={self.has_embedding})>"
        )
