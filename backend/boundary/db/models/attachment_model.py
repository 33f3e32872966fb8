"""
Attachment ORM model.

Files attached to channel messages. PDF attachments are chunked and
embedded into the channel's retrieval scope.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Attachment persistence and embedding state tracking
"""

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.boundary.db.base import Base, EmbeddingFlagMixin, StringIDMixin, TimestampMixin


class AttachmentModel(Base, StringIDMixin, TimestampMixin, EmbeddingFlagMixin):
    """
    Attachment ORM model.

    Attributes:
        id: String primary key
        message_id: Message the file was posted with
        filename: Original filename
        file_url: Object storage URL or key
        content_type: MIME type reported at upload
        has_embedding: Completion flag for ingestion
    """

    __tablename__ = "attachments"

    message_id: Mapped[str] = mapped_column(
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    filename: Mapped[str] = mapped_column(String(512), nullable=False)
    file_url: Mapped[str] = mapped_column(Text, nullable=False)
    content_type: Mapped[str] = mapped_column(String(255), nullable=False)

    message = relationship("MessageModel", back_populates="attachments")

    @property
    def is_pdf(self) -> bool:
        return "pdf" in (self.content_type or "").lower()

    def __repr__(self) -> str:
        return f"<AttachmentModel(id={self.id}, filename={self.filename})>"
