"""
User document ORM model.

Personal documents uploaded by a user. They are retrievable only by
their owner through personal-document chat.

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Personal document persistence and embedding state tracking
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from backend.boundary.db.base import Base, EmbeddingFlagMixin, StringIDMixin, TimestampMixin


class UserDocumentModel(Base, StringIDMixin, TimestampMixin, EmbeddingFlagMixin):
    """
    User document ORM model.

    Attributes:
        id: String primary key
        user_id: Owner user ID
        filename: Original filename
        file_url: Object storage URL or key
        content_type: MIME type reported at upload
        has_embedding: Completion flag for ingestion
    """

    __tablename__ = "user_documents"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    filename: Mapped[str] = mapped_column(String(512), nullable=False)
    file_url: Mapped[str] = mapped_column(Text, nullable=False)
    content_type: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="application/pdf",
    )

    def __repr__(self) -> str:
        return f"<UserDocumentModel(id={self.id}, user_id={self.user_id}, filename={self.filename})>"
