"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, StringIDMixin, TimestampMixin, EmbeddingFlagMixin: Model building blocks
  - get_async_engine(), create_session_factory(), get_async_session_factory()
  - ChannelModel, MessageModel, AttachmentModel, UserDocumentModel, UserModel
  - channel_crud, message_crud, attachment_crud, user_document_crud, user_crud

Dependencies: sqlalchemy, backend.configs
System role: Database adapter for the chat sources the RAG pipeline ingests
"""

from backend.boundary.db.base import Base, EmbeddingFlagMixin, StringIDMixin, TimestampMixin
from backend.boundary.db.connection import (
    create_session_factory,
    get_async_engine,
    get_async_session_factory,
)
from backend.boundary.db.models import (
    AttachmentModel,
    ChannelModel,
    MessageModel,
    UserDocumentModel,
    UserModel,
)
from backend.boundary.db.CRUD import (
    attachment_crud,
    channel_crud,
    message_crud,
    user_crud,
    user_document_crud,
)

__all__ = [
    "Base",
    "EmbeddingFlagMixin",
    "StringIDMixin",
    "TimestampMixin",
    "create_session_factory",
    "get_async_engine",
    "get_async_session_factory",
    "AttachmentModel",
    "ChannelModel",
    "MessageModel",
    "UserDocumentModel",
    "UserModel",
    "attachment_crud",
    "channel_crud",
    "message_crud",
    "user_document_crud",
    "user_crud",
]
