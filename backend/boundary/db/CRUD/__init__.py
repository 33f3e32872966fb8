"""
CRUD operations for database models.

Exports base CRUD classes and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from backend.boundary.db.CRUD import message_crud

    message = await message_crud.get_with_channel(db, message_id)
"""

from backend.boundary.db.CRUD.base_crud import BaseCRUD, EmbeddableCRUD
from backend.boundary.db.CRUD.channel_crud import ChannelCRUD, channel_crud
from backend.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from backend.boundary.db.CRUD.attachment_crud import AttachmentCRUD, attachment_crud
from backend.boundary.db.CRUD.user_document_crud import UserDocumentCRUD, user_document_crud
from backend.boundary.db.CRUD.user_crud import UserCRUD, user_crud

__all__ = [
    "BaseCRUD",
    "EmbeddableCRUD",
    "ChannelCRUD",
    "channel_crud",
    "MessageCRUD",
    "message_crud",
    "AttachmentCRUD",
    "attachment_crud",
    "UserDocumentCRUD",
    "user_document_crud",
    "UserCRUD",
    "user_crud",
]
