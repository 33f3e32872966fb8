"""
Database models package.

Exports:
  - ChannelModel: Channel (shared or direct-message) with optional bot persona
  - MessageModel: Chat message, threaded replies included
  - AttachmentModel: File attached to a message
  - UserDocumentModel: Personal document owned by one user
  - UserModel: User handle and persona bot prompt

Dependencies: sqlalchemy, backend.boundary.db.base
System role: Database model definitions for domain entities
"""

from backend.boundary.db.models.channel_model import ChannelModel
from backend.boundary.db.models.message_model import MessageModel
from backend.boundary.db.models.attachment_model import AttachmentModel
from backend.boundary.db.models.user_document_model import UserDocumentModel
from backend.boundary.db.models.user_model import UserModel

__all__ = [
    "ChannelModel",
    "MessageModel",
    "AttachmentModel",
    "UserDocumentModel",
    "UserModel",
]
