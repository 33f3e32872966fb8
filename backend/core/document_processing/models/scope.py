"""
Retrieval scopes for ingested documents.

A PDF is either shared in a channel (attached to a message) or private
to the user who uploaded it. The scope decides the metadata written
alongside its chunks, and so who can retrieve them.

Dependencies: pydantic
System role: Ingestion input types
"""

from datetime import datetime

from pydantic import BaseModel, Field


class AttachmentScope(BaseModel):
    """A PDF attached to a channel message."""

    attachment_id: str
    message_id: str
    channel_id: str
    sender_id: str
    is_dm: bool = False
    created_at: datetime

    @property
    def source_id(self) -> str:
        return self.attachment_id


class OwnerScope(BaseModel):
    """A personal document visible only to its owner."""

    owner_id: str = Field(min_length=1)
    document_id: str
    created_at: datetime

    @property
    def source_id(self) -> str:
        return self.document_id


DocumentScope = AttachmentScope | OwnerScope
