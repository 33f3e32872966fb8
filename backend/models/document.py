"""
Personal document API schemas.

Dependencies: pydantic
System role: Document API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserDocumentResponse(BaseModel):
    """One personal document and its embedding state."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    filename: str
    content_type: str
    has_embedding: bool = Field(description="Whether the document's chunks are in the index")
    created_at: datetime


class DocumentListResponse(BaseModel):
    """A user's documents, newest first."""

    documents: list[UserDocumentResponse]
    total: int


class DocumentDeleteResponse(BaseModel):
    """Outcome of deleting a document."""

    document_id: str
    vectors_deleted: int


class ReindexResponse(BaseModel):
    """Outcome of scheduling a document for re-embedding."""

    document_id: str
    vectors_deleted: int
    task_id: str | None = None
    status: str = "queued"
