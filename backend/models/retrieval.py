"""
Retrieval domain model.

A retrieved passage with its similarity score and provenance, flattened
from whichever metadata variant the index returned.

Dependencies: pydantic, backend.boundary.vdb.vector_schemas
System role: Retrieval result data structure
"""

from pydantic import BaseModel, Field

from backend.boundary.vdb.vector_schemas import (
    AttachmentChunkMetadata,
    MessageMetadata,
    UserDocumentChunkMetadata,
    VectorMatch,
    parse_metadata,
)


class RetrievalResult(BaseModel):
    """One passage returned by retrieval, best matches first."""

    id: str = Field(description="Vector record ID")
    text: str = Field(description="Chunk text")
    score: float = Field(description="Similarity, higher is closer")
    type: str = Field(description="message or pdf_chunk")

    channel_id: str | None = None
    message_id: str | None = None
    sender_id: str | None = None
    owner_id: str | None = None
    attachment_id: str | None = None
    document_id: str | None = Field(
        default=None,
        description="Personal document ID, or attachment ID for channel PDFs",
    )
    filename: str | None = None
    page_number: int | None = None
    chunk_index: int = 0
    total_chunks: int = 1
    created_at: str | None = None

    @classmethod
    def from_match(cls, match: VectorMatch) -> "RetrievalResult":
        """
        Build a result from a raw index match.

        Raises:
            pydantic.ValidationError: When the stored metadata is malformed
        """
        metadata = parse_metadata(match.metadata)
        fields = {
            "id": match.id,
            "text": metadata.text,
            "score": match.score,
            "type": metadata.type,
            "chunk_index": metadata.chunk_index,
            "total_chunks": metadata.total_chunks,
            "created_at": metadata.created_at,
        }
        if isinstance(metadata, MessageMetadata):
            fields.update(
                channel_id=metadata.channel_id,
                message_id=metadata.message_id,
                sender_id=metadata.sender_id,
            )
        elif isinstance(metadata, AttachmentChunkMetadata):
            fields.update(
                channel_id=metadata.channel_id,
                message_id=metadata.message_id,
                sender_id=metadata.sender_id,
                attachment_id=metadata.attachment_id,
                document_id=metadata.attachment_id,
                filename=metadata.filename,
                page_number=metadata.page_number,
            )
        elif isinstance(metadata, UserDocumentChunkMetadata):
            fields.update(
                owner_id=metadata.owner_id,
                document_id=metadata.document_id,
                filename=metadata.filename,
                page_number=metadata.page_number,
            )
        return cls(**fields)
