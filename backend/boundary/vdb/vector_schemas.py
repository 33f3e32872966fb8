"""
Vector index schemas.

Pydantic models for what the index stores and returns. Metadata is a
tagged union keyed by `type`: chat message chunks, channel attachment
PDF chunks and personal document PDF chunks each carry a fixed field set.
Field names are stored camelCase in the index so filters read
`{"channelId": ..., "type": "message"}`.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Exact-match conjunction over metadata fields, e.g. {"ownerId": "u1", "type": "pdf_chunk"}
MetadataFilter = dict[str, str | int | bool]

MESSAGE_TYPE = "message"
PDF_CHUNK_TYPE = "pdf_chunk"


class _ChunkMetadata(BaseModel):
    """Fields shared by every chunk stored in the index."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    text: str = Field(description="Chunk text, returned verbatim at retrieval time")
    chunk_index: int = Field(ge=0, description="Position of the chunk within its source")
    total_chunks: int = Field(ge=1, description="Number of chunks the source produced")
    created_at: str = Field(description="ISO-8601 creation time of the source")

    def to_index(self) -> dict[str, Any]:
        """Serialize to the camelCase dict written to the index."""
        return self.model_dump(by_alias=True, mode="json")


class MessageMetadata(_ChunkMetadata):
    """Chunk of a chat message, scoped to its channel."""

    type: Literal["message"] = MESSAGE_TYPE
    message_id: str
    channel_id: str
    sender_id: str
    is_dm: bool = Field(default=False, alias="isDM")


class AttachmentChunkMetadata(_ChunkMetadata):
    """Chunk of a PDF attached to a channel message, scoped to the channel."""

    type: Literal["pdf_chunk"] = PDF_CHUNK_TYPE
    message_id: str
    channel_id: str
    sender_id: str
    is_dm: bool = Field(default=False, alias="isDM")
    attachment_id: str
    filename: str
    page_number: int = Field(default=1, ge=1)


class UserDocumentChunkMetadata(_ChunkMetadata):
    """Chunk of a personal document, scoped to its owner."""

    type: Literal["pdf_chunk"] = PDF_CHUNK_TYPE
    owner_id: str
    document_id: str
    filename: str
    page_number: int = Field(default=1, ge=1)


VectorMetadata = Union[MessageMetadata, AttachmentChunkMetadata, UserDocumentChunkMetadata]


def parse_metadata(raw: dict[str, Any]) -> VectorMetadata:
    """
    Rebuild typed metadata from the dict stored in the index.

    Both PDF variants share `type == "pdf_chunk"`; personal documents are
    told apart by their `ownerId`.

    Args:
        raw: camelCase metadata dict as returned by the index

    Returns:
        The matching metadata variant

    Raises:
        pydantic.ValidationError: If the dict does not fit any variant
    """
    if raw.get("type") == MESSAGE_TYPE:
        return MessageMetadata.model_validate(raw)
    if "ownerId" in raw:
        return UserDocumentChunkMetadata.model_validate(raw)
    return AttachmentChunkMetadata.model_validate(raw)


def matches_filter(metadata: dict[str, Any], metadata_filter: MetadataFilter | None) -> bool:
    """Return True when every filter key equals the metadata value."""
    if not metadata_filter:
        return True
    return all(metadata.get(key) == value for key, value in metadata_filter.items())


class VectorRecord(BaseModel):
    """One vector written to the index."""

    id: str = Field(description="Deterministic record ID, upserts overwrite in place")
    values: list[float] = Field(description="Embedding vector")
    metadata: VectorMetadata


class VectorMatch(BaseModel):
    """One scored hit returned by an index query."""

    id: str
    score: float = Field(description="Similarity, higher is closer")
    metadata: dict[str, Any] = Field(default_factory=dict)
