"""
Citation domain model.

Points an answer back at the document chunk that supported it.

Dependencies: pydantic
System role: Citation data structure
"""

from pydantic import BaseModel, Field


class SourceCitation(BaseModel):
    """Citation model for source attribution."""

    filename: str = Field(description="Source document name")
    document_id: str = Field(description="Personal document ID or channel attachment ID")
    page_number: int | None = Field(default=None, description="Best-effort page number in source")
    chunk_index: int = Field(description="Chunk position within the document")
    score: float | None = Field(default=None, description="Retrieval similarity")
