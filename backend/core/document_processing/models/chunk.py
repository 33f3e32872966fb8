"""
Chunk domain models for the ingestion pipeline.

Dependencies: pydantic
System role: Data structures passed between pipeline stages
"""

from bisect import bisect_right

from pydantic import BaseModel, Field


class ParsedDocument(BaseModel):
    """Text extracted from a PDF plus where each page begins in it."""

    text: str = Field(description="Page texts joined with blank lines")
    page_offsets: list[int] = Field(
        default_factory=list,
        description="Character offset in `text` where each page starts, ascending",
    )
    page_numbers: list[int] = Field(
        default_factory=list,
        description="1-based PDF page number for each entry of page_offsets",
    )

    @property
    def page_count(self) -> int:
        return len(self.page_offsets)

    def page_for_offset(self, offset: int) -> int:
        """
        Best-effort 1-based page number containing a character offset.

        Returns 1 when page boundaries are unknown.
        """
        if not self.page_offsets:
            return 1
        index = max(0, bisect_right(self.page_offsets, offset) - 1)
        if index < len(self.page_numbers):
            return self.page_numbers[index]
        return index + 1


class Chunk(BaseModel):
    """One chunk of a source, ready for embedding."""

    id: str = Field(description="Deterministic record ID: {type}_{sourceId}_{index}")
    content: str = Field(description="Chunk text content")
    chunk_index: int = Field(ge=0, description="Position of the chunk within its source")
    page_number: int = Field(default=1, ge=1, description="Best-effort source page")
    embedding: list[float] | None = Field(default=None, description="Embedding vector")
