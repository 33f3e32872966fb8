"""
Pipeline result models for ingestion.

Dependencies: pydantic
System role: Return types for IngestionPipeline operations
"""

from enum import Enum

from pydantic import BaseModel, Field


class SourceKind(str, Enum):
    """Kinds of sources a sweep can process."""

    MESSAGES = "messages"
    ATTACHMENTS = "attachments"
    USER_DOCUMENTS = "user_documents"


class IngestionResult(BaseModel):
    """Outcome of ingesting one source."""

    source_id: str = Field(description="Message, attachment or document ID")
    source_type: str = Field(description="message or pdf_chunk")
    chunk_count: int = Field(default=0, description="Chunks written to the index")
    record_ids: list[str] = Field(default_factory=list, description="Vector record IDs written")
    skipped_reason: str | None = Field(
        default=None,
        description="Why nothing was done (already embedded, unsupported type)",
    )
    processing_time_ms: float = Field(default=0.0, description="Wall time in milliseconds")

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None


class SweepFailure(BaseModel):
    """One source a sweep could not ingest."""

    source_id: str
    error_type: str
    error: str


class SweepResult(BaseModel):
    """Aggregated outcome of a sweep over unembedded sources."""

    kind: SourceKind
    selected: int = Field(default=0, description="Sources picked up by the sweep")
    succeeded: int = Field(default=0, description="Sources fully ingested")
    skipped: int = Field(default=0, description="Sources left alone (no-op)")
    failures: list[SweepFailure] = Field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)
