"""
Ingestion and RAG administration schemas.

Dependencies: pydantic
System role: Ingestion/admin API contracts
"""

from pydantic import BaseModel, Field

from backend.core.document_processing.models import SourceKind
from backend.models.retrieval import RetrievalResult


class EnqueueResponse(BaseModel):
    """Acknowledgement that an ingestion job was queued."""

    source_id: str
    task_id: str | None = Field(default=None, description="Background task ID")
    status: str = "queued"


class SweepRequest(BaseModel):
    """Run one sweep over sources that were never embedded."""

    kind: SourceKind = SourceKind.MESSAGES
    limit: int | None = Field(default=None, gt=0, le=500)


class SweepResponse(BaseModel):
    """Aggregated sweep counts."""

    kind: SourceKind
    selected: int
    succeeded: int
    skipped: int
    failed: int
    failed_ids: list[str] = Field(default_factory=list)


class ResetResponse(BaseModel):
    """Vector index wipe acknowledgement."""

    success: bool = True
    message: str


class RetrievalTestResponse(BaseModel):
    """Raw retrieval output for debugging."""

    query: str
    count: int
    results: list[RetrievalResult]
