"""
Models for the ingestion pipeline.

Exports: Chunk, ParsedDocument, IngestionResult, SweepResult, SweepFailure, SourceKind,
         AttachmentScope, OwnerScope, DocumentScope
"""

from .chunk import Chunk, ParsedDocument
from .pipeline_result import IngestionResult, SourceKind, SweepFailure, SweepResult
from .scope import AttachmentScope, DocumentScope, OwnerScope

__all__ = [
    "AttachmentScope",
    "DocumentScope",
    "OwnerScope",
    "Chunk",
    "ParsedDocument",
    "IngestionResult",
    "SourceKind",
    "SweepFailure",
    "SweepResult",
]
