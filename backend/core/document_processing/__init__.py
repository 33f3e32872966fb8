"""
Ingestion pipeline for chat messages, channel attachments and personal documents.

Cleans or parses sources, chunks them, embeds the chunks and writes them
to the vector index with scope metadata.

Dependencies: langchain_text_splitters, langchain_google_genai, pypdf, boto3, pydantic
System role: Document ingestion pipeline entrypoint
"""

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .entrypoint import IngestionPipeline
from .models import (
    AttachmentScope,
    Chunk,
    IngestionResult,
    OwnerScope,
    SourceKind,
    SweepResult,
)

__all__ = [
    "AttachmentScope",
    "Chunk",
    "DocumentPipelineSettings",
    "IngestionPipeline",
    "IngestionResult",
    "OwnerScope",
    "SourceKind",
    "SweepResult",
    "get_pipeline_settings",
]
