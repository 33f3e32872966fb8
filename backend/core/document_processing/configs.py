"""
Configuration settings for the ingestion pipeline.

Chunking geometry for messages and PDFs, provider batch sizes, and the
limits used when sweeping sources that were never embedded.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for the message and document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=1000,
        gt=0,
        description="Maximum chunk size in characters",
    )
    message_chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Overlap between consecutive message chunks (separator splitting)",
    )
    pdf_chunk_overlap: int = Field(
        default=100,
        ge=0,
        description="Overlap between consecutive PDF chunks (sliding window)",
    )

    # Provider batching
    embed_batch_size: int = Field(
        default=64,
        gt=0,
        description="Chunks embedded per provider call",
    )
    upsert_batch_size: int = Field(
        default=100,
        gt=0,
        description="Vector records written per index call",
    )

    # Sweep settings
    message_sweep_limit: int = Field(
        default=50,
        gt=0,
        description="Default number of messages processed per sweep",
    )
    document_sweep_limit: int = Field(
        default=10,
        gt=0,
        description="Default number of PDFs processed per sweep",
    )
    sweep_concurrency: int = Field(
        default=4,
        gt=0,
        description="Ingestion jobs a sweep runs at the same time",
    )

    @model_validator(mode="after")
    def _check_overlaps(self) -> "DocumentPipelineSettings":
        if self.message_chunk_overlap >= self.chunk_size:
            raise ValueError("message_chunk_overlap must be smaller than chunk_size")
        if self.pdf_chunk_overlap >= self.chunk_size:
            raise ValueError("pdf_chunk_overlap must be smaller than chunk_size")
        return self


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
