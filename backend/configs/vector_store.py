"""
Vector store configuration settings.

Selects the vector index backend and the embedding model that fills it.
Every vector written to or read from the index shares one dimension.

Dependencies: pydantic, pydantic_settings
System role: Vector index configuration for ingestion and retrieval
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector index configuration (in-memory for dev/tests, S3 Vectors for prod)."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: Literal["memory", "s3"] = Field(
        default="s3",
        description="Vector index type: 'memory' for local dev, 's3' for S3 Vectors",
    )
    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")
    vectors_bucket: str = Field(
        default="teamchat-dev-vectors",
        description="S3 Vectors bucket name",
    )
    index_name: str = Field(default="teamchat", description="S3 Vectors index name")

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=3072,
        description="Embedding vector dimension, must match the index dimension",
    )

    top_k: int = Field(default=5, description="Default number of passages to retrieve")
