"""
Core business logic module.

Contains the ingestion pipeline, retrieval, context assembly, answer
generation and the exception hierarchy.
"""

from backend.core.exceptions import (
    ChatRAGException,
    CompletionError,
    DocumentProcessingError,
    EmbeddingError,
    EmptyContentError,
    GenerationError,
    NotFoundError,
    ObjectStorageError,
    ParsingError,
    PermissionDeniedError,
    TransientProviderError,
    ValidationError,
    VectorStoreError,
)

__all__ = [
    "ChatRAGException",
    "CompletionError",
    "DocumentProcessingError",
    "EmbeddingError",
    "EmptyContentError",
    "GenerationError",
    "NotFoundError",
    "ObjectStorageError",
    "ParsingError",
    "PermissionDeniedError",
    "TransientProviderError",
    "ValidationError",
    "VectorStoreError",
]
