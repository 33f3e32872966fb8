"""
Vector index boundary layer.

- VectorIndex: async interface (upsert, query, delete_all, delete_by_filter)
- InMemoryVectorIndex: numpy cosine index for dev/tests
- S3VectorsIndex: Amazon S3 Vectors index for production

Dependencies: numpy, boto3, pydantic
System role: Vector index adapter for ingestion and retrieval
"""

from backend.boundary.vdb.memory_index import InMemoryVectorIndex
from backend.boundary.vdb.s3_vectors_index import S3VectorsIndex
from backend.boundary.vdb.vector_index import VectorIndex
from backend.boundary.vdb.vector_schemas import (
    AttachmentChunkMetadata,
    MessageMetadata,
    MetadataFilter,
    UserDocumentChunkMetadata,
    VectorMatch,
    VectorMetadata,
    VectorRecord,
    parse_metadata,
)

__all__ = [
    "AttachmentChunkMetadata",
    "InMemoryVectorIndex",
    "MessageMetadata",
    "MetadataFilter",
    "S3VectorsIndex",
    "UserDocumentChunkMetadata",
    "VectorIndex",
    "VectorMatch",
    "VectorMetadata",
    "VectorRecord",
    "parse_metadata",
]
