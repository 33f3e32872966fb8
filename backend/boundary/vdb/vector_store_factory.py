"""
Vector index factory selecting between the in-memory (dev) and S3 Vectors (prod) index.

Depends on the VECTOR_STORE_STORE_TYPE environment variable.

Dependencies: backend.boundary.vdb, backend.configs
System role: Vector index instantiation and selection
"""

import logging

from backend.boundary.vdb.memory_index import InMemoryVectorIndex
from backend.boundary.vdb.s3_vectors_index import S3VectorsIndex
from backend.boundary.vdb.vector_index import VectorIndex
from backend.configs import get_settings

logger = logging.getLogger(__name__)


def get_vector_index() -> VectorIndex:
    """
    Build the vector index named by configuration.

    Returns:
        InMemoryVectorIndex or S3VectorsIndex

    Raises:
        ValueError: If store_type is invalid
    """
    config = get_settings().vector_store
    store_type = config.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_index - Creating in-memory vector index (local dev mode)")
        return InMemoryVectorIndex(dimension=config.embedding_dimension)

    if store_type == "s3":
        logger.info(f"{__name__}:get_vector_index - Creating S3 Vectors index (production mode)")
        return S3VectorsIndex.from_settings(config)

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'memory' (dev) or 's3' (production)."
    )
