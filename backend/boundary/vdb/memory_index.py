"""
In-memory vector index.

Brute-force cosine similarity over a numpy matrix. Used for local
development and tests; contents are lost when the process exits.

Dependencies: numpy, asyncio, backend.boundary.vdb
System role: Development/test vector index
"""

import asyncio
import logging

import numpy as np

from backend.boundary.vdb.vector_index import VectorIndex
from backend.boundary.vdb.vector_schemas import (
    MetadataFilter,
    VectorMatch,
    VectorRecord,
    matches_filter,
)
from backend.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class InMemoryVectorIndex(VectorIndex):
    """
    Cosine-similarity index held in process memory.

    Records are stored by ID so upserts overwrite. Vectors are normalized
    on write; a zero vector scores 0 against everything.
    """

    def __init__(self, dimension: int) -> None:
        """
        Initialize an empty index.

        Args:
            dimension: Required length of every stored and queried vector
        """
        self.dimension = dimension
        self._vectors: dict[str, np.ndarray] = {}
        self._metadata: dict[str, dict] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._vectors)

    def _normalize(self, values: list[float], operation: str) -> np.ndarray:
        vector = np.asarray(values, dtype=np.float32)
        if vector.shape != (self.dimension,):
            raise VectorStoreError(
                f"Expected vector of dimension {self.dimension}, got {vector.shape[0]}",
                operation=operation,
            )
        norm = np.linalg.norm(vector)
        return vector / norm if norm > 0 else vector

    async def upsert(self, records: list[VectorRecord]) -> None:
        normalized = [(r.id, self._normalize(r.values, "upsert"), r.metadata.to_index()) for r in records]
        async with self._lock:
            for record_id, vector, metadata in normalized:
                self._vectors[record_id] = vector
                self._metadata[record_id] = metadata
        logger.debug(f"{__name__}:upsert - Stored {len(records)} records")

    async def query(
        self,
        vector: list[float],
        metadata_filter: MetadataFilter | None,
        top_k: int,
    ) -> list[VectorMatch]:
        query_vector = self._normalize(vector, "query")
        async with self._lock:
            candidates = [
                record_id
                for record_id, metadata in self._metadata.items()
                if matches_filter(metadata, metadata_filter)
            ]
            if not candidates or top_k <= 0:
                return []
            matrix = np.stack([self._vectors[record_id] for record_id in candidates])
            metadata = [self._metadata[record_id] for record_id in candidates]

        scores = matrix @ query_vector
        # Stable sort keeps insertion order between equal scores
        order = np.argsort(-scores, kind="stable")[:top_k]
        return [
            VectorMatch(id=candidates[i], score=float(scores[i]), metadata=dict(metadata[i]))
            for i in order
        ]

    async def delete_all(self) -> None:
        async with self._lock:
            self._vectors.clear()
            self._metadata.clear()

    async def delete_by_filter(self, metadata_filter: MetadataFilter) -> int:
        if not metadata_filter:
            raise ValueError("delete_by_filter requires a non-empty filter")
        async with self._lock:
            doomed = [
                record_id
                for record_id, metadata in self._metadata.items()
                if matches_filter(metadata, metadata_filter)
            ]
            for record_id in doomed:
                del self._vectors[record_id]
                del self._metadata[record_id]
        return len(doomed)
