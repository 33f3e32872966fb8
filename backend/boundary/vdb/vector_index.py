"""
Vector index interface.

Every backend stores fixed-dimension vectors with structured metadata
and answers nearest-neighbour queries restricted by an exact-match
metadata filter. Upserts are keyed by record ID, so re-writing a record
replaces it.

Dependencies: backend.boundary.vdb.vector_schemas
System role: Contract shared by the in-memory and S3 Vectors indexes
"""

from abc import ABC, abstractmethod

from backend.boundary.vdb.vector_schemas import MetadataFilter, VectorMatch, VectorRecord


class VectorIndex(ABC):
    """Abstract async vector index."""

    @abstractmethod
    async def upsert(self, records: list[VectorRecord]) -> None:
        """
        Insert or replace records by ID.

        Raises:
            VectorStoreError: If the index rejects the write
        """

    @abstractmethod
    async def query(
        self,
        vector: list[float],
        metadata_filter: MetadataFilter | None,
        top_k: int,
    ) -> list[VectorMatch]:
        """
        Return up to top_k matches, best first, honoring the filter.

        Raises:
            VectorStoreError: If the query fails
        """

    @abstractmethod
    async def delete_all(self) -> None:
        """Remove every record from the index."""

    @abstractmethod
    async def delete_by_filter(self, metadata_filter: MetadataFilter) -> int:
        """
        Remove every record whose metadata matches the filter.

        Returns:
            Number of records removed
        """
