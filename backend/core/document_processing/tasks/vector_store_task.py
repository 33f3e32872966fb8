"""
Vector index write task.

Pairs embedded chunks with their metadata and writes them to the vector
index in batches. Record IDs are derived from the source and chunk
position, so re-ingesting a source overwrites its records in place.

Dependencies: asyncio, backend.boundary.vdb
System role: Final stage of the ingestion pipeline
"""

import asyncio
import logging
from typing import Callable

from backend.boundary.vdb.vector_index import VectorIndex
from backend.boundary.vdb.vector_schemas import VectorMetadata, VectorRecord

from ..models import Chunk

logger = logging.getLogger(__name__)

MetadataBuilder = Callable[[Chunk, int], VectorMetadata]


def record_id(source_type: str, source_id: str, chunk_index: int) -> str:
    """Deterministic vector record ID for a chunk."""
    return f"{source_type}_{source_id}_{chunk_index}"


class VectorStoreTask:
    """Write embedded chunks to a vector index."""

    def __init__(self, index: VectorIndex, batch_size: int = 100) -> None:
        """
        Initialize vector store task.

        Args:
            index: Target vector index
            batch_size: Records per upsert call

        Raises:
            ValueError: When batch_size is not positive
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._index = index
        self.batch_size = batch_size

    def build_records(
        self,
        chunks: list[Chunk],
        build_metadata: MetadataBuilder,
    ) -> list[VectorRecord]:
        """
        Pair each embedded chunk with its metadata.

        Args:
            chunks: Chunks with embeddings set
            build_metadata: Called with (chunk, total_chunks)

        Returns:
            list[VectorRecord]: Records in chunk order

        Raises:
            ValueError: When a chunk has no embedding
        """
        total = len(chunks)
        records = []
        for chunk in chunks:
            if chunk.embedding is None:
                raise ValueError(f"Chunk {chunk.id} has no embedding")
            records.append(
                VectorRecord(
                    id=chunk.id,
                    values=chunk.embedding,
                    metadata=build_metadata(chunk, total),
                )
            )
        return records

    async def upload(self, records: list[VectorRecord]) -> list[str]:
        """
        Upsert records, batches running concurrently.

        Returns only once every batch is written; the first failure is
        raised after the remaining batches settle.

        Args:
            records: Records to write

        Returns:
            list[str]: IDs of the written records

        Raises:
            VectorStoreError: When any batch fails
        """
        if not records:
            return []

        batches = [
            records[start:start + self.batch_size]
            for start in range(0, len(records), self.batch_size)
        ]
        outcomes = await asyncio.gather(
            *(self._index.upsert(batch) for batch in batches),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                logger.error(
                    f"{__name__}:upload - Upsert failed: {outcome}",
                    extra={"record_count": len(records), "batch_count": len(batches)},
                )
                raise outcome

        logger.info(
            f"{__name__}:upload - Upserted {len(records)} records",
            extra={"record_count": len(records), "batch_count": len(batches)},
        )
        return [record.id for record in records]
