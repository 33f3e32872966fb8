"""
Amazon S3 Vectors index.

Stores chunk embeddings in an S3 Vectors index using the boto3
"s3vectors" client. The index is created with the cosine distance
metric, so similarity is reported as `1 - distance`.

Dependencies: boto3, botocore, asyncio, backend.boundary.vdb
System role: Production vector index
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from backend.boundary.vdb.vector_index import VectorIndex
from backend.boundary.vdb.vector_schemas import (
    MetadataFilter,
    VectorMatch,
    VectorRecord,
    matches_filter,
)
from backend.core.exceptions import VectorStoreError

if TYPE_CHECKING:
    from backend.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)

# Service limits per request
MAX_WRITE_BATCH = 500
MAX_TOP_K = 100
LIST_PAGE_SIZE = 500


def build_s3_filter(metadata_filter: MetadataFilter | None) -> dict[str, Any] | None:
    """
    Translate an exact-match filter into the S3 Vectors filter language.

    Args:
        metadata_filter: Field/value pairs that must all match

    Returns:
        `{"field": {"$eq": value}}` for one condition, `{"$and": [...]}` for
        several, None when there is nothing to filter on
    """
    if not metadata_filter:
        return None
    conditions = [{key: {"$eq": value}} for key, value in metadata_filter.items()]
    if len(conditions) == 1:
        return conditions[0]
    return {"$and": conditions}


class S3VectorsIndex(VectorIndex):
    """
    Vector index backed by Amazon S3 Vectors.

    boto3 calls are blocking, so each one runs in a worker thread.
    """

    def __init__(
        self,
        vectors_bucket: str,
        index_name: str,
        region: str,
        client: Any | None = None,
    ) -> None:
        """
        Initialize the index client.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Index name inside the bucket
            region: AWS region
            client: Preconfigured boto3 s3vectors client (created when None)

        Raises:
            ValueError: If bucket or index name is missing
        """
        if not vectors_bucket:
            raise ValueError("vectors_bucket is required")
        if not index_name:
            raise ValueError("index_name is required")

        self.vectors_bucket = vectors_bucket
        self.index_name = index_name
        self._client = client or boto3.client("s3vectors", region_name=region)

        logger.debug(
            f"{__name__}:__init__ - S3VectorsIndex initialized "
            f"bucket={vectors_bucket}, index={index_name}"
        )

    @classmethod
    def from_settings(cls, settings: "VectorStoreSettings") -> "S3VectorsIndex":
        return cls(
            vectors_bucket=settings.vectors_bucket,
            index_name=settings.index_name,
            region=settings.aws_region,
        )

    async def _call(self, operation: str, method: str, **kwargs) -> dict[str, Any]:
        try:
            return await asyncio.to_thread(
                getattr(self._client, method),
                vectorBucketName=self.vectors_bucket,
                indexName=self.index_name,
                **kwargs,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:{operation} - {type(e).__name__}: {e}")
            raise VectorStoreError(
                f"S3 Vectors {method} failed",
                operation=operation,
                details={"error": str(e), "index": self.index_name},
            ) from e

    async def upsert(self, records: list[VectorRecord]) -> None:
        """
        Write records in service-sized batches; existing keys are replaced.

        Raises:
            VectorStoreError: If any batch is rejected
        """
        for start in range(0, len(records), MAX_WRITE_BATCH):
            batch = records[start:start + MAX_WRITE_BATCH]
            await self._call(
                "upsert",
                "put_vectors",
                vectors=[
                    {
                        "key": record.id,
                        "data": {"float32": [float(v) for v in record.values]},
                        "metadata": record.metadata.to_index(),
                    }
                    for record in batch
                ],
            )
        logger.info(
            f"{__name__}:upsert - Upserted {len(records)} vectors",
            extra={"index": self.index_name, "vector_count": len(records)},
        )

    async def query(
        self,
        vector: list[float],
        metadata_filter: MetadataFilter | None,
        top_k: int,
    ) -> list[VectorMatch]:
        """
        Nearest-neighbour query restricted by the metadata filter.

        Raises:
            VectorStoreError: If the query fails
        """
        if top_k <= 0:
            return []

        kwargs: dict[str, Any] = {
            "queryVector": {"float32": [float(v) for v in vector]},
            "topK": min(top_k, MAX_TOP_K),
            "returnMetadata": True,
            "returnDistance": True,
        }
        s3_filter = build_s3_filter(metadata_filter)
        if s3_filter is not None:
            kwargs["filter"] = s3_filter

        response = await self._call("query", "query_vectors", **kwargs)
        matches = [
            VectorMatch(
                id=item["key"],
                score=1.0 - float(item.get("distance", 1.0)),
                metadata=item.get("metadata") or {},
            )
            for item in response.get("vectors", [])
        ]
        matches.sort(key=lambda m: m.score, reverse=True)
        return matches

    async def _list_keys(self, metadata_filter: MetadataFilter | None) -> list[str]:
        keys: list[str] = []
        next_token: str | None = None
        while True:
            kwargs: dict[str, Any] = {
                "maxResults": LIST_PAGE_SIZE,
                "returnMetadata": metadata_filter is not None,
            }
            if next_token:
                kwargs["nextToken"] = next_token
            response = await self._call("list", "list_vectors", **kwargs)
            for item in response.get("vectors", []):
                if metadata_filter is None or matches_filter(item.get("metadata") or {}, metadata_filter):
                    keys.append(item["key"])
            next_token = response.get("nextToken")
            if not next_token:
                return keys

    async def _delete_keys(self, keys: list[str]) -> None:
        for start in range(0, len(keys), MAX_WRITE_BATCH):
            await self._call("delete", "delete_vectors", keys=keys[start:start + MAX_WRITE_BATCH])

    async def delete_all(self) -> None:
        """Remove every vector in the index."""
        keys = await self._list_keys(None)
        await self._delete_keys(keys)
        logger.warning(
            f"{__name__}:delete_all - Deleted {len(keys)} vectors",
            extra={"index": self.index_name},
        )

    async def delete_by_filter(self, metadata_filter: MetadataFilter) -> int:
        """
        Remove vectors whose metadata matches the filter.

        S3 Vectors has no filtered delete, so keys are listed and matched
        client-side before deletion.
        """
        if not metadata_filter:
            raise ValueError("delete_by_filter requires a non-empty filter")
        keys = await self._list_keys(metadata_filter)
        await self._delete_keys(keys)
        logger.info(
            f"{__name__}:delete_by_filter - Deleted {len(keys)} vectors",
            extra={"index": self.index_name, "filter_keys": list(metadata_filter)},
        )
        return len(keys)
