"""
Scoped retrieval over the vector index.

A query is embedded once and run against up to two scopes concurrently:
a channel (its messages, optionally its PDF attachments) and an owner
(their personal documents). Results from both are merged by score.
Persona bots search a third scope, the messages one user wrote.

Dependencies: asyncio, backend.boundary.vdb, backend.core.document_processing.tasks
System role: RAG retrieval business logic
"""

import asyncio
import logging

from backend.boundary.vdb.vector_index import VectorIndex
from backend.boundary.vdb.vector_schemas import MESSAGE_TYPE, PDF_CHUNK_TYPE, MetadataFilter
from backend.core.document_processing.tasks.embedding_task import EmbeddingTask
from backend.core.exceptions import ValidationError
from backend.models.retrieval import RetrievalResult

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


def channel_filter(channel_id: str, include_attachments: bool = False) -> MetadataFilter:
    """
    Filter for a channel's scope.

    Messages only by default; with include_attachments the channel's PDF
    chunks match too.
    """
    if include_attachments:
        return {"channelId": channel_id}
    return {"channelId": channel_id, "type": MESSAGE_TYPE}


def owner_filter(owner_id: str) -> MetadataFilter:
    """Filter for a user's personal documents."""
    return {"ownerId": owner_id, "type": PDF_CHUNK_TYPE}


def sender_filter(sender_id: str, public_only: bool = True) -> MetadataFilter:
    """
    Filter for the messages one user wrote.

    Public scope leaves out their direct messages; the full scope, used
    when the persona bot is asked inside a DM, includes them.
    """
    if public_only:
        return {"type": MESSAGE_TYPE, "senderId": sender_id, "isDM": False}
    return {"type": MESSAGE_TYPE, "senderId": sender_id}


class RetrievalService:
    """Embed a query and fetch the best passages within the caller's scopes."""

    def __init__(self, embedding_task: EmbeddingTask, vector_index: VectorIndex) -> None:
        """
        Initialize retrieval service.

        Args:
            embedding_task: Embeds the query text
            vector_index: Index to search
        """
        self._embedding_task = embedding_task
        self._index = vector_index

    async def retrieve(
        self,
        query: str,
        channel_id: str | None = None,
        owner_id: str | None = None,
        limit: int = DEFAULT_LIMIT,
        include_attachments: bool = False,
    ) -> list[RetrievalResult]:
        """
        Retrieve passages relevant to a query.

        With no scope at all nothing is embedded and nothing is returned.
        Each scope is queried for `limit` hits; the union is ordered by
        score (ties keep channel hits before owner hits) and cut to `limit`.

        Args:
            query: Question text
            channel_id: Channel scope
            owner_id: Personal-document scope
            limit: Maximum results
            include_attachments: Include channel PDF chunks in the channel scope

        Returns:
            list[RetrievalResult]: Best passages first

        Raises:
            ValidationError: When limit is not positive
            EmbeddingError: Query embedding failed
            VectorStoreError: Index query failed
        """
        if limit <= 0:
            raise ValidationError("limit must be positive", field="limit")
        if not channel_id and not owner_id:
            return []

        vector = await self._embedding_task.embed_query(query)

        filters: list[MetadataFilter] = []
        if channel_id:
            filters.append(channel_filter(channel_id, include_attachments))
        if owner_id:
            filters.append(owner_filter(owner_id))

        per_scope = await asyncio.gather(
            *(self._index.query(vector, metadata_filter, limit) for metadata_filter in filters)
        )
        matches = [match for scope_matches in per_scope for match in scope_matches]
        # sorted() is stable, so equal scores keep scope order
        matches = sorted(matches, key=lambda match: match.score, reverse=True)[:limit]

        results = [RetrievalResult.from_match(match) for match in matches]
        logger.info(
            f"{__name__}:retrieve - Retrieved {len(results)} passages",
            extra={
                "channel_id": channel_id,
                "owner_id": owner_id,
                "scope_count": len(filters),
                "limit": limit,
            },
        )
        return results

    async def retrieve_from_sender(
        self,
        query: str,
        sender_id: str,
        public_only: bool = True,
        limit: int = DEFAULT_LIMIT,
    ) -> list[RetrievalResult]:
        """
        Retrieve passages from the messages one user wrote, in any channel.

        Args:
            query: Question text
            sender_id: Author whose messages form the scope
            public_only: Leave out the author's direct messages
            limit: Maximum results

        Returns:
            list[RetrievalResult]: Best passages first

        Raises:
            ValidationError: When limit is not positive or sender is empty
            EmbeddingError: Query embedding failed
            VectorStoreError: Index query failed
        """
        if limit <= 0:
            raise ValidationError("limit must be positive", field="limit")
        if not sender_id:
            raise ValidationError("Sender is required", field="sender_id")

        vector = await self._embedding_task.embed_query(query)
        matches = await self._index.query(vector, sender_filter(sender_id, public_only), limit)

        results = [RetrievalResult.from_match(match) for match in matches[:limit]]
        logger.info(
            f"{__name__}:retrieve_from_sender - Retrieved {len(results)} passages",
            extra={"sender_id": sender_id, "public_only": public_only, "limit": limit},
        )
        return results
