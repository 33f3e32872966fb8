"""
RAG administration API endpoints.

Routes:
- POST /rag/reset - Wipe the vector index
- GET /rag/test - Run raw retrieval for a query
- POST /rag/sweep - Ingest sources that were never embedded

Dependencies: backend.core.retriever, backend.core.document_processing, backend.boundary.vdb
System role: Operator/debug HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from backend.api.deps import get_ingestion_pipeline, get_retrieval_service, get_vector_index
from backend.api.routers.router_utils import to_http_exception
from backend.boundary.vdb.vector_index import VectorIndex
from backend.core.document_processing import IngestionPipeline
from backend.core.exceptions import ChatRAGException
from backend.core.retriever import RetrievalService
from backend.models.ingestion import (
    ResetResponse,
    RetrievalTestResponse,
    SweepRequest,
    SweepResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rag", tags=["rag"])


@router.post("/reset", response_model=ResetResponse)
async def reset_index(vector_index: VectorIndex = Depends(get_vector_index)) -> ResetResponse:
    """
    Delete every vector in the index.

    Completion flags in the database are left as they are.

    Raises:
        HTTPException(502): Vector index unavailable
    """
    try:
        await vector_index.delete_all()
    except ChatRAGException as e:
        raise to_http_exception(e) from e

    logger.warning(f"{__name__}:reset_index - Vector index wiped")
    return ResetResponse(message="Vector index cleared")


@router.get("/test", response_model=RetrievalTestResponse)
async def test_retrieval(
    q: str = Query(min_length=1, description="Query text"),
    channel_id: str | None = Query(default=None),
    owner_id: str | None = Query(default=None),
    limit: int = Query(default=5, ge=1, le=100),
    include_attachments: bool = Query(default=False),
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> RetrievalTestResponse:
    """
    Run retrieval without generation.

    Raises:
        HTTPException(502): Embedding or index failure
    """
    try:
        results = await retrieval_service.retrieve(
            q,
            channel_id=channel_id,
            owner_id=owner_id,
            limit=limit,
            include_attachments=include_attachments,
        )
    except ChatRAGException as e:
        raise to_http_exception(e) from e
    return RetrievalTestResponse(query=q, count=len(results), results=results)


@router.post("/sweep", response_model=SweepResponse)
async def sweep(
    request: SweepRequest,
    pipeline: IngestionPipeline = Depends(get_ingestion_pipeline),
) -> SweepResponse:
    """Run one sweep in-process and report the counts."""
    result = await pipeline.process_unembedded(request.kind, request.limit)
    return SweepResponse(
        kind=result.kind,
        selected=result.selected,
        succeeded=result.succeeded,
        skipped=result.skipped,
        failed=result.failed,
        failed_ids=[failure.source_id for failure in result.failures],
    )
