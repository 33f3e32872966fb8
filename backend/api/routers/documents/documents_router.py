"""
Personal document API endpoints.

Routes:
- GET /users/{owner_id}/docs - List the user's documents
- POST /users/{owner_id}/docs/{document_id}/embed - Queue ingestion
- DELETE /users/{owner_id}/docs/{document_id} - Remove vectors and record
- POST /users/{owner_id}/docs/{document_id}/reindex - Remove vectors, clear flag, queue ingestion

Dependencies: backend.application.services, backend.models, backend.workers
System role: Document HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status

from backend.api.deps import get_document_service
from backend.api.routers.router_utils import enqueue, to_http_exception
from backend.application.services.document_service import DocumentService
from backend.core.exceptions import ChatRAGException
from backend.models.document import (
    DocumentDeleteResponse,
    DocumentListResponse,
    ReindexResponse,
    UserDocumentResponse,
)
from backend.models.ingestion import EnqueueResponse
from backend.workers.tasks.document_ingestion import embed_user_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["documents"])


@router.get("/{owner_id}/docs", response_model=DocumentListResponse)
async def list_documents(
    owner_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List a user's documents, newest first."""
    documents = await document_service.list_documents(owner_id)
    return DocumentListResponse(
        documents=[UserDocumentResponse.model_validate(document) for document in documents],
        total=len(documents),
    )


@router.post(
    "/{owner_id}/docs/{document_id}/embed",
    response_model=EnqueueResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def embed_document(
    owner_id: str,
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> EnqueueResponse:
    """
    Queue a personal document for ingestion.

    Raises:
        HTTPException(404): Document not found
        HTTPException(403): Document belongs to another user
        HTTPException(503): Queue unavailable
    """
    try:
        await document_service.get_owned_document(owner_id, document_id)
    except ChatRAGException as e:
        raise to_http_exception(e) from e

    task_id = enqueue(embed_user_document, document_id)
    logger.info(
        f"{__name__}:embed_document - Queued document {document_id}",
        extra={"owner_id": owner_id, "task_id": task_id},
    )
    return EnqueueResponse(source_id=document_id, task_id=task_id)


@router.delete("/{owner_id}/docs/{document_id}", response_model=DocumentDeleteResponse)
async def delete_document(
    owner_id: str,
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentDeleteResponse:
    """
    Delete a document and every chunk it contributed to the index.

    Raises:
        HTTPException(404): Document not found
        HTTPException(403): Document belongs to another user
        HTTPException(502): Vector index unavailable
    """
    try:
        purged = await document_service.delete_document(owner_id, document_id)
    except ChatRAGException as e:
        raise to_http_exception(e) from e
    return DocumentDeleteResponse(document_id=document_id, vectors_deleted=purged)


@router.post(
    "/{owner_id}/docs/{document_id}/reindex",
    response_model=ReindexResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def reindex_document(
    owner_id: str,
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> ReindexResponse:
    """
    Drop a document's chunks and queue it for fresh ingestion.

    Used after the stored file was replaced.

    Raises:
        HTTPException(404): Document not found
        HTTPException(403): Document belongs to another user
        HTTPException(502): Vector index unavailable
        HTTPException(503): Queue unavailable
    """
    try:
        purged = await document_service.prepare_reindex(owner_id, document_id)
    except ChatRAGException as e:
        raise to_http_exception(e) from e

    task_id = enqueue(embed_user_document, document_id)
    return ReindexResponse(document_id=document_id, vectors_deleted=purged, task_id=task_id)
