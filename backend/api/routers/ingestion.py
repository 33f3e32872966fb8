"""
Channel ingestion API endpoints.

Routes:
- POST /messages/{message_id}/embed - Queue a message for embedding
- POST /attachments/{attachment_id}/embed - Queue a PDF attachment for embedding

Both respond as soon as the job is queued; ingestion outcome is not
reported back to the caller.

Dependencies: backend.boundary.db, backend.workers
System role: Ingestion trigger HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import get_db_session
from backend.api.routers.router_utils import enqueue
from backend.boundary.db.CRUD import attachment_crud, message_crud
from backend.models.ingestion import EnqueueResponse
from backend.workers.tasks.document_ingestion import embed_attachment, embed_message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ingestion"])


@router.post(
    "/messages/{message_id}/embed",
    response_model=EnqueueResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def embed_message_endpoint(
    message_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> EnqueueResponse:
    """
    Queue a chat message for embedding.

    Raises:
        HTTPException(404): Message not found
        HTTPException(503): Queue unavailable
    """
    if await message_crud.get_by_id(db, message_id) is None:
        raise HTTPException(status_code=404, detail=f"Message not found: {message_id}")

    task_id = enqueue(embed_message, message_id)
    logger.info(f"{__name__}:embed_message_endpoint - Queued message {message_id}", extra={"task_id": task_id})
    return EnqueueResponse(source_id=message_id, task_id=task_id)


@router.post(
    "/attachments/{attachment_id}/embed",
    response_model=EnqueueResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def embed_attachment_endpoint(
    attachment_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> EnqueueResponse:
    """
    Queue a channel attachment for embedding. Non-PDF attachments are
    accepted and skipped by the worker.

    Raises:
        HTTPException(404): Attachment not found
        HTTPException(503): Queue unavailable
    """
    if await attachment_crud.get_by_id(db, attachment_id) is None:
        raise HTTPException(status_code=404, detail=f"Attachment not found: {attachment_id}")

    task_id = enqueue(embed_attachment, attachment_id)
    logger.info(
        f"{__name__}:embed_attachment_endpoint - Queued attachment {attachment_id}",
        extra={"task_id": task_id},
    )
    return EnqueueResponse(source_id=attachment_id, task_id=task_id)
