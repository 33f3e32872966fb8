"""
Ingestion Celery tasks.

Tasks: embed_message(message_id), embed_attachment(attachment_id),
embed_user_document(document_id), sweep_unembedded(kind, limit)
Flow: load source -> clean/parse -> chunk -> embed -> upsert -> set flag

Each run gets its own event loop through asyncio.run, so it also gets its
own NullPool engine; pooled connections cannot be shared across loops.
Nothing is retried automatically: a failed source keeps its flag unset
and the next sweep selects it again.

Dependencies: celery, sqlalchemy, backend.core.document_processing, backend.workers
System role: Async document processing task
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from backend.boundary.db.connection import create_session_factory, get_async_engine
from backend.boundary.vdb.vector_store_factory import get_vector_index
from backend.configs import get_settings
from backend.core.document_processing import IngestionPipeline, SourceKind
from backend.core.document_processing.configs import get_pipeline_settings
from backend.core.document_processing.embeddings_wrapper import build_embeddings
from backend.core.document_processing.tasks import EmbeddingTask, S3DownloadTask
from backend.workers import celery_app

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_pipeline(session_factory) -> IngestionPipeline:
    """
    Build an ingestion pipeline for one worker run.

    Args:
        session_factory: Session factory bound to the run's engine

    Returns:
        IngestionPipeline: Pipeline wired to the configured providers
    """
    settings = get_settings()
    pipeline_settings = get_pipeline_settings()
    return IngestionPipeline(
        session_factory=session_factory,
        embedding_task=EmbeddingTask(
            embeddings=build_embeddings(settings.vector_store),
            dimension=settings.vector_store.embedding_dimension,
            batch_size=pipeline_settings.embed_batch_size,
        ),
        vector_index=get_vector_index(),
        downloader=S3DownloadTask(
            bucket=settings.s3_documents.bucket,
            region=settings.s3_documents.region,
        ),
        settings=pipeline_settings,
    )


def run_with_pipeline(work: Callable[[IngestionPipeline], Awaitable[T]]) -> T:
    """
    Run one coroutine against a fresh pipeline and dispose its engine.

    Args:
        work: Coroutine function taking the pipeline

    Returns:
        Whatever `work` returns
    """

    async def _run() -> T:
        engine = get_async_engine(pooled=False)
        try:
            return await work(build_pipeline(create_session_factory(engine)))
        finally:
            await engine.dispose()

    return asyncio.run(_run())


@celery_app.task(bind=True)
def embed_message(self, message_id: str) -> dict:
    """
    Ingest one chat message.

    Args:
        message_id: Message ID

    Returns:
        dict: Ingestion result
    """
    logger.info(f"{__name__}:embed_message - START message_id={message_id} task_id={self.request.id}")
    result = run_with_pipeline(lambda pipeline: pipeline.ingest_message(message_id))
    return result.model_dump(mode="json")


@celery_app.task(bind=True)
def embed_attachment(self, attachment_id: str) -> dict:
    """
    Ingest one channel PDF attachment.

    Args:
        attachment_id: Attachment ID

    Returns:
        dict: Ingestion result
    """
    logger.info(f"{__name__}:embed_attachment - START attachment_id={attachment_id} task_id={self.request.id}")
    result = run_with_pipeline(lambda pipeline: pipeline.ingest_attachment(attachment_id))
    return result.model_dump(mode="json")


@celery_app.task(bind=True)
def embed_user_document(self, document_id: str) -> dict:
    """
    Ingest one personal document.

    Args:
        document_id: User document ID

    Returns:
        dict: Ingestion result
    """
    logger.info(f"{__name__}:embed_user_document - START document_id={document_id} task_id={self.request.id}")
    result = run_with_pipeline(lambda pipeline: pipeline.ingest_user_document(document_id))
    return result.model_dump(mode="json")


@celery_app.task(bind=True)
def sweep_unembedded(self, kind: str, limit: int | None = None) -> dict:
    """
    Ingest sources of one kind that were never embedded.

    Args:
        kind: "messages", "attachments" or "user_documents"
        limit: Maximum sources to pick up (kind-specific default if None)

    Returns:
        dict: Sweep counts and failures
    """
    source_kind = SourceKind(kind)
    result = run_with_pipeline(lambda pipeline: pipeline.process_unembedded(source_kind, limit))
    return result.model_dump(mode="json")
