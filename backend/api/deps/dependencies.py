"""
Dependency injection container.

Factory functions for FastAPI dependencies. Provider clients (embeddings,
vector index, chat model, object storage) are built once per process and
shared; database sessions are opened per request.

Dependencies: backend.configs, backend.application, backend.boundary, backend.core
System role: DI container for service injection
"""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from backend.application.services import ChatService, DocumentService
from backend.boundary.vdb.vector_index import VectorIndex
from backend.configs import Settings, get_settings
from backend.core.answering import AnswerGenerator
from backend.core.document_processing import IngestionPipeline
from backend.core.retriever import RetrievalService


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._engine = None
        self._session_factory = None
        self._embedding_task = None
        self._vector_index = None
        self._downloader = None
        self._retrieval_service = None
        self._answer_generator = None
        self._ingestion_pipeline = None

    @property
    def engine(self) -> AsyncEngine:
        """Get cached pooled database engine."""
        if self._engine is None:
            from backend.boundary.db.connection import get_async_engine
            self._engine = get_async_engine()
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get cached session factory bound to the shared engine."""
        if self._session_factory is None:
            from backend.boundary.db.connection import create_session_factory
            self._session_factory = create_session_factory(self.engine)
        return self._session_factory

    @property
    def embedding_task(self):
        """Get cached embedding task backed by Gemini embeddings."""
        if self._embedding_task is None:
            from backend.core.document_processing.configs import get_pipeline_settings
            from backend.core.document_processing.embeddings_wrapper import build_embeddings
            from backend.core.document_processing.tasks import EmbeddingTask

            vector_settings = get_settings().vector_store
            self._embedding_task = EmbeddingTask(
                embeddings=build_embeddings(vector_settings),
                dimension=vector_settings.embedding_dimension,
                batch_size=get_pipeline_settings().embed_batch_size,
            )
        return self._embedding_task

    @property
    def vector_index(self) -> VectorIndex:
        """Get cached vector index."""
        if self._vector_index is None:
            from backend.boundary.vdb.vector_store_factory import get_vector_index
            self._vector_index = get_vector_index()
        return self._vector_index

    @property
    def downloader(self):
        """Get cached S3 downloader for uploaded PDFs."""
        if self._downloader is None:
            from backend.core.document_processing.tasks import S3DownloadTask

            settings = get_settings()
            self._downloader = S3DownloadTask(
                bucket=settings.s3_documents.bucket,
                region=settings.s3_documents.region,
            )
        return self._downloader

    @property
    def retrieval_service(self) -> RetrievalService:
        """Get cached retrieval service."""
        if self._retrieval_service is None:
            self._retrieval_service = RetrievalService(
                embedding_task=self.embedding_task,
                vector_index=self.vector_index,
            )
        return self._retrieval_service

    @property
    def answer_generator(self) -> AnswerGenerator:
        """Get cached answer generator."""
        if self._answer_generator is None:
            self._answer_generator = AnswerGenerator.from_settings(get_settings().llm)
        return self._answer_generator

    @property
    def ingestion_pipeline(self) -> IngestionPipeline:
        """Get cached ingestion pipeline sharing the API's engine and index."""
        if self._ingestion_pipeline is None:
            self._ingestion_pipeline = IngestionPipeline(
                session_factory=self.session_factory,
                embedding_task=self.embedding_task,
                vector_index=self.vector_index,
                downloader=self.downloader,
            )
        return self._ingestion_pipeline

    async def dispose(self) -> None:
        """Close the database engine if one was opened."""
        if self._engine is not None:
            await self._engine.dispose()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._engine = None
        self._session_factory = None
        self._embedding_task = None
        self._vector_index = None
        self._downloader = None
        self._retrieval_service = None
        self._answer_generator = None
        self._ingestion_pipeline = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Open a database session for one request.

    Rolls back if the handler raised; services commit explicitly.

    Yields:
        AsyncSession: Request-scoped session
    """
    async with get_service_cache().session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


def get_vector_index() -> VectorIndex:
    """Get the shared vector index."""
    return get_service_cache().vector_index


def get_retrieval_service() -> RetrievalService:
    """Get the shared retrieval service."""
    return get_service_cache().retrieval_service


def get_ingestion_pipeline() -> IngestionPipeline:
    """Get the shared ingestion pipeline."""
    return get_service_cache().ingestion_pipeline


def get_chat_service(
    db: AsyncSession = Depends(get_db_session),
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
    settings: Settings = Depends(get_settings_dependency),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Async database session (injected via Depends)
        retrieval_service: Shared retrieval service (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        ChatService: Chat service with the shared answer generator
    """
    return ChatService(
        db=db,
        retrieval_service=retrieval_service,
        answer_generator=get_service_cache().answer_generator,
        top_k=settings.vector_store.top_k,
    )


def get_document_service(
    db: AsyncSession = Depends(get_db_session),
    vector_index: VectorIndex = Depends(get_vector_index),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        vector_index: Shared vector index (injected via Depends)

    Returns:
        DocumentService: Document service instance
    """
    return DocumentService(db=db, vector_index=vector_index)
