"""
Ingestion pipeline orchestrator.

Turns chat messages, channel PDF attachments and personal documents into
vector records: load source -> clean or parse -> chunk -> embed -> upsert
-> mark source as embedded. The completion flag is written only after
every chunk is in the index, so a failed job leaves the source eligible
for the next sweep.

Dependencies: All task modules, configs, backend.boundary.db, backend.boundary.vdb
System role: Pipeline orchestration (coordinates only)
"""

import asyncio
import logging
import time
from datetime import datetime
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.boundary.db.CRUD import attachment_crud, message_crud, user_document_crud
from backend.boundary.db.CRUD.base_crud import EmbeddableCRUD
from backend.boundary.vdb.vector_index import VectorIndex
from backend.boundary.vdb.vector_schemas import (
    MESSAGE_TYPE,
    PDF_CHUNK_TYPE,
    AttachmentChunkMetadata,
    MessageMetadata,
    UserDocumentChunkMetadata,
    VectorMetadata,
)
from backend.core.exceptions import NotFoundError, ValidationError
from backend.observability.log_utils import log_exception_with_context

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .models import (
    AttachmentScope,
    Chunk,
    DocumentScope,
    IngestionResult,
    OwnerScope,
    SourceKind,
    SweepFailure,
    SweepResult,
)
from .tasks import (
    ChunkingTask,
    EmbeddingTask,
    ParsingTask,
    S3DownloadTask,
    VectorStoreTask,
    record_id,
    strip_markup,
)

logger = logging.getLogger(__name__)

MetadataBuilder = Callable[[Chunk, int], VectorMetadata]


class IngestionPipeline:
    """Orchestrate ingestion of messages and PDFs into the vector index."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        embedding_task: EmbeddingTask,
        vector_index: VectorIndex,
        downloader: S3DownloadTask | None = None,
        settings: DocumentPipelineSettings | None = None,
        parser: ParsingTask | None = None,
    ) -> None:
        """
        Initialize pipeline with its collaborators.

        Args:
            session_factory: Opens one DB session per load/flag step
            embedding_task: Embeds chunk texts
            vector_index: Destination index
            downloader: Fetches PDFs from object storage (required for PDF sources)
            settings: Pipeline settings (uses defaults if None)
            parser: PDF parser (ParsingTask if None)
        """
        self._settings = settings or get_pipeline_settings()
        self._session_factory = session_factory
        self._embedding_task = embedding_task
        self._downloader = downloader
        self._parsing_task = parser or ParsingTask()
        self._message_chunker = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.message_chunk_overlap,
        )
        self._pdf_chunker = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.pdf_chunk_overlap,
        )
        self._vector_store_task = VectorStoreTask(
            index=vector_index,
            batch_size=self._settings.upsert_batch_size,
        )

    async def _embed_and_store(self, chunks: list[Chunk], build_metadata: MetadataBuilder) -> list[str]:
        """
        Embed chunks and upsert them, one embedding batch at a time.

        Batches already written stay in the index if a later batch fails.
        """
        total = len(chunks)
        written: list[str] = []
        step = self._settings.embed_batch_size
        for start in range(0, total, step):
            batch = chunks[start:start + step]
            vectors = await self._embedding_task.embed_documents([chunk.content for chunk in batch])
            embedded = [
                chunk.model_copy(update={"embedding": vector})
                for chunk, vector in zip(batch, vectors)
            ]
            records = self._vector_store_task.build_records(
                embedded,
                lambda chunk, _: build_metadata(chunk, total),
            )
            written.extend(await self._vector_store_task.upload(records))
        return written

    async def _mark_embedded(self, crud: EmbeddableCRUD, source_id: str) -> None:
        async with self._session_factory() as session:
            await crud.mark_embedded(session, source_id)
            await session.commit()

    async def ingest_message(self, message_id: str) -> IngestionResult:
        """
        Ingest one chat message.

        Already-embedded and deleted messages are a no-op. A message that
        is empty after markup cleanup writes no records but is still
        marked embedded.

        Args:
            message_id: Message to ingest

        Returns:
            IngestionResult: Records written, or the reason nothing was done

        Raises:
            NotFoundError: Message does not exist
            EmbeddingError: Embedding provider failed
            VectorStoreError: Index write failed
        """
        start_time = time.perf_counter()

        async with self._session_factory() as session:
            message = await message_crud.get_with_channel(session, message_id)
        if message is None:
            raise NotFoundError("message", message_id)
        if message.has_embedding:
            return IngestionResult(source_id=message_id, source_type=MESSAGE_TYPE, skipped_reason="already_embedded")
        if message.is_deleted:
            return IngestionResult(source_id=message_id, source_type=MESSAGE_TYPE, skipped_reason="deleted")

        texts = self._message_chunker.split_text(strip_markup(message.content))
        chunks = [
            Chunk(id=record_id(MESSAGE_TYPE, message.id, index), content=text, chunk_index=index)
            for index, text in enumerate(texts)
        ]
        created_at = message.created_at.isoformat()
        is_dm = bool(message.channel.is_dm) if message.channel is not None else False

        def build_metadata(chunk: Chunk, total: int) -> MessageMetadata:
            return MessageMetadata(
                text=chunk.content,
                chunk_index=chunk.chunk_index,
                total_chunks=total,
                created_at=created_at,
                message_id=message.id,
                channel_id=message.channel_id,
                sender_id=message.sender_id,
                is_dm=is_dm,
            )

        record_ids = await self._embed_and_store(chunks, build_metadata)
        await self._mark_embedded(message_crud, message.id)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:ingest_message - Embedded message {message.id} into {len(record_ids)} chunks",
            extra={"message_id": message.id, "channel_id": message.channel_id, "processing_time_ms": elapsed_ms},
        )
        return IngestionResult(
            source_id=message.id,
            source_type=MESSAGE_TYPE,
            chunk_count=len(record_ids),
            record_ids=record_ids,
            processing_time_ms=elapsed_ms,
        )

    async def ingest_document_bytes(
        self,
        scope: DocumentScope,
        file_bytes: bytes,
        filename: str,
    ) -> IngestionResult:
        """
        Parse, chunk, embed and upsert one PDF.

        Does not touch the completion flag; callers owning a DB record do that.

        Args:
            scope: Channel attachment or personal-document scope
            file_bytes: Raw PDF content
            filename: Original filename, stored for citations

        Returns:
            IngestionResult: Records written (zero for a PDF without text)

        Raises:
            ParsingError: Bytes are not a readable PDF
            EmbeddingError: Embedding provider failed
            VectorStoreError: Index write failed
        """
        start_time = time.perf_counter()
        source_id = scope.source_id

        parsed = await asyncio.to_thread(self._parsing_task.parse, file_bytes, source_id)
        spans = self._pdf_chunker.window_spans(parsed.text)
        chunks = [
            Chunk(
                id=record_id(PDF_CHUNK_TYPE, source_id, index),
                content=parsed.text[start:end],
                chunk_index=index,
                page_number=parsed.page_for_offset(start),
            )
            for index, (start, end) in enumerate(spans)
        ]
        if not chunks:
            logger.warning(
                f"{__name__}:ingest_document_bytes - No extractable text in {filename}",
                extra={"source_id": source_id},
            )

        created_at = scope.created_at.isoformat()

        def build_metadata(chunk: Chunk, total: int) -> VectorMetadata:
            common = {
                "text": chunk.content,
                "chunk_index": chunk.chunk_index,
                "total_chunks": total,
                "created_at": created_at,
                "filename": filename,
                "page_number": chunk.page_number,
            }
            if isinstance(scope, OwnerScope):
                return UserDocumentChunkMetadata(
                    owner_id=scope.owner_id,
                    document_id=scope.document_id,
                    **common,
                )
            return AttachmentChunkMetadata(
                attachment_id=scope.attachment_id,
                message_id=scope.message_id,
                channel_id=scope.channel_id,
                sender_id=scope.sender_id,
                is_dm=scope.is_dm,
                **common,
            )

        record_ids = await self._embed_and_store(chunks, build_metadata)
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{__name__}:ingest_document_bytes - Embedded {filename} into {len(record_ids)} chunks",
            extra={"source_id": source_id, "page_count": parsed.page_count, "processing_time_ms": elapsed_ms},
        )
        return IngestionResult(
            source_id=source_id,
            source_type=PDF_CHUNK_TYPE,
            chunk_count=len(record_ids),
            record_ids=record_ids,
            processing_time_ms=elapsed_ms,
        )

    async def _fetch(self, file_url: str) -> bytes:
        if self._downloader is None:
            raise RuntimeError("IngestionPipeline was built without a downloader")
        return await self._downloader.fetch(file_url)

    async def ingest_attachment(self, attachment_id: str) -> IngestionResult:
        """
        Ingest a PDF attached to a channel message into the channel's scope.

        Non-PDF and already-embedded attachments are a no-op.

        Raises:
            NotFoundError: Attachment or stored object does not exist
            ObjectStorageError: Download failed
            ParsingError, EmbeddingError, VectorStoreError: Later stages failed
        """
        async with self._session_factory() as session:
            attachment = await attachment_crud.get_with_message(session, attachment_id)
        if attachment is None:
            raise NotFoundError("attachment", attachment_id)
        if attachment.has_embedding:
            return IngestionResult(source_id=attachment_id, source_type=PDF_CHUNK_TYPE, skipped_reason="already_embedded")
        if not attachment.is_pdf:
            logger.info(
                f"{__name__}:ingest_attachment - Skipping non-PDF attachment {attachment_id}",
                extra={"content_type": attachment.content_type},
            )
            return IngestionResult(source_id=attachment_id, source_type=PDF_CHUNK_TYPE, skipped_reason="unsupported_content_type")

        message = attachment.message
        scope = AttachmentScope(
            attachment_id=attachment.id,
            message_id=message.id,
            channel_id=message.channel_id,
            sender_id=message.sender_id,
            is_dm=bool(message.channel.is_dm) if message.channel is not None else False,
            created_at=attachment.created_at,
        )
        file_bytes = await self._fetch(attachment.file_url)
        result = await self.ingest_document_bytes(scope, file_bytes, attachment.filename)
        await self._mark_embedded(attachment_crud, attachment.id)
        return result

    async def ingest_user_document(self, document_id: str) -> IngestionResult:
        """
        Ingest a personal document into its owner's scope.

        Raises:
            NotFoundError: Document or stored object does not exist
            ObjectStorageError: Download failed
            ParsingError, EmbeddingError, VectorStoreError: Later stages failed
        """
        async with self._session_factory() as session:
            document = await user_document_crud.get_by_id(session, document_id)
        if document is None:
            raise NotFoundError("document", document_id)
        if document.has_embedding:
            return IngestionResult(source_id=document_id, source_type=PDF_CHUNK_TYPE, skipped_reason="already_embedded")

        scope = OwnerScope(
            owner_id=document.user_id,
            document_id=document.id,
            created_at=document.created_at,
        )
        file_bytes = await self._fetch(document.file_url)
        result = await self.ingest_document_bytes(scope, file_bytes, document.filename)
        await self._mark_embedded(user_document_crud, document.id)
        return result

    def _sweep_plan(self, kind: SourceKind) -> tuple[EmbeddableCRUD, Callable, int]:
        if kind == SourceKind.MESSAGES:
            return message_crud, self.ingest_message, self._settings.message_sweep_limit
        if kind == SourceKind.ATTACHMENTS:
            return attachment_crud, self.ingest_attachment, self._settings.document_sweep_limit
        return user_document_crud, self.ingest_user_document, self._settings.document_sweep_limit

    async def process_unembedded(self, kind: SourceKind, limit: int | None = None) -> SweepResult:
        """
        Ingest up to `limit` sources of one kind that were never embedded.

        Each source is ingested independently; a failure is recorded and
        the sweep moves on. Failed sources keep their flag unset and are
        selected again by the next sweep.

        Args:
            kind: Which sources to sweep
            limit: Maximum sources to pick up (kind-specific default if None)

        Returns:
            SweepResult: Selected, succeeded, skipped and failed counts

        Raises:
            ValidationError: When limit is not positive
        """
        crud, ingest, default_limit = self._sweep_plan(kind)
        if limit is None:
            limit = default_limit
        elif limit <= 0:
            raise ValidationError("limit must be positive", field="limit")
        async with self._session_factory() as session:
            rows = await crud.get_unembedded(session, limit)
        source_ids = [row.id for row in rows]

        result = SweepResult(kind=kind, selected=len(source_ids))
        semaphore = asyncio.Semaphore(self._settings.sweep_concurrency)

        async def run_one(source_id: str) -> IngestionResult | SweepFailure:
            async with semaphore:
                try:
                    return await ingest(source_id)
                except Exception as e:
                    log_exception_with_context(
                        logger,
                        f"{__name__}:process_unembedded - Failed to ingest {kind.value} {source_id}",
                        e,
                        source_id=source_id,
                        kind=kind.value,
                    )
                    return SweepFailure(source_id=source_id, error_type=type(e).__name__, error=str(e))

        for outcome in await asyncio.gather(*(run_one(source_id) for source_id in source_ids)):
            if isinstance(outcome, SweepFailure):
                result.failures.append(outcome)
            elif outcome.skipped:
                result.skipped += 1
            else:
                result.succeeded += 1

        logger.info(
            f"{__name__}:process_unembedded - Swept {result.selected} {kind.value}: "
            f"{result.succeeded} ok, {result.skipped} skipped, {result.failed} failed",
        )
        return result
