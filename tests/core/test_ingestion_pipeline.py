"""
Test suite for IngestionPipeline.

Runs ingestion end to end over in-memory SQLite, the in-memory vector
index and deterministic letter-count embeddings. The PDF parser and the
downloader are stubbed so documents are plain strings.

System role: Verification of message and PDF ingestion and sweeps
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from backend.boundary.db.CRUD import attachment_crud, message_crud, user_document_crud
from backend.core.document_processing import DocumentPipelineSettings, IngestionPipeline, SourceKind
from backend.core.document_processing.models import ParsedDocument
from backend.core.document_processing.tasks import EmbeddingTask
from backend.core.exceptions import EmbeddingError, NotFoundError, ObjectStorageError, ValidationError
from backend.core.retriever import RetrievalService
from tests.fakes import EMBEDDING_DIMENSION, LetterCountEmbeddings

# Windows at 1000/100: [0,1000) all "a", [900,1900) mostly "b", [1800,2500) mostly "c"
DOCUMENT_TEXT = "a" * 1000 + "b" * 1000 + "c" * 500


class FailingEmbeddings(LetterCountEmbeddings):
    """Letter-count embeddings that fail on a given document call."""

    def __init__(self, fail_on_call: int) -> None:
        super().__init__()
        self.fail_on_call = fail_on_call

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        if len(self.document_calls) + 1 == self.fail_on_call:
            self.document_calls.append(list(texts))
            raise RuntimeError("provider unavailable")
        return self.embed_documents(texts)


@pytest.fixture
def fake_parser() -> MagicMock:
    """Provide a parser returning a two-page document."""
    parser = MagicMock()
    parser.parse.return_value = ParsedDocument(
        text=DOCUMENT_TEXT,
        page_offsets=[0, 1500],
        page_numbers=[1, 2],
    )
    return parser


@pytest.fixture
def pipeline_settings() -> DocumentPipelineSettings:
    """Provide pipeline settings; one source at a time over the single SQLite connection."""
    return DocumentPipelineSettings(sweep_concurrency=1)


@pytest.fixture
def pipeline(session_factory, embedding_task, memory_index, mock_downloader, fake_parser, pipeline_settings):
    """Provide a pipeline over the test database and in-memory index."""
    return IngestionPipeline(
        session_factory=session_factory,
        embedding_task=embedding_task,
        vector_index=memory_index,
        downloader=mock_downloader,
        settings=pipeline_settings,
        parser=fake_parser,
    )


async def flag_of(session_factory, crud, source_id: str) -> bool:
    async with session_factory() as session:
        return (await crud.get_by_id(session, source_id)).has_embedding


class TestIngestMessage:
    """Test suite for IngestionPipeline.ingest_message()."""

    @pytest.mark.asyncio
    async def test_ingest_message_should_store_cleaned_text_and_set_flag(
        self, pipeline, seeded, session_factory, memory_index
    ) -> None:
        """Test a message becomes one record with channel metadata and cleaned text."""
        # Act
        result = await pipeline.ingest_message("msg-1")

        # Assert
        assert result.record_ids == ["message_msg-1_0"]
        assert await flag_of(session_factory, message_crud, "msg-1") is True

        matches = await memory_index.query(
            LetterCountEmbeddings.vectorize("tuesday"), {"messageId": "msg-1"}, 5
        )
        metadata = matches[0].metadata
        assert metadata["type"] == "message"
        assert metadata["channelId"] == "chan-1"
        assert metadata["senderId"] == "user-1"
        assert metadata["isDM"] is False
        assert metadata["text"] == "Deploys happen on Tuesday & Thursday"
        assert metadata["chunkIndex"] == 0
        assert metadata["totalChunks"] == 1
        assert metadata["createdAt"].startswith("2024-05-01T12:00:00")

    @pytest.mark.asyncio
    async def test_ingest_message_should_skip_deleted_message(
        self, pipeline, seeded, session_factory, memory_index
    ) -> None:
        """Test deleted messages are never embedded."""
        result = await pipeline.ingest_message("msg-2")

        assert result.skipped_reason == "deleted"
        assert len(memory_index) == 0
        assert await flag_of(session_factory, message_crud, "msg-2") is False

    @pytest.mark.asyncio
    async def test_ingest_message_should_skip_already_embedded(
        self, pipeline, seeded, fake_embeddings, memory_index
    ) -> None:
        """Test a second ingestion of the same message is a no-op."""
        await pipeline.ingest_message("msg-1")
        calls_after_first = len(fake_embeddings.document_calls)

        result = await pipeline.ingest_message("msg-1")

        assert result.skipped_reason == "already_embedded"
        assert len(fake_embeddings.document_calls) == calls_after_first
        assert len(memory_index) == 1

    @pytest.mark.asyncio
    async def test_ingest_message_should_raise_for_missing_message(self, pipeline, seeded) -> None:
        """Test unknown message IDs raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await pipeline.ingest_message("missing")

    @pytest.mark.asyncio
    async def test_ingest_message_should_mark_markup_only_message_embedded(
        self, pipeline, seeded, session_factory, memory_index
    ) -> None:
        """Test a message with no text after cleanup writes nothing but is done."""
        async with session_factory() as session:
            await message_crud.create(
                session, id="msg-empty", channel_id="chan-1", sender_id="user-1", content="<p><br></p>"
            )
            await session.commit()

        result = await pipeline.ingest_message("msg-empty")

        assert result.chunk_count == 0
        assert len(memory_index) == 0
        assert await flag_of(session_factory, message_crud, "msg-empty") is True

    @pytest.mark.asyncio
    async def test_ingest_message_should_leave_flag_unset_on_embedding_failure(
        self, seeded, session_factory, memory_index, pipeline_settings
    ) -> None:
        """Test provider failure propagates and the message stays eligible."""
        pipeline = IngestionPipeline(
            session_factory=session_factory,
            embedding_task=EmbeddingTask(FailingEmbeddings(fail_on_call=1), dimension=EMBEDDING_DIMENSION),
            vector_index=memory_index,
            settings=pipeline_settings,
        )

        with pytest.raises(EmbeddingError):
            await pipeline.ingest_message("msg-1")

        assert await flag_of(session_factory, message_crud, "msg-1") is False
        assert len(memory_index) == 0


class TestIngestDocuments:
    """Test suite for PDF ingestion of personal documents and attachments."""

    @pytest.mark.asyncio
    async def test_ingest_user_document_should_make_document_retrievable(
        self, pipeline, seeded, session_factory, embedding_task, memory_index, mock_downloader
    ) -> None:
        """Test end to end: ingest, then a "bbbb" query finds the b-heavy chunk."""
        # Act
        result = await pipeline.ingest_user_document("doc-1")
        hits = await RetrievalService(embedding_task, memory_index).retrieve("bbbb", owner_id="owner-1", limit=3)

        # Assert
        mock_downloader.fetch.assert_awaited_once_with("s3://teamchat-dev-uploads/docs/notes.pdf")
        assert result.record_ids == ["pdf_chunk_doc-1_0", "pdf_chunk_doc-1_1", "pdf_chunk_doc-1_2"]
        assert await flag_of(session_factory, user_document_crud, "doc-1") is True

        top = hits[0]
        assert top.id == "pdf_chunk_doc-1_1"
        assert top.chunk_index == 1
        assert top.total_chunks == 3
        assert top.owner_id == "owner-1"
        assert top.document_id == "doc-1"
        assert top.filename == "notes.pdf"
        assert top.page_number == 1
        assert hits[1].page_number == 2

    @pytest.mark.asyncio
    async def test_ingest_user_document_should_not_leak_into_channel_scope(
        self, pipeline, seeded, embedding_task, memory_index
    ) -> None:
        """Test personal documents are invisible to channel retrieval."""
        await pipeline.ingest_user_document("doc-1")

        hits = await RetrievalService(embedding_task, memory_index).retrieve(
            "bbbb", channel_id="chan-1", include_attachments=True
        )

        assert hits == []

    @pytest.mark.asyncio
    async def test_ingest_attachment_should_store_channel_scoped_chunks(
        self, pipeline, seeded, session_factory, embedding_task, memory_index
    ) -> None:
        """Test PDF attachments land in the channel scope with attachment provenance."""
        await pipeline.ingest_attachment("att-pdf")

        service = RetrievalService(embedding_task, memory_index)
        messages_only = await service.retrieve("cccc", channel_id="chan-1")
        with_attachments = await service.retrieve("cccc", channel_id="chan-1", include_attachments=True)

        assert messages_only == []
        assert with_attachments[0].id == "pdf_chunk_att-pdf_2"
        assert with_attachments[0].attachment_id == "att-pdf"
        assert with_attachments[0].document_id == "att-pdf"
        assert with_attachments[0].message_id == "msg-1"
        assert with_attachments[0].owner_id is None
        assert await flag_of(session_factory, attachment_crud, "att-pdf") is True

    @pytest.mark.asyncio
    async def test_ingest_attachment_should_skip_non_pdf(
        self, pipeline, seeded, session_factory, mock_downloader, memory_index
    ) -> None:
        """Test non-PDF attachments are left alone and not downloaded."""
        result = await pipeline.ingest_attachment("att-png")

        assert result.skipped_reason == "unsupported_content_type"
        mock_downloader.fetch.assert_not_awaited()
        assert len(memory_index) == 0
        assert await flag_of(session_factory, attachment_crud, "att-png") is False

    @pytest.mark.asyncio
    async def test_ingest_user_document_should_keep_flag_on_download_failure(
        self, pipeline, seeded, session_factory, mock_downloader
    ) -> None:
        """Test storage failures propagate and leave the document eligible."""
        mock_downloader.fetch.side_effect = ObjectStorageError("S3 download failed", key="docs/notes.pdf")

        with pytest.raises(ObjectStorageError):
            await pipeline.ingest_user_document("doc-1")

        assert await flag_of(session_factory, user_document_crud, "doc-1") is False

    @pytest.mark.asyncio
    async def test_ingest_user_document_should_keep_earlier_batches_on_partial_failure(
        self, seeded, session_factory, memory_index, mock_downloader, fake_parser
    ) -> None:
        """Test chunks written before a failing batch stay, and the flag stays unset."""
        # Arrange
        embeddings = FailingEmbeddings(fail_on_call=2)
        pipeline = IngestionPipeline(
            session_factory=session_factory,
            embedding_task=EmbeddingTask(embeddings, dimension=EMBEDDING_DIMENSION, batch_size=1),
            vector_index=memory_index,
            downloader=mock_downloader,
            settings=DocumentPipelineSettings(embed_batch_size=1, sweep_concurrency=1),
            parser=fake_parser,
        )

        # Act
        with pytest.raises(EmbeddingError):
            await pipeline.ingest_user_document("doc-1")

        # Assert
        assert len(memory_index) == 1
        assert await flag_of(session_factory, user_document_crud, "doc-1") is False

    @pytest.mark.asyncio
    async def test_reingest_should_overwrite_records_in_place(
        self, pipeline, seeded, session_factory, memory_index
    ) -> None:
        """Test deterministic IDs make a second ingestion replace, not duplicate."""
        await pipeline.ingest_user_document("doc-1")
        async with session_factory() as session:
            await user_document_crud.reset_embedding(session, "doc-1")
            await session.commit()

        await pipeline.ingest_user_document("doc-1")

        assert len(memory_index) == 3

    @pytest.mark.asyncio
    async def test_ingest_user_document_should_mark_textless_pdf_embedded(
        self, pipeline, seeded, session_factory, fake_parser, memory_index
    ) -> None:
        """Test a PDF without text writes nothing but is marked done."""
        fake_parser.parse.return_value = ParsedDocument(text="")

        result = await pipeline.ingest_user_document("doc-1")

        assert result.chunk_count == 0
        assert len(memory_index) == 0
        assert await flag_of(session_factory, user_document_crud, "doc-1") is True


class TestProcessUnembedded:
    """Test suite for IngestionPipeline.process_unembedded()."""

    @pytest.mark.asyncio
    async def test_sweep_should_select_only_live_unembedded_messages(self, pipeline, seeded) -> None:
        """Test deleted messages are not selected."""
        result = await pipeline.process_unembedded(SourceKind.MESSAGES)

        assert result.selected == 1
        assert result.succeeded == 1
        assert result.failed == 0

    @pytest.mark.asyncio
    async def test_sweep_should_select_only_pdf_attachments(self, pipeline, seeded, session_factory) -> None:
        """Test non-PDF attachments are not selected."""
        result = await pipeline.process_unembedded(SourceKind.ATTACHMENTS)

        assert result.selected == 1
        assert await flag_of(session_factory, attachment_crud, "att-pdf") is True

    @pytest.mark.asyncio
    async def test_sweep_should_record_failures_and_continue(
        self, seeded, session_factory, embedding_task, memory_index, fake_parser
    ) -> None:
        """Test one failing source does not stop the others."""
        # Arrange
        async with session_factory() as session:
            await user_document_crud.create(
                session, id="doc-2", user_id="owner-1", filename="b.pdf", file_url="docs/b.pdf"
            )
            await session.commit()
        async def fetch(url: str) -> bytes:
            if url == "docs/b.pdf":
                raise ObjectStorageError("boom", key=url)
            return b"%PDF-1.4"

        downloader = AsyncMock()
        downloader.fetch = AsyncMock(side_effect=fetch)
        pipeline = IngestionPipeline(
            session_factory=session_factory,
            embedding_task=embedding_task,
            vector_index=memory_index,
            downloader=downloader,
            settings=DocumentPipelineSettings(sweep_concurrency=1),
            parser=fake_parser,
        )

        # Act
        result = await pipeline.process_unembedded(SourceKind.USER_DOCUMENTS)

        # Assert
        assert result.selected == 2
        assert result.succeeded == 1
        assert result.failed == 1
        assert result.failures[0].source_id == "doc-2"
        assert result.failures[0].error_type == "ObjectStorageError"
        assert await flag_of(session_factory, user_document_crud, "doc-2") is False

    @pytest.mark.asyncio
    async def test_sweep_should_respect_limit(self, pipeline, seeded, session_factory) -> None:
        """Test the limit caps how many sources are picked up."""
        async with session_factory() as session:
            for i in range(3):
                await message_crud.create(
                    session, id=f"extra-{i}", channel_id="chan-1", sender_id="user-1", content=f"note {i}"
                )
            await session.commit()

        result = await pipeline.process_unembedded(SourceKind.MESSAGES, limit=2)

        assert result.selected == 2

    @pytest.mark.asyncio
    async def test_sweep_should_reject_non_positive_limit(self, pipeline, seeded) -> None:
        """Test a zero limit is refused instead of silently becoming the default."""
        with pytest.raises(ValidationError):
            await pipeline.process_unembedded(SourceKind.MESSAGES, limit=0)
