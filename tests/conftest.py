"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic fake embeddings, in-memory SQLite session
factories, seeded channel/message/document records
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from tests.fakes import EMBEDDING_DIMENSION, LetterCountEmbeddings


@pytest.fixture
def fake_embeddings() -> LetterCountEmbeddings:
    """Provide deterministic letter-count embeddings."""
    return LetterCountEmbeddings()


@pytest.fixture
def embedding_task(fake_embeddings: LetterCountEmbeddings):
    """Provide an EmbeddingTask over the fake embeddings."""
    from backend.core.document_processing.tasks import EmbeddingTask

    return EmbeddingTask(embeddings=fake_embeddings, dimension=EMBEDDING_DIMENSION, batch_size=8)


@pytest.fixture
def memory_index():
    """Provide an empty in-memory vector index."""
    from backend.boundary.vdb.memory_index import InMemoryVectorIndex

    return InMemoryVectorIndex(dimension=EMBEDDING_DIMENSION)


@pytest.fixture
async def session_factory():
    """
    Create in-memory SQLite database and a session factory bound to it.

    StaticPool keeps one connection, so every session sees the same data.

    Yields:
        async_sessionmaker: Factory producing sessions on the test database
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from backend.boundary.db import Base
    from backend.boundary.db.connection import create_session_factory

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield create_session_factory(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_async_db(session_factory):
    """
    Provide one session on the in-memory test database.

    Yields:
        AsyncSession: Test database session with rollback on teardown
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def created_at() -> datetime:
    """Fixed source creation time."""
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def seeded(session_factory, created_at: datetime) -> dict[str, str]:
    """
    Seed one channel, two messages, a PDF and a non-PDF attachment, and
    a personal document.

    Returns:
        dict: IDs of the seeded records
    """
    from backend.boundary.db.CRUD import (
        attachment_crud,
        channel_crud,
        message_crud,
        user_document_crud,
    )

    async with session_factory() as session:
        channel = await channel_crud.create(session, id="chan-1", name="general")
        await message_crud.create(
            session,
            id="msg-1",
            channel_id=channel.id,
            sender_id="user-1",
            content="<p>Deploys happen on <b>Tuesday</b> &amp; Thursday</p>",
            created_at=created_at,
        )
        await message_crud.create(
            session,
            id="msg-2",
            channel_id=channel.id,
            sender_id="user-2",
            content="old news",
            is_deleted=True,
            created_at=created_at,
        )
        await attachment_crud.create(
            session,
            id="att-pdf",
            message_id="msg-1",
            filename="runbook.pdf",
            file_url="s3://teamchat-dev-uploads/att/runbook.pdf",
            content_type="application/pdf",
            created_at=created_at,
        )
        await attachment_crud.create(
            session,
            id="att-png",
            message_id="msg-1",
            filename="screenshot.png",
            file_url="s3://teamchat-dev-uploads/att/screenshot.png",
            content_type="image/png",
            created_at=created_at,
        )
        await user_document_crud.create(
            session,
            id="doc-1",
            user_id="owner-1",
            filename="notes.pdf",
            file_url="s3://teamchat-dev-uploads/docs/notes.pdf",
            created_at=created_at,
        )
        await session.commit()

    return {
        "channel_id": "chan-1",
        "message_id": "msg-1",
        "deleted_message_id": "msg-2",
        "pdf_attachment_id": "att-pdf",
        "png_attachment_id": "att-png",
        "document_id": "doc-1",
        "owner_id": "owner-1",
    }


@pytest.fixture
def mock_downloader() -> AsyncMock:
    """Provide a downloader returning placeholder PDF bytes."""
    downloader = AsyncMock()
    downloader.fetch = AsyncMock(return_value=b"%PDF-1.4 placeholder")
    return downloader
