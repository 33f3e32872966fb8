"""
Test suite for EmbeddingTask.

System role: Verification of the embedding stage
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from backend.core.document_processing.tasks.embedding_task import EmbeddingTask
from backend.core.exceptions import EmbeddingError, TransientProviderError
from tests.fakes import EMBEDDING_DIMENSION, LetterCountEmbeddings


class TestEmbedDocuments:
    """Test suite for EmbeddingTask.embed_documents()."""

    @pytest.mark.asyncio
    async def test_embed_documents_should_batch_provider_calls(
        self, fake_embeddings: LetterCountEmbeddings
    ) -> None:
        """Test texts are sent in batch_size groups and order is kept."""
        # Arrange
        task = EmbeddingTask(fake_embeddings, dimension=EMBEDDING_DIMENSION, batch_size=2)

        # Act
        vectors = await task.embed_documents(["aa", "bb", "cc"])

        # Assert
        assert fake_embeddings.document_calls == [["aa", "bb"], ["cc"]]
        assert vectors[1] == LetterCountEmbeddings.vectorize("bb")

    @pytest.mark.asyncio
    async def test_embed_documents_should_skip_provider_for_empty_input(
        self, fake_embeddings: LetterCountEmbeddings
    ) -> None:
        """Test no call is made when there is nothing to embed."""
        task = EmbeddingTask(fake_embeddings, dimension=EMBEDDING_DIMENSION)

        assert await task.embed_documents([]) == []
        assert fake_embeddings.document_calls == []

    @pytest.mark.asyncio
    async def test_embed_documents_should_wrap_provider_failure(self) -> None:
        """Test provider exceptions surface as EmbeddingError."""
        embeddings = MagicMock()
        embeddings.aembed_documents = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        task = EmbeddingTask(embeddings, dimension=3)

        with pytest.raises(EmbeddingError) as exc_info:
            await task.embed_documents(["text"])

        assert isinstance(exc_info.value, TransientProviderError)
        assert exc_info.value.provider == "embeddings"

    @pytest.mark.asyncio
    async def test_embed_documents_should_reject_wrong_dimension(self) -> None:
        """Test vectors of the wrong length are rejected."""
        embeddings = MagicMock()
        embeddings.aembed_documents = AsyncMock(return_value=[[0.1, 0.2]])
        task = EmbeddingTask(embeddings, dimension=3)

        with pytest.raises(EmbeddingError, match="wrong dimension"):
            await task.embed_documents(["text"])

    @pytest.mark.asyncio
    async def test_embed_documents_should_reject_missing_vectors(self) -> None:
        """Test a short response is rejected."""
        embeddings = MagicMock()
        embeddings.aembed_documents = AsyncMock(return_value=[[0.1, 0.2, 0.3]])
        task = EmbeddingTask(embeddings, dimension=3)

        with pytest.raises(EmbeddingError, match="wrong number"):
            await task.embed_documents(["one", "two"])


class TestEmbedQuery:
    """Test suite for EmbeddingTask.embed_query()."""

    @pytest.mark.asyncio
    async def test_embed_query_should_return_single_vector(
        self, fake_embeddings: LetterCountEmbeddings
    ) -> None:
        """Test the query goes through aembed_query."""
        task = EmbeddingTask(fake_embeddings, dimension=EMBEDDING_DIMENSION)

        vector = await task.embed_query("bbbb")

        assert fake_embeddings.query_calls == ["bbbb"]
        assert vector[1] == 4.0

    @pytest.mark.asyncio
    async def test_embed_query_should_wrap_provider_failure(self) -> None:
        """Test query failures surface as EmbeddingError."""
        embeddings = MagicMock()
        embeddings.aembed_query = AsyncMock(side_effect=ConnectionError("reset"))
        task = EmbeddingTask(embeddings, dimension=3)

        with pytest.raises(EmbeddingError):
            await task.embed_query("q")

    def test_init_should_reject_non_positive_settings(self) -> None:
        """Test dimension and batch size must be positive."""
        with pytest.raises(ValueError):
            EmbeddingTask(MagicMock(), dimension=0)
        with pytest.raises(ValueError):
            EmbeddingTask(MagicMock(), dimension=3, batch_size=0)
