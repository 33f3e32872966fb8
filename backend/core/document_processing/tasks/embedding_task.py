"""
Embedding task.

Turns chunk texts and queries into fixed-dimension vectors through a
LangChain Embeddings model. Output order matches input order and a
malformed provider response is an error, never a zero vector.

Dependencies: langchain_core
System role: Embedding stage of ingestion and the query side of retrieval
"""

import logging

from langchain_core.embeddings import Embeddings

from backend.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """Embed texts with a LangChain embeddings model and validate the vectors."""

    def __init__(self, embeddings: Embeddings, dimension: int, batch_size: int = 64) -> None:
        """
        Initialize embedding task.

        Args:
            embeddings: LangChain embeddings model (Gemini in production)
            dimension: Required vector length
            batch_size: Texts sent per provider call

        Raises:
            ValueError: When dimension or batch_size is not positive
        """
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        self._embeddings = embeddings
        self.dimension = dimension
        self.batch_size = batch_size

    def _validate(self, vectors: list[list[float]], expected: int) -> list[list[float]]:
        if len(vectors) != expected:
            raise EmbeddingError(
                "Embedding provider returned the wrong number of vectors",
                details={"expected": expected, "received": len(vectors)},
            )
        for position, vector in enumerate(vectors):
            if len(vector) != self.dimension:
                raise EmbeddingError(
                    "Embedding provider returned a vector of the wrong dimension",
                    details={"position": position, "expected": self.dimension, "received": len(vector)},
                )
        return [list(vector) for vector in vectors]

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """
        Embed chunk texts.

        Args:
            texts: Non-empty strings to embed

        Returns:
            list[list[float]]: One vector per text, same order

        Raises:
            EmbeddingError: When the provider fails or returns malformed vectors
        """
        if not texts:
            return []

        vectors: list[list[float]] = []
        for start in range(0, len(texts), self.batch_size):
            batch = texts[start:start + self.batch_size]
            try:
                result = await self._embeddings.aembed_documents(batch)
            except EmbeddingError:
                raise
            except Exception as e:
                logger.error(f"{__name__}:embed_documents - {type(e).__name__}: {e}")
                raise EmbeddingError(
                    f"Embedding provider failed: {e}",
                    details={"batch_start": start, "batch_size": len(batch)},
                ) from e
            vectors.extend(self._validate(result, len(batch)))
        return vectors

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a retrieval query.

        Raises:
            EmbeddingError: When the provider fails or returns a malformed vector
        """
        try:
            vector = await self._embeddings.aembed_query(text)
        except Exception as e:
            logger.error(f"{__name__}:embed_query - {type(e).__name__}: {e}")
            raise EmbeddingError(f"Embedding provider failed: {e}") from e
        return self._validate([vector], 1)[0]
