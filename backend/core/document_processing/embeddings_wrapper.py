"""
Google Generative AI embeddings with a pinned output dimensionality.

Every vector written to or queried against the index must have the same
length, so this wrapper forces the configured dimension onto every sync
and async embed call.

Dependencies: langchain_google_genai, python-dotenv
System role: Embedding provider construction for ingestion and retrieval
"""

import logging
from typing import TYPE_CHECKING, List

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings

if TYPE_CHECKING:
    from backend.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)
load_dotenv()


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings with a fixed output dimensionality.

    The base class only honors output_dimensionality per call, so the
    configured value is injected into each call here.
    """

    _output_dimensionality: int = 3072

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 3072,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Fixed dimension for all embeddings
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    @property
    def dimension(self) -> int:
        return self._output_dimensionality

    def embed_documents(self, texts: List[str], **kwargs) -> List[List[float]]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        kwargs.setdefault("task_type", "RETRIEVAL_DOCUMENT")
        return super().embed_documents(texts, **kwargs)

    def embed_query(self, text: str, **kwargs) -> List[float]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        kwargs.setdefault("task_type", "RETRIEVAL_QUERY")
        return super().embed_query(text, **kwargs)

    async def aembed_documents(self, texts: List[str], **kwargs) -> List[List[float]]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        kwargs.setdefault("task_type", "RETRIEVAL_DOCUMENT")
        return await super().aembed_documents(texts, **kwargs)

    async def aembed_query(self, text: str, **kwargs) -> List[float]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        kwargs.setdefault("task_type", "RETRIEVAL_QUERY")
        return await super().aembed_query(text, **kwargs)


def build_embeddings(settings: "VectorStoreSettings") -> FixedDimensionEmbeddings:
    """
    Build the embedding model from vector store settings.

    Args:
        settings: Vector store settings (model ID and dimension)

    Returns:
        FixedDimensionEmbeddings: Configured embeddings client
    """
    return FixedDimensionEmbeddings(
        model=settings.embedding_model,
        output_dimensionality=settings.embedding_dimension,
    )
