"""
Task modules for the ingestion pipeline.

Exports: S3DownloadTask, ParsingTask, ChunkingTask, EmbeddingTask, VectorStoreTask, strip_markup
"""

from .chunking_task import ChunkingTask
from .cleaning_task import strip_markup
from .embedding_task import EmbeddingTask
from .parsing_task import ParsingTask
from .s3_download_task import S3DownloadTask, key_from_url
from .vector_store_task import VectorStoreTask, record_id

__all__ = [
    "ChunkingTask",
    "EmbeddingTask",
    "ParsingTask",
    "S3DownloadTask",
    "VectorStoreTask",
    "key_from_url",
    "record_id",
    "strip_markup",
]
