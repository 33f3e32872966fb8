"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    ServiceCache,
    get_chat_service,
    get_db_session,
    get_document_service,
    get_ingestion_pipeline,
    get_retrieval_service,
    get_service_cache,
    get_settings_dependency,
    get_vector_index,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_db_session",
    "get_document_service",
    "get_ingestion_pipeline",
    "get_retrieval_service",
    "get_service_cache",
    "get_settings_dependency",
    "get_vector_index",
]
