"""API routers."""

from .chat import router as chat_router
from .documents import router as documents_router
from .health import router as health_router
from .ingestion import router as ingestion_router
from .rag import router as rag_router

__all__ = [
    "chat_router",
    "documents_router",
    "health_router",
    "ingestion_router",
    "rag_router",
]
