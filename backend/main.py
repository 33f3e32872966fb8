"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, backend.api, backend.observability, backend.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api import api_router
from backend.api.deps import get_service_cache
from backend.configs import get_settings
from backend.observability.logger import configure_logging
from backend.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging and builds the shared provider clients once, so the
    first request does not pay for them. Disposes the database engine on
    shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"{__name__}:lifespan - Application startup: logging configured")

    cache = get_service_cache()
    try:
        logger.info(
            f"{__name__}:lifespan - Initializing vector index and answer generator",
            extra={"store_type": settings.vector_store.store_type},
        )
        cache.vector_index
        cache.retrieval_service
        cache.answer_generator
        cache.ingestion_pipeline
        logger.info(f"{__name__}:lifespan - Application startup complete")
    except Exception as e:
        logger.exception(
            f"{__name__}:lifespan - Failed to initialize application resources",
            extra={"error": str(e)},
        )
        raise

    yield

    await cache.dispose()
    cache.clear()
    logger.info(f"{__name__}:lifespan - Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Team Chat RAG API",
        description="Retrieval-augmented answers over channel messages, attachments and personal documents",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host="localhost",
        port=8082,
        reload=True,
    )
