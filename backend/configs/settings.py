"""
Unified application settings.

Aggregates all configuration modules into a single Settings class and
holds the application-wide HTTP and logging options.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from backend.configs.base import BaseSettings
from backend.configs.celery_config import CelerySettings
from backend.configs.database import DatabaseSettings
from backend.configs.llm import LLMSettings
from backend.configs.s3_documents import S3DocumentsSettings
from backend.configs.vector_store import VectorStoreSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    debug: bool = Field(default=False, description="FastAPI debug mode")
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser",
    )

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    vector_store: VectorStoreSettings = VectorStoreSettings()
    llm: LLMSettings = LLMSettings()
    s3_documents: S3DocumentsSettings = S3DocumentsSettings()
    celery: CelerySettings = CelerySettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are read once; the instance is shared by the
    API, the workers and FastAPI dependencies.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
