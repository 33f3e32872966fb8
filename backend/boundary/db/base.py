"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and reusable mixins
for common fields (string IDs, timestamps, embedding flag).

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


def new_id() -> str:
    """Generate a new opaque record ID."""
    return uuid.uuid4().hex


class StringIDMixin:
    """
    Mixin providing an opaque string primary key.

    IDs are strings so records created by the chat frontend (and user IDs
    issued by the auth provider) can be stored as-is. New rows get a
    random hex UUID.

    Attributes:
        id: String primary key, auto-generated on insert when not supplied
    """

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=new_id,
        nullable=False,
    )


class TimestampMixin:
    """
    Mixin providing automatic timestamp tracking to all models.

    created_at is set once on row creation and never changes.
    updated_at is refreshed on every update via onupdate hook.
    Both use UTC timezone for consistency across deployments.

    Attributes:
        created_at: Row creation timestamp (UTC, immutable)
        updated_at: Last modification timestamp (UTC, auto-updated)
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class EmbeddingFlagMixin:
    """
    Mixin providing the per-source "has been embedded" completion flag.

    The flag is only set after every chunk of the source is in the vector
    index. Sweeps select rows where it is still False.

    Attributes:
        has_embedding: True once ingestion of this source fully completed
    """

    has_embedding: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        index=True,
    )
