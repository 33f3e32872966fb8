"""
Personal document service.

Owner-checked lookups, deletion and reindex preparation for personal
documents. Deleting or reindexing a document removes its vectors by
provenance (documentId + ownerId), so no stale chunks stay retrievable.

Dependencies: sqlalchemy, backend.boundary.db, backend.boundary.vdb
System role: Document lifecycle orchestration
"""

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD import user_document_crud
from backend.boundary.db.models import UserDocumentModel
from backend.boundary.vdb.vector_index import VectorIndex
from backend.boundary.vdb.vector_schemas import MetadataFilter
from backend.core.exceptions import NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)


def document_filter(owner_id: str, document_id: str) -> MetadataFilter:
    """Filter matching every chunk of one personal document."""
    return {"ownerId": owner_id, "documentId": document_id}


class DocumentService:
    """
    Personal document lifecycle orchestrator.

    Keeps the document table and the vector index consistent when a
    document is removed or has to be embedded again.
    """

    def __init__(self, db: AsyncSession, vector_index: VectorIndex) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document records
            vector_index: Index holding the documents' chunks
        """
        self.db = db
        self.vector_index = vector_index

    async def list_documents(self, owner_id: str) -> Sequence[UserDocumentModel]:
        """List a user's documents, newest first."""
        return await user_document_crud.get_by_user(self.db, owner_id)

    async def get_owned_document(self, owner_id: str, document_id: str) -> UserDocumentModel:
        """
        Fetch a document and check who owns it.

        Raises:
            NotFoundError: Document does not exist
            PermissionDeniedError: Document belongs to someone else
        """
        document = await user_document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise NotFoundError("document", document_id)
        if document.user_id != owner_id:
            raise PermissionDeniedError(
                "Document belongs to another user",
                details={"document_id": document_id},
            )
        return document

    async def delete_document(self, owner_id: str, document_id: str) -> int:
        """
        Remove a document's vectors, then the document record.

        Vectors go first: if the index call fails, the record remains and
        the delete can be retried.

        Returns:
            int: Number of vectors removed

        Raises:
            NotFoundError, PermissionDeniedError: Ownership check failed
            VectorStoreError: Index delete failed
        """
        await self.get_owned_document(owner_id, document_id)
        purged = await self.vector_index.delete_by_filter(document_filter(owner_id, document_id))
        await user_document_crud.delete_by_id(self.db, document_id)
        await self.db.commit()

        logger.info(
            f"{__name__}:delete_document - Deleted document {document_id}",
            extra={"owner_id": owner_id, "vectors_purged": purged},
        )
        return purged

    async def prepare_reindex(self, owner_id: str, document_id: str) -> int:
        """
        Remove a document's vectors and clear its completion flag.

        The caller then queues ingestion; until it completes the document
        is also eligible for the next sweep.

        Returns:
            int: Number of vectors removed

        Raises:
            NotFoundError, PermissionDeniedError: Ownership check failed
            VectorStoreError: Index delete failed
        """
        await self.get_owned_document(owner_id, document_id)
        purged = await self.vector_index.delete_by_filter(document_filter(owner_id, document_id))
        await user_document_crud.reset_embedding(self.db, document_id)
        await self.db.commit()

        logger.info(
            f"{__name__}:prepare_reindex - Reset document {document_id}",
            extra={"owner_id": owner_id, "vectors_purged": purged},
        )
        return purged
