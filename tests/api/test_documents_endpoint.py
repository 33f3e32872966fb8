"""
Test suite for personal document API endpoints.

System role: Verification of document HTTP API endpoints
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from kombu.exceptions import OperationalError

from backend.api.deps import get_document_service
from backend.api.routers.documents import router
from backend.core.exceptions import NotFoundError, PermissionDeniedError, VectorStoreError


@pytest.fixture
def app() -> FastAPI:
    """Create FastAPI test application with documents router."""
    app = FastAPI()
    app.include_router(router)
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def document_row() -> SimpleNamespace:
    """Provide an ORM-like document row."""
    return SimpleNamespace(
        id="doc-1",
        user_id="owner-1",
        filename="notes.pdf",
        content_type="application/pdf",
        has_embedding=True,
        created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def mock_document_service(app: FastAPI, document_row) -> MagicMock:
    """Install a mocked DocumentService."""
    service = MagicMock()
    service.list_documents = AsyncMock(return_value=[document_row])
    service.get_owned_document = AsyncMock(return_value=document_row)
    service.delete_document = AsyncMock(return_value=3)
    service.prepare_reindex = AsyncMock(return_value=3)
    app.dependency_overrides[get_document_service] = lambda: service
    return service


@pytest.fixture
def mock_embed_task():
    """Patch the document ingestion task."""
    with patch("backend.api.routers.documents.documents_router.embed_user_document") as task:
        task.delay.return_value = SimpleNamespace(id="task-1")
        yield task


class TestListDocuments:
    def test_list_documents_should_return_owner_documents(self, client, mock_document_service) -> None:
        """Test listing returns the owner's documents."""
        response = client.get("/users/owner-1/docs")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["documents"][0]["filename"] == "notes.pdf"
        assert body["documents"][0]["has_embedding"] is True


class TestEmbedDocument:
    def test_embed_document_should_queue_owned_document(
        self, client, mock_document_service, mock_embed_task
    ) -> None:
        """Test an owned document is queued and 202 returned."""
        response = client.post("/users/owner-1/docs/doc-1/embed")

        assert response.status_code == 202
        assert response.json() == {"source_id": "doc-1", "task_id": "task-1", "status": "queued"}
        mock_embed_task.delay.assert_called_once_with("doc-1")

    def test_embed_document_should_reject_other_owner(
        self, client, mock_document_service, mock_embed_task
    ) -> None:
        """Test another user's document yields 403 and nothing is queued."""
        mock_document_service.get_owned_document.side_effect = PermissionDeniedError("Document belongs to another user")

        response = client.post("/users/owner-2/docs/doc-1/embed")

        assert response.status_code == 403
        mock_embed_task.delay.assert_not_called()

    def test_embed_document_should_return_503_when_queue_is_down(
        self, client, mock_document_service, mock_embed_task
    ) -> None:
        """Test a broker outage maps to 503."""
        mock_embed_task.delay.side_effect = OperationalError("broker down")

        response = client.post("/users/owner-1/docs/doc-1/embed")

        assert response.status_code == 503


class TestDeleteDocument:
    def test_delete_document_should_report_purged_vectors(self, client, mock_document_service) -> None:
        """Test delete returns the number of vectors removed."""
        response = client.delete("/users/owner-1/docs/doc-1")

        assert response.status_code == 200
        assert response.json() == {"document_id": "doc-1", "vectors_deleted": 3}
        mock_document_service.delete_document.assert_awaited_once_with("owner-1", "doc-1")

    def test_delete_document_should_return_404_for_missing(self, client, mock_document_service) -> None:
        """Test missing documents map to 404."""
        mock_document_service.delete_document.side_effect = NotFoundError("document", "nope")

        response = client.delete("/users/owner-1/docs/nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "Document not found: nope"

    def test_delete_document_should_return_502_when_index_fails(self, client, mock_document_service) -> None:
        """Test index failures map to 502."""
        mock_document_service.delete_document.side_effect = VectorStoreError("down", operation="delete")

        response = client.delete("/users/owner-1/docs/doc-1")

        assert response.status_code == 502


class TestReindexDocument:
    def test_reindex_document_should_purge_then_queue(
        self, client, mock_document_service, mock_embed_task
    ) -> None:
        """Test reindex reports purged vectors and the queued task."""
        response = client.post("/users/owner-1/docs/doc-1/reindex")

        assert response.status_code == 202
        assert response.json() == {
            "document_id": "doc-1",
            "vectors_deleted": 3,
            "task_id": "task-1",
            "status": "queued",
        }
        mock_embed_task.delay.assert_called_once_with("doc-1")

    def test_reindex_document_should_not_queue_on_ownership_failure(
        self, client, mock_document_service, mock_embed_task
    ) -> None:
        """Test nothing is queued when the ownership check fails."""
        mock_document_service.prepare_reindex.side_effect = PermissionDeniedError("Document belongs to another user")

        response = client.post("/users/owner-2/docs/doc-1/reindex")

        assert response.status_code == 403
        mock_embed_task.delay.assert_not_called()
