"""
Test suite for S3 document downloads.

System role: Verification of the fetch stage
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from backend.core.document_processing.tasks.s3_download_task import S3DownloadTask, key_from_url
from backend.core.exceptions import NotFoundError, ObjectStorageError

BUCKET = "teamchat-dev-uploads"


def client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "GetObject")


class TestKeyFromUrl:
    """Test suite for key_from_url()."""

    @pytest.mark.parametrize(
        "file_url,expected",
        [
            ("s3://teamchat-dev-uploads/docs/a.pdf", "docs/a.pdf"),
            ("https://teamchat-dev-uploads.s3.us-east-1.amazonaws.com/docs/a%20b.pdf", "docs/a b.pdf"),
            ("https://s3.us-east-1.amazonaws.com/teamchat-dev-uploads/docs/a.pdf", "docs/a.pdf"),
            ("docs/a.pdf", "docs/a.pdf"),
            ("/docs/a.pdf", "docs/a.pdf"),
        ],
    )
    def test_key_from_url_should_resolve_supported_forms(self, file_url: str, expected: str) -> None:
        """Test every stored URL form maps to the object key."""
        assert key_from_url(file_url, BUCKET) == expected

    def test_key_from_url_should_reject_bucket_only_url(self) -> None:
        """Test a URL without a key is rejected."""
        with pytest.raises(ValueError):
            key_from_url("s3://teamchat-dev-uploads/", BUCKET)


class TestS3DownloadTask:
    """Test suite for S3DownloadTask.fetch()."""

    @pytest.mark.asyncio
    async def test_fetch_should_return_object_bytes(self) -> None:
        """Test the body is read fully."""
        client = MagicMock()
        body = MagicMock()
        body.read.return_value = b"%PDF-1.4"
        client.get_object.return_value = {"Body": body}

        data = await S3DownloadTask(BUCKET, client=client).fetch("s3://teamchat-dev-uploads/docs/a.pdf")

        assert data == b"%PDF-1.4"
        client.get_object.assert_called_once_with(Bucket=BUCKET, Key="docs/a.pdf")

    @pytest.mark.asyncio
    async def test_fetch_should_raise_not_found_for_missing_key(self) -> None:
        """Test NoSuchKey becomes NotFoundError."""
        client = MagicMock()
        client.get_object.side_effect = client_error("NoSuchKey")

        with pytest.raises(NotFoundError):
            await S3DownloadTask(BUCKET, client=client).fetch("docs/missing.pdf")

    @pytest.mark.asyncio
    async def test_fetch_should_raise_storage_error_for_other_failures(self) -> None:
        """Test access and connection failures become ObjectStorageError."""
        client = MagicMock()
        client.get_object.side_effect = client_error("AccessDenied")
        with pytest.raises(ObjectStorageError):
            await S3DownloadTask(BUCKET, client=client).fetch("docs/a.pdf")

        client.get_object.side_effect = EndpointConnectionError(endpoint_url="https://s3")
        with pytest.raises(ObjectStorageError):
            await S3DownloadTask(BUCKET, client=client).fetch("docs/a.pdf")
