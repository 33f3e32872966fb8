"""
S3 object fetch task.

Reads uploaded attachments and personal documents from S3 into memory.
Stored file URLs may be s3:// URIs, virtual-hosted or path-style HTTPS
URLs, or bare object keys.

Dependencies: boto3, botocore
System role: Source fetch stage of document ingestion
"""

import asyncio
import logging
from typing import Any
from urllib.parse import unquote, urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from backend.core.exceptions import NotFoundError, ObjectStorageError

logger = logging.getLogger(__name__)


def key_from_url(file_url: str, bucket: str) -> str:
    """
    Resolve the object key from a stored file URL.

    Args:
        file_url: s3://bucket/key, https://bucket.s3.../key,
            https://s3.../bucket/key, or a bare key
        bucket: Configured bucket, stripped from path-style URLs

    Returns:
        str: Object key

    Raises:
        ValueError: When no key can be derived
    """
    parsed = urlparse(file_url)
    if parsed.scheme == "s3":
        key = parsed.path.lstrip("/")
    elif parsed.scheme in ("http", "https"):
        key = unquote(parsed.path.lstrip("/"))
        if key.startswith(f"{bucket}/"):
            key = key[len(bucket) + 1:]
    else:
        key = file_url.lstrip("/")

    if not key:
        raise ValueError(f"Cannot derive object key from URL: {file_url}")
    return key


class S3DownloadTask:
    """Fetch documents from S3 as bytes."""

    def __init__(self, bucket: str, region: str = "us-east-1", client: Any | None = None) -> None:
        """
        Initialize S3 download task.

        Args:
            bucket: S3 bucket name for uploaded files
            region: AWS region for S3 bucket
            client: Preconfigured boto3 S3 client (created when None)
        """
        self._bucket = bucket
        self._s3_client = client or boto3.client("s3", region_name=region)

    async def fetch(self, file_url: str) -> bytes:
        """
        Download an object into memory.

        Args:
            file_url: Stored URL or key of the object

        Returns:
            bytes: Object content

        Raises:
            NotFoundError: When the object does not exist
            ObjectStorageError: When S3 fails for any other reason
        """
        try:
            key = key_from_url(file_url, self._bucket)
        except ValueError as e:
            raise ObjectStorageError(str(e)) from e

        try:
            response = await asyncio.to_thread(
                self._s3_client.get_object,
                Bucket=self._bucket,
                Key=key,
            )
            body = await asyncio.to_thread(response["Body"].read)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey"):
                raise NotFoundError("object", key) from e
            logger.error(f"{__name__}:fetch - S3 error {error_code} for key={key}")
            raise ObjectStorageError(f"S3 download failed: {error_code}", key=key) from e
        except BotoCoreError as e:
            raise ObjectStorageError(f"S3 download failed: {e}", key=key) from e

        logger.debug(f"{__name__}:fetch - Downloaded key={key}, size={len(body)} bytes")
        return body
