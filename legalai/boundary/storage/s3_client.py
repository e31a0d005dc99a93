"""
S3 client for document version blobs.

Uploads version binaries, downloads them for text extraction, and issues
presigned GET URLs for the document editor. Methods are synchronous (boto3);
async callers wrap them with run_in_threadpool.

Dependencies: boto3
System role: Blob storage adapter for document versions
"""

import logging
from datetime import datetime, timedelta, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from legalai.core.exceptions import BlobStorageError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3BlobClient:
    """S3 client for the document bucket."""

    def __init__(self, bucket: str, region: str = "eu-central-1", client=None) -> None:
        """
        Initialize S3 client for document bucket.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            client: Optional preconfigured boto3 S3 client
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)

    def upload_bytes(
        self,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Store a binary under the given key.

        Args:
            key: S3 object key
            data: File content
            content_type: MIME type recorded on the object

        Returns:
            str: The object key

        Raises:
            BlobStorageError: When the upload fails
        """
        try:
            self._s3_client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise BlobStorageError(
                f"Failed to upload to S3: {e}", key=key, operation="upload"
            ) from e

        logger.info(
            "Uploaded blob",
            extra={"bucket": self._bucket, "key": key, "size": len(data)},
        )
        return key

    def download_to_path(self, key: str, local_path: str) -> str:
        """
        Download an object to a local file.

        Args:
            key: S3 object key
            local_path: Destination file path

        Returns:
            str: local_path

        Raises:
            BlobStorageError: When the object is missing or the download fails
        """
        if not key:
            raise BlobStorageError("S3 key is required", operation="download")

        try:
            self._s3_client.download_file(
                Bucket=self._bucket,
                Key=key,
                Filename=local_path,
            )
            return local_path

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in _NOT_FOUND_CODES:
                raise BlobStorageError(
                    f"File not found in S3: {key}", key=key, operation="download"
                ) from e
            raise BlobStorageError(
                f"Failed to download from S3: {e}", key=key, operation="download"
            ) from e
        except BotoCoreError as e:
            raise BlobStorageError(
                f"Unexpected error downloading from S3: {e}", key=key, operation="download"
            ) from e

    def generate_presigned_download_url(
        self,
        key: str,
        expires_in: int = 3600,
    ) -> tuple[str, datetime]:
        """
        Generate presigned URL for downloading/viewing an S3 object.

        Args:
            key: S3 object key
            expires_in: URL expiry in seconds (default 1 hour)

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)

        Raises:
            BlobStorageError: If presigned URL generation fails
        """
        try:
            presigned_url = self._s3_client.generate_presigned_url(
                ClientMethod="get_object",
                Params={"Bucket": self._bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as e:
            raise BlobStorageError(
                f"Failed to presign S3 URL: {e}", key=key, operation="presign"
            ) from e

        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at
