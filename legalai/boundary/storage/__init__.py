"""Blob storage for document version binaries."""

from legalai.boundary.storage.s3_client import S3BlobClient

__all__ = ["S3BlobClient"]
