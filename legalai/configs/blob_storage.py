"""
Blob storage bucket configuration.

Settings for the S3 bucket holding uploaded contract versions.

Dependencies: pydantic_settings
System role: Document blob storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BlobStorageSettings(BaseSettings):
    """Settings for S3 document bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="BLOB_STORAGE_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="legalai-dev-documents",
        description="S3 bucket for contract version storage",
    )
    region: str = Field(
        default="eu-central-1",
        description="AWS region for S3 bucket",
    )
    key_prefix: str = Field(
        default="documents",
        description="Key prefix for uploaded document versions",
    )
    presigned_url_expiry: int = Field(
        default=3600,
        description="Presigned URL expiry in seconds (default 1 hour)",
    )
