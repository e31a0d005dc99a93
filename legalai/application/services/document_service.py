"""
Document service orchestrator.

Coordinates document creation, version uploads to blob storage and
document/version queries.

Dependencies: legalai.boundary.db, legalai.boundary.storage, fastapi.concurrency
System role: Document management orchestration
"""

import logging
import time
from typing import Sequence
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from legalai.boundary.db.base import utcnow
from legalai.boundary.db.CRUD.document_crud import document_crud
from legalai.boundary.db.CRUD.document_version_crud import document_version_crud
from legalai.boundary.db.models.document_model import ConfidentialityLevel, DocumentModel
from legalai.boundary.db.models.document_version_model import DocumentVersionModel, FileType
from legalai.boundary.storage.s3_client import S3BlobClient
from legalai.core.exceptions import DocumentNotFoundError, ValidationError

logger = logging.getLogger(__name__)

INITIAL_VERSION_SUMMARY = "Initial version"

_EXTENSIONS = {
    ".pdf": FileType.PDF,
    ".docx": FileType.DOCX,
}


def detect_file_type(filename: str) -> FileType:
    """
    File type from the filename extension.

    Raises:
        ValidationError: Extension is neither .pdf nor .docx
    """
    lowered = (filename or "").lower()
    for extension, file_type in _EXTENSIONS.items():
        if lowered.endswith(extension):
            return file_type
    raise ValidationError(
        f"Unsupported file format: {filename}. Only PDF and DOCX files are supported.",
        field="file",
    )


def build_blob_key(key_prefix: str, document_id: UUID, version_number: int, filename: str) -> str:
    """Object key {prefix}/{document_id}/v{n}-{epoch_ms}-{filename}."""
    timestamp = int(time.time() * 1000)
    return f"{key_prefix}/{document_id}/v{version_number}-{timestamp}-{filename}"


class DocumentService:
    """
    Document service orchestrator.

    Owns the version bookkeeping: each new upload becomes the current
    version with the next version number.
    """

    def __init__(
        self,
        db: AsyncSession,
        blob_client: S3BlobClient,
        key_prefix: str = "documents",
    ) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document metadata
            blob_client: Blob storage for version binaries
            key_prefix: Leading path segment of version object keys
        """
        self.db = db
        self._blob_client = blob_client
        self._key_prefix = key_prefix

    async def create_document(
        self,
        owner_id: str,
        title: str,
        tags: list[str] | None = None,
        confidentiality_level: ConfidentialityLevel | None = None,
        metadata: dict | None = None,
    ) -> DocumentModel:
        """
        Create a document without content.

        Args:
            owner_id: Owning user
            title: Document title
            tags: Free-form tags
            confidentiality_level: Sensitivity (default INTERNAL)
            metadata: Arbitrary attributes

        Returns:
            DocumentModel: The created document
        """
        document = await self._create_document(owner_id, title, tags, confidentiality_level, metadata)
        await self.db.commit()
        return document

    async def _create_document(
        self,
        owner_id: str,
        title: str,
        tags: list[str] | None,
        confidentiality_level: ConfidentialityLevel | None,
        metadata: dict | None,
    ) -> DocumentModel:
        if not title or not title.strip():
            raise ValidationError("title is required", field="title")
        return await document_crud.create(
            self.db,
            title=title,
            owner_id=owner_id,
            tags=list(tags or []),
            confidentiality_level=confidentiality_level or ConfidentialityLevel.INTERNAL,
            document_metadata=metadata or {},
        )

    async def upload_document(
        self,
        owner_id: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        title: str | None = None,
        tags: list[str] | None = None,
        confidentiality_level: ConfidentialityLevel | None = None,
    ) -> tuple[DocumentModel, DocumentVersionModel]:
        """
        Create a document and store its first version.

        Args:
            owner_id: Uploading user, becomes the owner
            filename: Original filename (.pdf or .docx)
            content: File bytes
            content_type: MIME type of the upload
            title: Document title (defaults to filename)
            tags: Free-form tags
            confidentiality_level: Sensitivity (default INTERNAL)

        Returns:
            tuple[DocumentModel, DocumentVersionModel]: The document and version 1

        Raises:
            ValidationError: Unsupported file type
            BlobStorageError: Upload to blob storage failed
        """
        detect_file_type(filename)

        document = await self._create_document(
            owner_id, title or filename, tags, confidentiality_level, None
        )
        version = await self._add_version(
            document, filename, content, content_type, owner_id, INITIAL_VERSION_SUMMARY
        )
        await self.db.commit()

        logger.info(
            "Document uploaded",
            extra={"document_id": str(document.id), "version_id": str(version.id)},
        )
        return document, version

    async def upload_document_version(
        self,
        document_id: UUID,
        filename: str,
        content: bytes,
        created_by: str,
        content_type: str = "application/octet-stream",
        change_summary: str | None = None,
    ) -> DocumentVersionModel:
        """
        Store a new version of an existing document.

        Previous versions lose the current flag and the new version gets
        the next version number.

        Args:
            document_id: Parent document
            filename: Original filename (.pdf or .docx)
            content: File bytes
            created_by: Uploading user
            content_type: MIME type of the upload
            change_summary: Optional description of the change

        Returns:
            DocumentVersionModel: The new current version

        Raises:
            DocumentNotFoundError: Document does not exist
            ValidationError: Unsupported file type
            BlobStorageError: Upload to blob storage failed
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)

        version = await self._add_version(
            document, filename, content, content_type, created_by, change_summary
        )
        await self.db.commit()

        logger.info(
            "Document version uploaded",
            extra={
                "document_id": str(document_id),
                "version_number": version.version_number,
            },
        )
        return version

    async def _add_version(
        self,
        document: DocumentModel,
        filename: str,
        content: bytes,
        content_type: str,
        created_by: str,
        change_summary: str | None,
    ) -> DocumentVersionModel:
        file_type = detect_file_type(filename)

        await document_version_crud.clear_current(self.db, document.id)
        version_number = (
            await document_version_crud.get_latest_version_number(self.db, document.id)
        ) + 1

        blob_key = build_blob_key(self._key_prefix, document.id, version_number, filename)
        await run_in_threadpool(self._blob_client.upload_bytes, blob_key, content, content_type)

        version = await document_version_crud.create(
            self.db,
            document_id=document.id,
            version_number=version_number,
            file_type=file_type,
            blob_key=blob_key,
            file_size=len(content),
            created_by=created_by,
            is_current=True,
            change_summary=change_summary,
        )
        document.updated_at = utcnow()
        await self.db.flush()
        return version

    async def get_document_by_id(self, document_id: UUID) -> DocumentModel:
        """
        Fetch a document.

        Raises:
            DocumentNotFoundError: Document does not exist
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    async def get_user_documents(
        self,
        owner_id: str,
        search: str | None = None,
        tags: list[str] | None = None,
        confidentiality: list[str] | None = None,
    ) -> Sequence[DocumentModel]:
        """
        List a user's documents, newest first.

        Args:
            owner_id: Owning user
            search: Substring matched case-insensitively against title
            tags: Keep documents sharing any of these tags
            confidentiality: Keep documents at any of these levels

        Returns:
            Sequence[DocumentModel]: Matching documents

        Raises:
            ValidationError: Unknown confidentiality level
        """
        levels = None
        if confidentiality:
            try:
                levels = [ConfidentialityLevel(level.strip().lower()) for level in confidentiality]
            except ValueError as e:
                raise ValidationError(
                    f"Invalid confidentiality level: {e}", field="confidentiality"
                ) from e

        return await document_crud.get_by_owner(
            self.db,
            owner_id,
            search=search or None,
            tags=tags or None,
            confidentiality_levels=levels,
        )

    async def get_document_versions(self, document_id: UUID) -> Sequence[DocumentVersionModel]:
        """
        Versions of a document, highest version number first.

        Raises:
            DocumentNotFoundError: Document does not exist
        """
        if not await document_crud.exists(self.db, document_id):
            raise DocumentNotFoundError(document_id)
        return await document_version_crud.get_by_document_id(self.db, document_id)

    async def get_current_version(self, document_id: UUID) -> DocumentVersionModel:
        """
        Current version of a document.

        Raises:
            DocumentNotFoundError: Document does not exist or has no versions
        """
        version = await document_version_crud.get_current(self.db, document_id)
        if version is None:
            raise DocumentNotFoundError(
                document_id, details={"reason": "no current version"}
            )
        return version
