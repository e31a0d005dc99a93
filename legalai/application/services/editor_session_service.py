"""
Editor session service.

Builds the configuration a browser-based document editor needs to open a
document version, and receives the editor server's status callbacks.

Dependencies: PyJWT, hashlib, legalai.boundary.storage
System role: Document editor integration
"""

import hashlib
import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from legalai.boundary.db.CRUD.document_version_crud import document_version_crud
from legalai.boundary.db.models.document_version_model import FileType
from legalai.boundary.storage.s3_client import S3BlobClient
from legalai.configs.editor import EditorSettings
from legalai.core.exceptions import VersionNotFoundError
from legalai.models.editor import (
    EditorCallbackPayload,
    EditorConfig,
    EditorPermissions,
    EditorUser,
)

logger = logging.getLogger(__name__)

CALLBACK_PATH = "/api/v1/editor/callback"

# Editor callback status codes
STATUS_NOT_FOUND = 0
STATUS_EDITING = 1
STATUS_READY_FOR_SAVE = 2
STATUS_SAVE_ERROR = 3
STATUS_CLOSED_NO_CHANGES = 4
STATUS_FORCE_SAVE = 6
STATUS_FORCE_SAVE_ERROR = 7

SAVE_STATUSES = {STATUS_READY_FOR_SAVE, STATUS_FORCE_SAVE}


def generate_document_key(version_id: UUID | str) -> str:
    """Stable editor key for a version: MD5 hex digest of the version id."""
    return hashlib.md5(str(version_id).encode("utf-8")).hexdigest()


class EditorSessionService:
    """
    Editor session service.

    Usage:
        service = EditorSessionService(db, blob_client, settings.editor)
        config = await service.create_session(version_id, "user-1", "Jane")
    """

    def __init__(
        self,
        db: AsyncSession,
        blob_client: S3BlobClient,
        settings: EditorSettings,
        url_expiry_seconds: int = 3600,
    ) -> None:
        """
        Initialize editor session service.

        Args:
            db: AsyncSession for version lookup
            blob_client: Blob storage used to presign the document URL
            settings: Editor token and URL settings
            url_expiry_seconds: Lifetime of the presigned document URL
        """
        self.db = db
        self._blob_client = blob_client
        self._settings = settings
        self._url_expiry_seconds = url_expiry_seconds

    @property
    def callback_url(self) -> str:
        return f"{self._settings.backend_url.rstrip('/')}{CALLBACK_PATH}"

    def generate_token(self, document_key: str, url: str) -> str:
        """Signed editor token over the document key and URL."""
        payload = {
            "documentKey": document_key,
            "url": url,
            "exp": datetime.now(timezone.utc) + timedelta(hours=self._settings.token_expiry_hours),
        }
        return jwt.encode(payload, self._settings.jwt_secret, algorithm=self._settings.jwt_algorithm)

    async def create_session(
        self,
        version_id: UUID,
        user_id: str,
        user_name: str,
    ) -> EditorConfig:
        """
        Build editor configuration for a document version.

        Only DOCX versions are editable; PDF versions open read-only.

        Args:
            version_id: Version to open
            user_id: Acting user
            user_name: Display name shown in the editor

        Returns:
            EditorConfig: Editor configuration including a signed token

        Raises:
            VersionNotFoundError: Version does not exist
            BlobStorageError: Document URL could not be generated
        """
        version = await document_version_crud.get_by_id(self.db, version_id)
        if version is None:
            raise VersionNotFoundError(version_id)

        document_key = generate_document_key(version_id)
        document_url, _ = await run_in_threadpool(
            self._blob_client.generate_presigned_download_url,
            version.blob_key,
            self._url_expiry_seconds,
        )
        is_docx = version.file_type == FileType.DOCX

        config = EditorConfig(
            document_key=document_key,
            document_url=document_url,
            document_type="word" if is_docx else "pdf",
            editor_type="desktop",
            server_url=self._settings.server_url,
            user=EditorUser(id=user_id, name=user_name),
            permissions=EditorPermissions(edit=is_docx),
            callback_url=self.callback_url,
            token=self.generate_token(document_key, document_url),
        )

        logger.info(
            "Editor session created",
            extra={"version_id": str(version_id), "document_type": config.document_type},
        )
        return config

    async def handle_callback(self, payload: EditorCallbackPayload) -> dict:
        """
        Process an editor status callback.

        Statuses 2 and 6 carry an edited document ready to save. Saving
        edited content back as a new version is not performed; the event
        is logged.

        Args:
            payload: Callback body from the editor server

        Returns:
            dict: {"error": 0} acknowledging the callback
        """
        logger.info(
            "Editor callback received",
            extra={"status": payload.status, "key": payload.key, "url": payload.url},
        )

        if payload.status in SAVE_STATUSES:
            self._save_edited_document(payload.key, payload.url)
        elif payload.status in (STATUS_SAVE_ERROR, STATUS_FORCE_SAVE_ERROR):
            logger.warning(
                "Editor reported a save error",
                extra={"status": payload.status, "key": payload.key},
            )

        return {"error": 0}

    def _save_edited_document(self, key: str | None, url: str | None) -> None:
        # TODO: download the edited file from url and store it through
        # DocumentService.upload_document_version once key-to-version lookup exists
        logger.info("Saving edited document", extra={"key": key, "url": url})
