"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(blob client, model gateway, redline orchestrator) are built once per
process in ServiceCache; services are built per request around the
request's database session.

Dependencies: legalai.configs, legalai.application, legalai.boundary, legalai.core
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from legalai.application.services import (
    DocumentService,
    EditorSessionService,
    RedlineService,
)
from legalai.boundary.db.connection import get_async_db, get_async_session_factory
from legalai.boundary.llm.azure_openai_gateway import AzureOpenAIGateway
from legalai.boundary.storage.s3_client import S3BlobClient
from legalai.configs import Settings, get_settings
from legalai.core.redline import (
    PrimaryAnalysisStage,
    RedlineOrchestrator,
    TextExtractionTask,
    VerificationStage,
)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._blob_client = None
        self._gateway = None
        self._orchestrator = None

    @property
    def blob_client(self) -> S3BlobClient:
        """Get cached S3 blob client."""
        if self._blob_client is None:
            settings = get_settings()
            self._blob_client = S3BlobClient(
                bucket=settings.blob_storage.bucket,
                region=settings.blob_storage.region,
            )
        return self._blob_client

    @property
    def gateway(self) -> AzureOpenAIGateway:
        """Get cached language-model gateway."""
        if self._gateway is None:
            self._gateway = AzureOpenAIGateway(get_settings().azure_openai)
        return self._gateway

    @property
    def orchestrator(self) -> RedlineOrchestrator:
        """Get cached redline orchestrator."""
        if self._orchestrator is None:
            redline_settings = get_settings().redline
            self._orchestrator = RedlineOrchestrator(
                session_factory=get_async_session_factory(),
                extractor=TextExtractionTask(self.blob_client),
                primary_stage=PrimaryAnalysisStage(
                    self.gateway,
                    evidence_max_chars=redline_settings.evidence_max_chars,
                ),
                verification_stage=VerificationStage(
                    self.gateway,
                    excerpt_chars=redline_settings.verification_excerpt_chars,
                ),
            )
        return self._orchestrator

    async def shutdown(self) -> None:
        """Wait for in-flight runs, then drop cached instances."""
        if self._orchestrator is not None:
            await self._orchestrator.wait_for_idle()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._blob_client = None
        self._gateway = None
        self._orchestrator = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_blob_client() -> S3BlobClient:
    """
    Get S3 blob client for document version storage.

    Returns:
        S3BlobClient: Client for document bucket operations
    """
    return get_service_cache().blob_client


def get_orchestrator() -> RedlineOrchestrator:
    """
    Get the process-wide redline orchestrator.

    Returns:
        RedlineOrchestrator: Orchestrator owning background runs
    """
    return get_service_cache().orchestrator


def get_redline_service(
    db: AsyncSession = Depends(get_async_db),
    orchestrator: RedlineOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings_dependency),
) -> RedlineService:
    """
    Get redline service instance.

    Args:
        db: Async database session (injected via Depends)
        orchestrator: Redline orchestrator (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        RedlineService: Redline service instance
    """
    return RedlineService(db=db, orchestrator=orchestrator, settings=settings.redline)


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    blob_client: S3BlobClient = Depends(get_blob_client),
    settings: Settings = Depends(get_settings_dependency),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        blob_client: Blob storage client (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        DocumentService: Document service instance
    """
    return DocumentService(
        db=db,
        blob_client=blob_client,
        key_prefix=settings.blob_storage.key_prefix,
    )


def get_editor_session_service(
    db: AsyncSession = Depends(get_async_db),
    blob_client: S3BlobClient = Depends(get_blob_client),
    settings: Settings = Depends(get_settings_dependency),
) -> EditorSessionService:
    """
    Get editor session service instance.

    Args:
        db: Async database session (injected via Depends)
        blob_client: Blob storage client (injected via Depends)
        settings: Application settings (injected via Depends)

    Returns:
        EditorSessionService: Editor session service instance
    """
    return EditorSessionService(
        db=db,
        blob_client=blob_client,
        settings=settings.editor,
        url_expiry_seconds=settings.blob_storage.presigned_url_expiry,
    )


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """
    Acting user from the X-User-Id header set by the authenticating proxy.

    Raises:
        HTTPException(401): Header missing or empty
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return x_user_id.strip()


def get_current_user_name(x_user_name: str | None = Header(default=None)) -> str:
    """Display name from the X-User-Name header, "User" when absent."""
    return (x_user_name or "").strip() or "User"
