"""
Document API endpoints.

Routes:
- POST /documents - Create a document without content
- POST /documents/upload - Upload a file as a new document (version 1)
- GET /documents - List the acting user's documents
- GET /documents/{id} - Get a document
- GET /documents/{id}/versions - List versions, newest first
- GET /documents/{id}/versions/current - Get the current version
- POST /documents/{id}/versions - Upload a new version

All routes require the X-User-Id header.

Dependencies: legalai.application.services, legalai.models
System role: Document HTTP API
"""

import json
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from legalai.api.deps import get_current_user_id, get_document_service
from legalai.api.routers.error_handling import handle_domain_errors
from legalai.application.services.document_service import DocumentService
from legalai.boundary.db.models.document_model import ConfidentialityLevel
from legalai.models.common import SuccessResponse
from legalai.models.document import (
    CreateDocumentRequest,
    DocumentResponse,
    DocumentUploadResponse,
    DocumentVersionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/documents",
    tags=["documents"],
    dependencies=[Depends(get_current_user_id)],
)


def _parse_tags(raw: str | None) -> list[str]:
    """Tags form field: a JSON list of strings."""
    if not raw:
        return []
    try:
        tags = json.loads(raw)
    except json.JSONDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="tags must be a JSON list of strings",
        )
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="tags must be a JSON list of strings",
        )
    return tags


def _split_csv(raw: str | None) -> list[str] | None:
    if not raw:
        return None
    values = [value.strip() for value in raw.split(",") if value.strip()]
    return values or None


@router.post(
    "",
    response_model=SuccessResponse[DocumentResponse],
    status_code=status.HTTP_201_CREATED,
)
@handle_domain_errors
async def create_document(
    request: CreateDocumentRequest,
    user_id: str = Depends(get_current_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DocumentResponse]:
    """Create a document owned by the acting user."""
    document = await document_service.create_document(
        owner_id=user_id,
        title=request.title,
        tags=request.tags,
        confidentiality_level=request.confidentiality_level,
        metadata=request.metadata,
    )
    return SuccessResponse(data=DocumentResponse.model_validate(document))


@router.post(
    "/upload",
    response_model=SuccessResponse[DocumentUploadResponse],
    status_code=status.HTTP_201_CREATED,
)
@handle_domain_errors
async def upload_document(
    file: UploadFile | None = File(default=None),
    title: str | None = Form(default=None),
    tags: str | None = Form(default=None),
    confidentiality_level: ConfidentialityLevel | None = Form(default=None),
    user_id: str = Depends(get_current_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DocumentUploadResponse]:
    """
    Upload a PDF or DOCX file as a new document.

    Creates the document (title defaults to the filename) and stores the
    file as version 1.

    Raises:
        HTTPException(400): No file, unsupported file type, or malformed tags
        HTTPException(502): Blob storage upload failed
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    content = await file.read()
    document, version = await document_service.upload_document(
        owner_id=user_id,
        filename=file.filename,
        content=content,
        content_type=file.content_type or "application/octet-stream",
        title=title,
        tags=_parse_tags(tags),
        confidentiality_level=confidentiality_level,
    )
    return SuccessResponse(
        data=DocumentUploadResponse(
            document=DocumentResponse.model_validate(document),
            version=DocumentVersionResponse.model_validate(version),
        )
    )


@router.get("", response_model=SuccessResponse[list[DocumentResponse]])
@handle_domain_errors
async def list_documents(
    search: str | None = Query(default=None, description="Title substring"),
    tags: str | None = Query(default=None, description="Comma-separated tags"),
    confidentiality: str | None = Query(
        default=None, description="Comma-separated confidentiality levels"
    ),
    user_id: str = Depends(get_current_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[list[DocumentResponse]]:
    """
    List the acting user's documents, newest first.

    Raises:
        HTTPException(400): Unknown confidentiality level
    """
    documents = await document_service.get_user_documents(
        owner_id=user_id,
        search=search,
        tags=_split_csv(tags),
        confidentiality=_split_csv(confidentiality),
    )
    return SuccessResponse(data=[DocumentResponse.model_validate(d) for d in documents])


@router.get("/{document_id}", response_model=SuccessResponse[DocumentResponse])
@handle_domain_errors
async def get_document(
    document_id: UUID,
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DocumentResponse]:
    """
    Get a document.

    Raises:
        HTTPException(404): Document not found
    """
    document = await document_service.get_document_by_id(document_id)
    return SuccessResponse(data=DocumentResponse.model_validate(document))


@router.get(
    "/{document_id}/versions",
    response_model=SuccessResponse[list[DocumentVersionResponse]],
)
@handle_domain_errors
async def get_document_versions(
    document_id: UUID,
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[list[DocumentVersionResponse]]:
    """
    List versions of a document, newest first.

    Raises:
        HTTPException(404): Document not found
    """
    versions = await document_service.get_document_versions(document_id)
    return SuccessResponse(data=[DocumentVersionResponse.model_validate(v) for v in versions])


@router.get(
    "/{document_id}/versions/current",
    response_model=SuccessResponse[DocumentVersionResponse],
)
@handle_domain_errors
async def get_current_version(
    document_id: UUID,
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DocumentVersionResponse]:
    """
    Get the current version of a document.

    Raises:
        HTTPException(404): Document not found or has no versions
    """
    version = await document_service.get_current_version(document_id)
    return SuccessResponse(data=DocumentVersionResponse.model_validate(version))


@router.post(
    "/{document_id}/versions",
    response_model=SuccessResponse[DocumentVersionResponse],
    status_code=status.HTTP_201_CREATED,
)
@handle_domain_errors
async def upload_document_version(
    document_id: UUID,
    file: UploadFile | None = File(default=None),
    change_summary: str | None = Form(default=None),
    user_id: str = Depends(get_current_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> SuccessResponse[DocumentVersionResponse]:
    """
    Upload a new version of a document; it becomes the current version.

    Raises:
        HTTPException(400): No file or unsupported file type
        HTTPException(404): Document not found
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    content = await file.read()
    version = await document_service.upload_document_version(
        document_id=document_id,
        filename=file.filename,
        content=content,
        created_by=user_id,
        content_type=file.content_type or "application/octet-stream",
        change_summary=change_summary,
    )
    return SuccessResponse(data=DocumentVersionResponse.model_validate(version))
