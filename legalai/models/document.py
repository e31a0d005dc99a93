"""
Document domain models and schemas.

Request/response schemas for document and version operations.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from legalai.boundary.db.models.document_model import ConfidentialityLevel
from legalai.boundary.db.models.document_version_model import FileType


class DocumentResponse(BaseModel):
    """Response schema for a document."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    owner_id: str
    tags: list[str] = Field(default_factory=list)
    confidentiality_level: ConfidentialityLevel
    metadata: dict = Field(
        default_factory=dict,
        validation_alias=AliasChoices("document_metadata", "metadata"),
    )
    created_at: datetime
    updated_at: datetime


class DocumentVersionResponse(BaseModel):
    """Response schema for a document version."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    document_id: uuid.UUID
    version_number: int
    file_type: FileType
    blob_key: str
    file_size: int
    created_by: str
    is_current: bool
    change_summary: str | None = None
    created_at: datetime


class DocumentUploadResponse(BaseModel):
    """Document and its newly stored version."""

    document: DocumentResponse
    version: DocumentVersionResponse


class CreateDocumentRequest(BaseModel):
    """Request schema for creating a document without content."""

    title: str = Field(min_length=1, max_length=500)
    tags: list[str] = Field(default_factory=list)
    confidentiality_level: ConfidentialityLevel = ConfidentialityLevel.INTERNAL
    metadata: dict = Field(default_factory=dict)
