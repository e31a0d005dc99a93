"""
Document version ORM model.

One uploaded revision of a document. Exactly one version per document is
flagged current; uploading a new version clears the flag on the others.

Dependencies: sqlalchemy, legalai.boundary.db.base
System role: Versioned binary tracking for documents under review
"""

import enum
from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legalai.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class FileType(str, enum.Enum):
    """Supported document binary formats."""

    DOCX = "docx"
    PDF = "pdf"


class DocumentVersionModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Document version ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        document_id: Parent document (cascade delete)
        version_number: 1-based sequence within the document
        file_type: DOCX or PDF
        blob_key: Object key of the binary in blob storage
        file_size: Size in bytes
        created_by: User who uploaded the version
        is_current: True for the latest version only
        change_summary: Optional free-text description of the change
        created_at: Upload timestamp (UTC)

    Constraints:
        (document_id, version_number): UNIQUE
    """

    __tablename__ = "document_versions"
    __table_args__ = (
        UniqueConstraint("document_id", "version_number", name="uq_document_version_number"),
    )

    document_id: Mapped[UUID] = mapped_column(
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    version_number: Mapped[int] = mapped_column(Integer, nullable=False)

    file_type: Mapped[FileType] = mapped_column(
        Enum(FileType, native_enum=False),
        nullable=False,
    )

    blob_key: Mapped[str] = mapped_column(String(1024), nullable=False)

    file_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_by: Mapped[str] = mapped_column(String(255), nullable=False)

    is_current: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    change_summary: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    document = relationship("DocumentModel", back_populates="versions")
