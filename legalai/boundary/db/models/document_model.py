"""
Document ORM model.

A logical legal document owned by a user. Binary content lives in blob
storage and is tracked per upload by DocumentVersionModel.

Dependencies: sqlalchemy, legalai.boundary.db.base
System role: Document persistence for the review workflow
"""

import enum

from sqlalchemy import JSON, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legalai.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ConfidentialityLevel(str, enum.Enum):
    """Access sensitivity of a document."""

    PUBLIC = "public"
    INTERNAL = "internal"
    CONFIDENTIAL = "confidential"
    RESTRICTED = "restricted"


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Display title (defaults to the uploaded filename)
        owner_id: Identifier of the owning user
        tags: JSON list of free-form tags
        confidentiality_level: Sensitivity enum (default INTERNAL)
        document_metadata: JSON column "metadata" for arbitrary attributes
        versions: One-to-many with DocumentVersionModel (cascade delete)
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "documents"

    title: Mapped[str] = mapped_column(String(500), nullable=False)

    owner_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    tags: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    confidentiality_level: Mapped[ConfidentialityLevel] = mapped_column(
        Enum(ConfidentialityLevel, native_enum=False),
        nullable=False,
        default=ConfidentialityLevel.INTERNAL,
    )

    document_metadata: Mapped[dict] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
    )

    versions = relationship(
        "DocumentVersionModel",
        back_populates="document",
        cascade="all, delete-orphan",
    )
