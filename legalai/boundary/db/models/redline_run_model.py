"""
Redline run ORM model.

Tracks one automated review of a document version from enqueue to a
terminal state. Clients poll the run (GET /redline/runs/{id}) until it
reaches COMPLETED or FAILED.

Dependencies: sqlalchemy, legalai.boundary.db.base
System role: Review run lifecycle tracking
"""

import enum
from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legalai.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class RunStatus(str, enum.Enum):
    """
    Redline run execution states.

    QUEUED: Run created, background processing not yet started
    RUNNING: Pipeline stages executing
    COMPLETED: Findings persisted and overall risk score set
    FAILED: Unrecoverable error; see error_message
    """

    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.COMPLETED, RunStatus.FAILED)


class RedlineRunModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Redline run ORM model.

    The version reference is not a foreign key: runs may be created for a
    version that does not exist and fail later during extraction.

    Attributes:
        id: UUID primary key (auto-generated)
        document_id: Document under review
        version_id: Version whose binary is analyzed
        profile_id: Review profile identifier (default "default")
        status: RunStatus (monotonic QUEUED -> RUNNING -> COMPLETED/FAILED)
        started_at: Set on transition to RUNNING
        finished_at: Set iff status is terminal
        primary_model: Deployment used for primary analysis
        verifier_model: Deployment used for verification
        error_message: Failure description when status is FAILED
        overall_risk_score: Aggregate 0-100 score when COMPLETED
        run_metadata: JSON column "metadata" with findings_detected,
                      findings_saved and primary_analysis_failed
        created_at: Enqueue timestamp (UTC)
    """

    __tablename__ = "redline_runs"

    document_id: Mapped[UUID] = mapped_column(nullable=False, index=True)

    version_id: Mapped[UUID] = mapped_column(nullable=False, index=True)

    profile_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="default",
    )

    status: Mapped[RunStatus] = mapped_column(
        Enum(RunStatus, native_enum=False),
        nullable=False,
        default=RunStatus.QUEUED,
    )

    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    finished_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    primary_model: Mapped[str] = mapped_column(String(255), nullable=False)

    verifier_model: Mapped[str] = mapped_column(String(255), nullable=False)

    error_message: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    overall_risk_score: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        default=None,
        doc="Aggregate risk score (0-100)",
    )

    run_metadata: Mapped[dict] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
    )

    findings = relationship(
        "FindingModel",
        back_populates="run",
        cascade="all, delete-orphan",
    )
