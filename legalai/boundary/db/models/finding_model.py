"""
Finding ORM model.

One risk identified in a run, written once after verification and
never modified by the pipeline afterwards.

Dependencies: sqlalchemy, legalai.boundary.db.base
System role: Persisted review output
"""

import enum
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legalai.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class Severity(str, enum.Enum):
    """
    Finding severity.

    Stored by member name, so ordering on the column is lexical
    (HIGH, LOW, MEDIUM).
    """

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class VerificationStatus(str, enum.Enum):
    """Verifier verdict on a finding."""

    UNVERIFIED = "unverified"
    VERIFIED_SAFE = "verified_safe"
    VERIFIED_RISKY = "verified_risky"


class FindingModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Finding ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        run_id: Owning redline run (cascade delete)
        severity: HIGH/MEDIUM/LOW
        score: Risk score 0-100
        category: Free-text risk category
        location_page: Page number, when the model reported one
        location_start_offset: Character offset start, optional
        location_end_offset: Character offset end, optional
        evidence_snippet: Quoted problematic text (max 200 chars)
        evidence_policy_ref: Policy reference or "No specific policy"
        evidence_rationale: Why the text is risky
        suggestion_proposed_rewrite: Suggested replacement text
        verification_status: Verifier verdict
        verifier_notes: Verifier explanation
        decisions: One-to-many with UserDecisionModel (cascade delete)
        created_at: Persist timestamp (UTC)
    """

    __tablename__ = "findings"

    run_id: Mapped[UUID] = mapped_column(
        ForeignKey("redline_runs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    severity: Mapped[Severity] = mapped_column(
        Enum(Severity, native_enum=False),
        nullable=False,
        default=Severity.MEDIUM,
    )

    score: Mapped[int] = mapped_column(Integer, nullable=False, default=50)

    category: Mapped[str] = mapped_column(String(255), nullable=False, default="General")

    location_page: Mapped[int | None] = mapped_column(Integer, nullable=True)

    location_start_offset: Mapped[int | None] = mapped_column(Integer, nullable=True)

    location_end_offset: Mapped[int | None] = mapped_column(Integer, nullable=True)

    evidence_snippet: Mapped[str] = mapped_column(Text, nullable=False, default="")

    evidence_policy_ref: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        default="No specific policy",
    )

    evidence_rationale: Mapped[str] = mapped_column(Text, nullable=False, default="")

    suggestion_proposed_rewrite: Mapped[str | None] = mapped_column(Text, nullable=True)

    verification_status: Mapped[VerificationStatus] = mapped_column(
        Enum(VerificationStatus, native_enum=False),
        nullable=False,
        default=VerificationStatus.UNVERIFIED,
    )

    verifier_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    run = relationship("RedlineRunModel", back_populates="findings")
    decisions = relationship(
        "UserDecisionModel",
        back_populates="finding",
        cascade="all, delete-orphan",
    )
