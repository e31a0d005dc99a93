"""
User decision ORM model.

Append-only record of a reviewer acting on a finding. Multiple decisions
per finding form its history.

Dependencies: sqlalchemy, legalai.boundary.db.base
System role: Reviewer feedback persistence
"""

import enum
from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from legalai.boundary.db.base import Base, UUIDMixin, utcnow


class DecisionAction(str, enum.Enum):
    """Reviewer action on a finding."""

    ACCEPT = "accept"
    REJECT = "reject"
    EDITED = "edited"
    ASK_FOLLOWUP = "ask_followup"


class UserDecisionModel(Base, UUIDMixin):
    """
    User decision ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        finding_id: Finding acted on (cascade delete)
        user_id: Acting user
        action: DecisionAction
        final_text: Replacement text when action is EDITED
        comment: Optional reviewer comment
        timestamp: Decision time (UTC)
    """

    __tablename__ = "user_decisions"

    finding_id: Mapped[UUID] = mapped_column(
        ForeignKey("findings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[str] = mapped_column(String(255), nullable=False)

    action: Mapped[DecisionAction] = mapped_column(
        Enum(DecisionAction, native_enum=False),
        nullable=False,
    )

    final_text: Mapped[str | None] = mapped_column(Text, nullable=True)

    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    finding = relationship("FindingModel", back_populates="decisions")
