"""
User decision CRUD operations.

Decisions are append-only: this module creates and lists them, never
updates them.

Dependencies: sqlalchemy, legalai.boundary.db.models.user_decision_model
System role: Reviewer decision history
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from legalai.boundary.db.CRUD.base_crud import BaseCRUD
from legalai.boundary.db.models.user_decision_model import UserDecisionModel


class UserDecisionCRUD(BaseCRUD[UserDecisionModel]):
    """CRUD operations for UserDecisionModel."""

    def __init__(self) -> None:
        """Initialize UserDecisionCRUD with UserDecisionModel."""
        super().__init__(UserDecisionModel)

    async def get_by_finding_id(
        self,
        session: AsyncSession,
        finding_id: UUID,
    ) -> Sequence[UserDecisionModel]:
        """Decision history for a finding, oldest first."""
        stmt = (
            select(UserDecisionModel)
            .where(UserDecisionModel.finding_id == finding_id)
            .order_by(UserDecisionModel.timestamp.asc(), UserDecisionModel.id.asc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


user_decision_crud = UserDecisionCRUD()
