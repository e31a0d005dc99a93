"""
Finding CRUD operations.

Dependencies: sqlalchemy, legalai.boundary.db.models.finding_model
System role: Finding persistence and ordered retrieval
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from legalai.boundary.db.CRUD.base_crud import BaseCRUD
from legalai.boundary.db.models.finding_model import FindingModel


class FindingCRUD(BaseCRUD[FindingModel]):
    """CRUD operations for FindingModel."""

    def __init__(self) -> None:
        """Initialize FindingCRUD with FindingModel."""
        super().__init__(FindingModel)

    async def get_by_run_id(
        self,
        session: AsyncSession,
        run_id: UUID,
    ) -> Sequence[FindingModel]:
        """
        Retrieve findings for a run.

        Ordered by the stored severity label ascending, then score descending.
        The severity sort is lexical (HIGH, LOW, MEDIUM), not by rank; clients
        depend on this order.

        Args:
            session: Async database session
            run_id: Owning run UUID

        Returns:
            Sequence of FindingModels for the run
        """
        stmt = (
            select(FindingModel)
            .where(FindingModel.run_id == run_id)
            .order_by(
                FindingModel.severity.asc(),
                FindingModel.score.desc(),
                FindingModel.created_at.asc(),
                FindingModel.id.asc(),
            )
        )
        result = await session.execute(stmt)
        return result.scalars().all()


finding_crud = FindingCRUD()
