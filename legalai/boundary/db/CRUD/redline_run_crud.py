"""
Redline run CRUD operations.

Provides lifecycle transitions for RedlineRunModel. Transitions only move
forward (QUEUED -> RUNNING -> COMPLETED, QUEUED/RUNNING -> FAILED); any other
change raises InvalidRunTransitionError. finished_at is written together
with every terminal status.

Dependencies: sqlalchemy, legalai.boundary.db.models.redline_run_model
System role: Run persistence for the redline pipeline
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from legalai.boundary.db.base import utcnow
from legalai.boundary.db.CRUD.base_crud import BaseCRUD
from legalai.boundary.db.models.redline_run_model import RedlineRunModel, RunStatus
from legalai.core.exceptions import InvalidRunTransitionError

_ALLOWED_FROM = {
    RunStatus.RUNNING: (RunStatus.QUEUED,),
    RunStatus.COMPLETED: (RunStatus.RUNNING,),
    RunStatus.FAILED: (RunStatus.QUEUED, RunStatus.RUNNING),
}


class RedlineRunCRUD(BaseCRUD[RedlineRunModel]):
    """
    CRUD operations for RedlineRunModel.

    Extends BaseCRUD with status transitions used by the orchestrator.
    """

    def __init__(self) -> None:
        """Initialize RedlineRunCRUD with RedlineRunModel."""
        super().__init__(RedlineRunModel)

    async def _transition(
        self,
        session: AsyncSession,
        id: UUID,
        target: RunStatus,
        **kwargs,
    ) -> RedlineRunModel | None:
        run = await self.get_by_id(session, id)
        if run is None:
            return None
        if run.status not in _ALLOWED_FROM[target]:
            raise InvalidRunTransitionError(id, run.status.value, target.value)
        return await self.update_by_id(session, id, status=target, **kwargs)

    async def mark_running(self, session: AsyncSession, id: UUID) -> RedlineRunModel | None:
        """
        Transition a queued run to RUNNING and stamp started_at.

        Returns:
            Updated run, or None if the run does not exist

        Raises:
            InvalidRunTransitionError: Run is not QUEUED
        """
        return await self._transition(session, id, RunStatus.RUNNING, started_at=utcnow())

    async def mark_completed(
        self,
        session: AsyncSession,
        id: UUID,
        overall_risk_score: int,
        run_metadata: dict,
    ) -> RedlineRunModel | None:
        """
        Transition a running run to COMPLETED with its aggregate score.

        Args:
            session: Async database session
            id: Run UUID
            overall_risk_score: Aggregate 0-100 score
            run_metadata: Counts and flags describing the run

        Returns:
            Updated run, or None if the run does not exist

        Raises:
            InvalidRunTransitionError: Run is not RUNNING
        """
        return await self._transition(
            session,
            id,
            RunStatus.COMPLETED,
            overall_risk_score=overall_risk_score,
            run_metadata=run_metadata,
            finished_at=utcnow(),
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        id: UUID,
        error_message: str,
    ) -> RedlineRunModel | None:
        """
        Transition a non-terminal run to FAILED with the error description.

        Returns:
            Updated run, or None if the run does not exist

        Raises:
            InvalidRunTransitionError: Run is already COMPLETED or FAILED
        """
        return await self._transition(
            session,
            id,
            RunStatus.FAILED,
            error_message=error_message,
            finished_at=utcnow(),
        )


redline_run_crud = RedlineRunCRUD()
