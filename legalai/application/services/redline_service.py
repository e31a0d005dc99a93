"""
Redline service orchestrator.

Starts redline runs and exposes their results and reviewer decisions.
Processing itself happens in RedlineOrchestrator background tasks.

Dependencies: legalai.boundary.db.CRUD, legalai.core.redline
System role: Redline review use cases
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from legalai.boundary.db.CRUD.finding_crud import finding_crud
from legalai.boundary.db.CRUD.redline_run_crud import redline_run_crud
from legalai.boundary.db.CRUD.user_decision_crud import user_decision_crud
from legalai.boundary.db.models.finding_model import FindingModel
from legalai.boundary.db.models.redline_run_model import RedlineRunModel
from legalai.boundary.db.models.user_decision_model import DecisionAction, UserDecisionModel
from legalai.configs.redline import RedlineSettings
from legalai.core.exceptions import FindingNotFoundError, RunNotFoundError, ValidationError
from legalai.core.redline.models import RunConfig
from legalai.core.redline.orchestrator import RedlineOrchestrator

logger = logging.getLogger(__name__)


class RedlineService:
    """
    Redline service orchestrator.

    Fills run defaults, delegates scheduling to the orchestrator and
    serves run, finding and decision reads.
    """

    def __init__(
        self,
        db: AsyncSession,
        orchestrator: RedlineOrchestrator,
        settings: RedlineSettings | None = None,
    ) -> None:
        """
        Initialize redline service.

        Args:
            db: AsyncSession for run, finding and decision access
            orchestrator: Shared orchestrator that owns background runs
            settings: Default profile and model names
        """
        self.db = db
        self._orchestrator = orchestrator
        self._settings = settings or RedlineSettings()

    async def start_run(
        self,
        document_id: UUID | None,
        version_id: UUID | None,
        profile_id: str | None = None,
        primary_model: str | None = None,
        verifier_model: str | None = None,
    ) -> RedlineRunModel:
        """
        Create a queued run and schedule it.

        Args:
            document_id: Document under review
            version_id: Version to analyze
            profile_id: Review profile (default from settings)
            primary_model: Primary model deployment (default from settings)
            verifier_model: Verifier model deployment (default from settings)

        Returns:
            RedlineRunModel: Run in QUEUED status

        Raises:
            ValidationError: document_id or version_id missing
        """
        if not document_id or not version_id:
            raise ValidationError("documentId and versionId are required")

        config = RunConfig(
            profile_id=profile_id or self._settings.default_profile_id,
            primary_model=primary_model or self._settings.default_primary_model,
            verifier_model=verifier_model or self._settings.default_verifier_model,
        )
        return await self._orchestrator.start_run(self.db, document_id, version_id, config)

    async def get_run_by_id(self, run_id: UUID) -> RedlineRunModel:
        """
        Fetch a run.

        Raises:
            RunNotFoundError: Run does not exist
        """
        run = await redline_run_crud.get_by_id(self.db, run_id)
        if run is None:
            raise RunNotFoundError(run_id)
        return run

    async def get_run_findings(self, run_id: UUID) -> Sequence[FindingModel]:
        """
        Fetch findings of a run in display order.

        Findings appear only once the run has persisted them; a queued or
        running run returns an empty list.

        Raises:
            RunNotFoundError: Run does not exist
        """
        if not await redline_run_crud.exists(self.db, run_id):
            raise RunNotFoundError(run_id)
        return await finding_crud.get_by_run_id(self.db, run_id)

    async def record_user_decision(
        self,
        finding_id: UUID,
        user_id: str,
        action: DecisionAction,
        final_text: str | None = None,
        comment: str | None = None,
    ) -> UserDecisionModel:
        """
        Append a reviewer decision to a finding's history.

        Args:
            finding_id: Finding acted on
            user_id: Acting user
            action: accept, reject, edited or ask_followup
            final_text: Replacement text, required for edited
            comment: Optional reviewer comment

        Returns:
            UserDecisionModel: The stored decision

        Raises:
            FindingNotFoundError: Finding does not exist
            ValidationError: edited without final_text
        """
        if action == DecisionAction.EDITED and not final_text:
            raise ValidationError("final_text is required for edited decisions", field="final_text")

        if not await finding_crud.exists(self.db, finding_id):
            raise FindingNotFoundError(finding_id)

        decision = await user_decision_crud.create(
            self.db,
            finding_id=finding_id,
            user_id=user_id,
            action=action,
            final_text=final_text,
            comment=comment,
        )
        await self.db.commit()

        logger.info(
            "User decision recorded",
            extra={"finding_id": str(finding_id), "action": action.value},
        )
        return decision

    async def get_finding_decisions(self, finding_id: UUID) -> Sequence[UserDecisionModel]:
        """
        Decision history of a finding, oldest first.

        Raises:
            FindingNotFoundError: Finding does not exist
        """
        if not await finding_crud.exists(self.db, finding_id):
            raise FindingNotFoundError(finding_id)
        return await user_decision_crud.get_by_finding_id(self.db, finding_id)
