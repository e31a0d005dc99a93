"""
Redline run orchestrator.

Creates runs and drives each one through extraction, primary analysis,
verification, persistence and scoring in a background asyncio task.

Lifecycle:
    queued -> running -> completed | failed

The background task owns its run record and its own database session.
It never raises: every unrecoverable error is written to the run as
status=failed with error_message and finished_at.

Dependencies: sqlalchemy, asyncio
System role: Redline pipeline coordinator
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from legalai.boundary.db.CRUD.document_version_crud import document_version_crud
from legalai.boundary.db.CRUD.finding_crud import finding_crud
from legalai.boundary.db.CRUD.redline_run_crud import redline_run_crud
from legalai.boundary.db.models.redline_run_model import RedlineRunModel, RunStatus
from legalai.core.exceptions import (
    InvalidRunTransitionError,
    LegalAIException,
    PersistenceError,
    RunNotFoundError,
    VersionNotFoundError,
)
from legalai.core.redline.models import FindingCandidate, RunConfig
from legalai.core.redline.primary_analysis import PrimaryAnalysisStage
from legalai.core.redline.risk_aggregator import calculate_overall_risk_score
from legalai.core.redline.text_extraction import TextExtractionTask
from legalai.core.redline.verification import VerificationStage
from legalai.observability.correlation import get_correlation_id, set_correlation_id
from legalai.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


class RedlineOrchestrator:
    """
    Coordinates redline runs.

    Usage:
        orchestrator = RedlineOrchestrator(session_factory, extractor, primary, verifier)
        run = await orchestrator.start_run(db, document_id, version_id, RunConfig())
        # poll redline_run_crud.get_by_id(db, run.id) until terminal
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        extractor: TextExtractionTask,
        primary_stage: PrimaryAnalysisStage,
        verification_stage: VerificationStage,
    ) -> None:
        self._session_factory = session_factory
        self._extractor = extractor
        self._primary_stage = primary_stage
        self._verification_stage = verification_stage
        self._tasks: set[asyncio.Task] = set()

    @property
    def active_runs(self) -> int:
        return len(self._tasks)

    async def start_run(
        self,
        session: AsyncSession,
        document_id: UUID,
        version_id: UUID,
        config: RunConfig,
    ) -> RedlineRunModel:
        """
        Create a queued run and schedule its processing.

        The referenced version is not checked here; a missing version
        shows up as a failed run.

        Args:
            session: Caller's database session (committed by this call)
            document_id: Document under review
            version_id: Version to analyze
            config: Profile and model selection

        Returns:
            RedlineRunModel: The run in QUEUED status
        """
        run = await redline_run_crud.create(
            session,
            document_id=document_id,
            version_id=version_id,
            profile_id=config.profile_id,
            status=RunStatus.QUEUED,
            primary_model=config.primary_model,
            verifier_model=config.verifier_model,
        )
        await session.commit()

        logger.info(
            "Redline run queued",
            extra={"run_id": str(run.id), "version_id": str(version_id)},
        )
        self._schedule(run.id)
        return run

    def _schedule(self, run_id: UUID) -> None:
        task = asyncio.create_task(self.process_run(run_id), name=f"redline-run-{run_id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait_for_idle(self) -> None:
        """Wait until every scheduled run has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def process_run(self, run_id: UUID) -> None:
        """
        Drive one run to a terminal state.

        Args:
            run_id: Run to process
        """
        if not get_correlation_id():
            set_correlation_id(f"run-{run_id}")

        try:
            await self._execute(run_id)
        except InvalidRunTransitionError as e:
            # Already picked up or finished elsewhere; leave the stored state alone
            log_with_context(
                logger, logging.WARNING, "Redline run skipped", run_id=run_id, reason=e.message
            )
        except Exception as e:
            log_exception_with_context(logger, "Redline run failed", e, run_id=run_id)
            message = e.message if isinstance(e, LegalAIException) else str(e)
            await self._mark_failed(run_id, message or type(e).__name__)

    async def _execute(self, run_id: UUID) -> None:
        async with self._session_factory() as session:
            run = await redline_run_crud.mark_running(session, run_id)
            if run is None:
                raise RunNotFoundError(run_id)
            await session.commit()

            version_id = run.version_id
            primary_model = run.primary_model
            verifier_model = run.verifier_model

            version = await document_version_crud.get_by_id(session, version_id)
            if version is None:
                raise VersionNotFoundError(version_id)

            document_text = await self._extractor.extract(
                version.blob_key, version.file_type.value
            )

            primary = await self._primary_stage.run(document_text, primary_model)
            verified = await self._verification_stage.run(
                document_text, primary.findings, verifier_model
            )

            saved = await self._save_findings(session, run_id, verified)
            overall_risk_score = calculate_overall_risk_score(verified)

            await redline_run_crud.mark_completed(
                session,
                run_id,
                overall_risk_score=overall_risk_score,
                run_metadata={
                    "findings_detected": len(primary.findings),
                    "findings_saved": saved,
                    "primary_analysis_failed": primary.failed,
                },
            )
            await session.commit()

        log_with_context(
            logger,
            logging.INFO,
            "Redline run completed",
            run_id=run_id,
            findings_saved=saved,
            overall_risk_score=overall_risk_score,
        )

    async def _save_findings(
        self,
        session: AsyncSession,
        run_id: UUID,
        findings: list[FindingCandidate],
    ) -> int:
        """Persist findings one at a time; a failed save is logged and skipped."""
        saved = 0
        for candidate in findings:
            try:
                await self._save_finding(session, run_id, candidate)
                saved += 1
            except PersistenceError as e:
                log_exception_with_context(
                    logger,
                    "Failed to save finding",
                    e,
                    run_id=run_id,
                    category=candidate.category,
                )
        return saved

    async def _save_finding(
        self,
        session: AsyncSession,
        run_id: UUID,
        candidate: FindingCandidate,
    ) -> None:
        try:
            await finding_crud.create(
                session,
                run_id=run_id,
                severity=candidate.severity_level,
                score=candidate.score,
                category=candidate.category,
                location_page=candidate.location.page,
                location_start_offset=candidate.location.start_offset,
                location_end_offset=candidate.location.end_offset,
                evidence_snippet=candidate.evidence,
                evidence_policy_ref=candidate.policy_reference,
                evidence_rationale=candidate.rationale,
                suggestion_proposed_rewrite=candidate.proposed_rewrite,
                verification_status=candidate.verification_status,
                verifier_notes=candidate.verifier_notes,
            )
            await session.commit()
        except Exception as e:
            # Driver errors such as integer overflow are not SQLAlchemyError
            await session.rollback()
            raise PersistenceError(
                "Failed to save finding",
                details={"run_id": str(run_id), "error": str(e)},
            ) from e

    async def _mark_failed(self, run_id: UUID, error_message: str) -> None:
        try:
            async with self._session_factory() as session:
                await redline_run_crud.mark_failed(session, run_id, error_message)
                await session.commit()
        except (SQLAlchemyError, InvalidRunTransitionError) as e:
            log_exception_with_context(
                logger, "Failed to record run failure", e, run_id=run_id
            )
