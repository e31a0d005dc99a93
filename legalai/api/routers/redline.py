"""
Redline API endpoints.

Routes:
- POST /redline/run - Start a redline run
- GET /redline/runs/{run_id} - Run status for polling
- GET /redline/runs/{run_id}/findings - Findings of a run
- POST /redline/findings/{finding_id}/decision - Record a reviewer decision
- GET /redline/findings/{finding_id}/decisions - Decision history of a finding

Dependencies: legalai.application.services, legalai.models
System role: Redline HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from legalai.api.deps import get_current_user_id, get_redline_service
from legalai.api.routers.error_handling import handle_domain_errors
from legalai.application.services.redline_service import RedlineService
from legalai.models.common import SuccessResponse
from legalai.models.redline import (
    FindingResponse,
    RunResponse,
    StartRunRequest,
    UserDecisionRequest,
    UserDecisionResponse,
)

router = APIRouter(
    prefix="/redline",
    tags=["redline"],
    dependencies=[Depends(get_current_user_id)],
)


@router.post(
    "/run",
    response_model=SuccessResponse[RunResponse],
    status_code=status.HTTP_201_CREATED,
)
@handle_domain_errors
async def start_run(
    request: StartRunRequest,
    redline_service: RedlineService = Depends(get_redline_service),
) -> SuccessResponse[RunResponse]:
    """
    Start a redline run on a document version.

    Returns immediately with the run in "queued" status. Poll
    GET /redline/runs/{id} until status is "completed" or "failed".

    Raises:
        HTTPException(400): documentId or versionId missing
        HTTPException(401): X-User-Id header missing
    """
    run = await redline_service.start_run(
        document_id=request.document_id,
        version_id=request.version_id,
        profile_id=request.profile_id,
        primary_model=request.primary_model,
        verifier_model=request.verifier_model,
    )
    return SuccessResponse(data=RunResponse.model_validate(run))


@router.get("/runs/{run_id}", response_model=SuccessResponse[RunResponse])
@handle_domain_errors
async def get_run(
    run_id: UUID,
    redline_service: RedlineService = Depends(get_redline_service),
) -> SuccessResponse[RunResponse]:
    """
    Get run status.

    Raises:
        HTTPException(404): Run not found
    """
    run = await redline_service.get_run_by_id(run_id)
    return SuccessResponse(data=RunResponse.model_validate(run))


@router.get("/runs/{run_id}/findings", response_model=SuccessResponse[list[FindingResponse]])
@handle_domain_errors
async def get_run_findings(
    run_id: UUID,
    redline_service: RedlineService = Depends(get_redline_service),
) -> SuccessResponse[list[FindingResponse]]:
    """
    Get findings of a run.

    Ordered by severity label ascending, then score descending.

    Raises:
        HTTPException(404): Run not found
    """
    findings = await redline_service.get_run_findings(run_id)
    return SuccessResponse(data=[FindingResponse.model_validate(f) for f in findings])


@router.post(
    "/findings/{finding_id}/decision",
    response_model=SuccessResponse[UserDecisionResponse],
    status_code=status.HTTP_201_CREATED,
)
@handle_domain_errors
async def record_decision(
    finding_id: UUID,
    request: UserDecisionRequest,
    user_id: str = Depends(get_current_user_id),
    redline_service: RedlineService = Depends(get_redline_service),
) -> SuccessResponse[UserDecisionResponse]:
    """
    Record the acting user's decision on a finding.

    Raises:
        HTTPException(400): edited without final_text
        HTTPException(401): X-User-Id header missing
        HTTPException(404): Finding not found
    """
    decision = await redline_service.record_user_decision(
        finding_id=finding_id,
        user_id=user_id,
        action=request.action,
        final_text=request.final_text,
        comment=request.comment,
    )
    return SuccessResponse(data=UserDecisionResponse.model_validate(decision))


@router.get(
    "/findings/{finding_id}/decisions",
    response_model=SuccessResponse[list[UserDecisionResponse]],
)
@handle_domain_errors
async def get_finding_decisions(
    finding_id: UUID,
    redline_service: RedlineService = Depends(get_redline_service),
) -> SuccessResponse[list[UserDecisionResponse]]:
    """
    Decision history of a finding, oldest first.

    Raises:
        HTTPException(404): Finding not found
    """
    decisions = await redline_service.get_finding_decisions(finding_id)
    return SuccessResponse(data=[UserDecisionResponse.model_validate(d) for d in decisions])
