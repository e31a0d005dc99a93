"""
Redline domain models and schemas.

Request/response schemas for runs, findings and user decisions. Request
bodies accept camelCase keys as well as snake_case.

Dependencies: pydantic
System role: Redline API contracts
"""

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from legalai.boundary.db.models.finding_model import Severity, VerificationStatus
from legalai.boundary.db.models.redline_run_model import RunStatus
from legalai.boundary.db.models.user_decision_model import DecisionAction


class StartRunRequest(BaseModel):
    """Request schema for starting a redline run."""

    model_config = ConfigDict(populate_by_name=True)

    document_id: uuid.UUID | None = Field(default=None, alias="documentId")
    version_id: uuid.UUID | None = Field(default=None, alias="versionId")
    profile_id: str | None = Field(default=None, alias="profileId")
    primary_model: str | None = Field(default=None, alias="primaryModel")
    verifier_model: str | None = Field(default=None, alias="verifierModel")


class RunResponse(BaseModel):
    """Response schema for a redline run."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    document_id: uuid.UUID
    version_id: uuid.UUID
    profile_id: str
    status: RunStatus
    started_at: datetime | None = None
    finished_at: datetime | None = None
    primary_model: str
    verifier_model: str
    error_message: str | None = None
    overall_risk_score: int | None = None
    metadata: dict = Field(
        default_factory=dict,
        validation_alias=AliasChoices("run_metadata", "metadata"),
    )
    created_at: datetime


class FindingResponse(BaseModel):
    """Response schema for a persisted finding."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    run_id: uuid.UUID
    severity: Severity
    score: int
    category: str
    location_page: int | None = None
    location_start_offset: int | None = None
    location_end_offset: int | None = None
    evidence_snippet: str
    evidence_policy_ref: str
    evidence_rationale: str
    suggestion_proposed_rewrite: str | None = None
    verification_status: VerificationStatus
    verifier_notes: str | None = None
    created_at: datetime


class UserDecisionRequest(BaseModel):
    """Request schema for recording a decision on a finding."""

    model_config = ConfigDict(populate_by_name=True)

    action: DecisionAction
    final_text: str | None = Field(
        default=None,
        validation_alias=AliasChoices("final_text", "finalText"),
    )
    comment: str | None = None


class UserDecisionResponse(BaseModel):
    """Response schema for a recorded decision."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    finding_id: uuid.UUID
    user_id: str
    action: DecisionAction
    final_text: str | None = None
    comment: str | None = None
    timestamp: datetime
