"""
Redline pipeline data types.

FindingCandidate is the single in-flight representation of a finding from
primary analysis through verification to persistence. It is built leniently
from raw model output so that one malformed field never drops a finding.

Dependencies: pydantic
System role: Pipeline contracts for the redline stages
"""

from typing import Any

from pydantic import BaseModel, Field

from legalai.boundary.db.models.finding_model import Severity, VerificationStatus

DEFAULT_SCORE = 50
DEFAULT_CATEGORY = "General"
NO_POLICY_REFERENCE = "No specific policy"

# Bounds of the 32-bit INTEGER location columns
MIN_LOCATION_VALUE = -(2**31)
MAX_LOCATION_VALUE = 2**31 - 1

_SEVERITY_LABELS = {member.value.lower(): member.value for member in Severity}


def normalize_severity(value: Any) -> str:
    """
    Canonical severity label for a raw value.

    Missing values become "Medium"; known labels are matched
    case-insensitively. Unknown labels are returned unchanged so that the
    risk aggregator can weight them as unknown.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return Severity.MEDIUM.value
    text = str(value).strip()
    return _SEVERITY_LABELS.get(text.lower(), text)


def normalize_score(value: Any) -> int:
    """Missing, falsy or non-numeric scores become 50; others are clamped to 0-100."""
    if not value:
        return DEFAULT_SCORE
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_SCORE
    return max(0, min(100, score))


def _optional_int(value: Any) -> int | None:
    """Integer for an optional location column; out-of-range values become None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not MIN_LOCATION_VALUE <= number <= MAX_LOCATION_VALUE:
        return None
    return number


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


class FindingLocation(BaseModel):
    """Position of a finding in the document; every field is optional."""

    page: int | None = None
    start_offset: int | None = None
    end_offset: int | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> "FindingLocation":
        if not isinstance(raw, dict):
            return cls()
        return cls(
            page=_optional_int(raw.get("page")),
            start_offset=_optional_int(raw.get("start_offset")),
            end_offset=_optional_int(raw.get("end_offset")),
        )


class FindingCandidate(BaseModel):
    """
    A finding as it moves through the pipeline.

    Attributes:
        severity: "High", "Medium", "Low", or an unrecognised raw label
        score: Risk score 0-100
        category: Issue type
        location: Optional page and character offsets
        evidence: Quoted text, truncated
        policy_reference: Related policy or "No specific policy"
        rationale: Why the text is risky
        proposed_rewrite: Suggested replacement, if any
        verification_status: Verifier verdict
        verifier_notes: Verifier explanation
    """

    severity: str = Severity.MEDIUM.value
    score: int = Field(default=DEFAULT_SCORE, ge=0, le=100)
    category: str = DEFAULT_CATEGORY
    location: FindingLocation = Field(default_factory=FindingLocation)
    evidence: str = ""
    policy_reference: str = NO_POLICY_REFERENCE
    rationale: str = ""
    proposed_rewrite: str | None = None
    verification_status: VerificationStatus = VerificationStatus.UNVERIFIED
    verifier_notes: str | None = None

    @classmethod
    def from_raw(cls, raw: dict, evidence_max_chars: int = 200) -> "FindingCandidate":
        """
        Build a candidate from one raw object of the model's "findings" array.

        Args:
            raw: Untrusted dictionary produced by the model
            evidence_max_chars: Maximum evidence length kept

        Returns:
            FindingCandidate with defaults applied to missing fields
        """
        evidence = _optional_text(raw.get("evidence")) or ""
        return cls(
            severity=normalize_severity(raw.get("severity")),
            score=normalize_score(raw.get("score")),
            category=_optional_text(raw.get("category")) or DEFAULT_CATEGORY,
            location=FindingLocation.from_raw(raw.get("location")),
            evidence=evidence[:evidence_max_chars],
            policy_reference=_optional_text(raw.get("policy_reference")) or NO_POLICY_REFERENCE,
            rationale=_optional_text(raw.get("rationale")) or "",
            proposed_rewrite=_optional_text(raw.get("proposed_rewrite")),
        )

    @property
    def severity_level(self) -> Severity:
        """Severity as stored; unrecognised labels are persisted as LOW."""
        for member in Severity:
            if member.value == self.severity:
                return member
        return Severity.LOW

    def with_verification(
        self,
        status: VerificationStatus,
        notes: str | None,
    ) -> "FindingCandidate":
        """Copy of this candidate carrying a verifier verdict."""
        return self.model_copy(update={"verification_status": status, "verifier_notes": notes})


class RunConfig(BaseModel):
    """Per-run model selection."""

    profile_id: str = "default"
    primary_model: str = "gpt-4"
    verifier_model: str = "gpt-4o"


class PrimaryAnalysisResult(BaseModel):
    """
    Output of primary analysis.

    failed distinguishes a gateway failure from a document with no findings.
    """

    findings: list[FindingCandidate] = Field(default_factory=list)
    failed: bool = False
