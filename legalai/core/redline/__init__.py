"""
Redline review pipeline.

Stages run strictly in sequence for one run:
    TextExtractionTask -> PrimaryAnalysisStage -> VerificationStage
    -> persistence -> calculate_overall_risk_score

RedlineOrchestrator schedules and drives runs.
"""

from legalai.core.redline.models import (
    FindingCandidate,
    FindingLocation,
    PrimaryAnalysisResult,
    RunConfig,
)
from legalai.core.redline.orchestrator import RedlineOrchestrator
from legalai.core.redline.primary_analysis import PrimaryAnalysisStage
from legalai.core.redline.risk_aggregator import calculate_overall_risk_score
from legalai.core.redline.text_extraction import TextExtractionTask
from legalai.core.redline.verification import VerificationStage

__all__ = [
    "FindingCandidate",
    "FindingLocation",
    "PrimaryAnalysisResult",
    "RunConfig",
    "RedlineOrchestrator",
    "PrimaryAnalysisStage",
    "VerificationStage",
    "TextExtractionTask",
    "calculate_overall_risk_score",
]
