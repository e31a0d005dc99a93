"""
Overall risk score for a run.

Severity-weighted average of finding scores, so one High finding
outweighs several Low ones.

Dependencies: None
System role: Final scoring step of the redline pipeline
"""

import math
from typing import Iterable

from legalai.core.redline.models import DEFAULT_SCORE, FindingCandidate

SEVERITY_WEIGHTS = {
    "High": 1.0,
    "Medium": 0.5,
    "Low": 0.2,
}
UNKNOWN_SEVERITY_WEIGHT = 0.2


def calculate_overall_risk_score(findings: Iterable[FindingCandidate]) -> int:
    """
    Weighted average of finding scores.

    Example:
        High/80 and Low/20 -> (80*1.0 + 20*0.2) / 1.2 = 70

    Args:
        findings: Verified findings

    Returns:
        int: 0-100; 0 when there are no findings. Halves round up.
    """
    weighted_sum = 0.0
    weight_sum = 0.0

    for finding in findings:
        weight = SEVERITY_WEIGHTS.get(finding.severity, UNKNOWN_SEVERITY_WEIGHT)
        weighted_sum += (finding.score or DEFAULT_SCORE) * weight
        weight_sum += weight

    if weight_sum == 0:
        return 0
    return math.floor(weighted_sum / weight_sum + 0.5)
