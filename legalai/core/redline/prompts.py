"""
Prompt templates for the redline pipeline.

Dependencies: None
System role: Model instructions for primary analysis and verification
"""

from legalai.core.redline.models import FindingCandidate

PRIMARY_ANALYSIS_SYSTEM_PROMPT = """You are a legal document analyzer specialized in contract review. Analyze the following contract and identify potential risks and issues.

For each finding, provide:
- severity: "High", "Medium", or "Low"
- category: specific issue type (e.g., "Liability Cap", "Governing Law", "Confidentiality Term")
- location: { page: number or null, start_offset: character position or null }
- evidence: exact text snippet from the document (max 200 chars)
- policy_reference: which internal policy or best practice this relates to (or "No specific policy")
- rationale: why this is an issue (1-2 sentences)
- proposed_rewrite: suggested alternative text (or null if none)
- score: risk score from 0-100

Focus on:
- HIGH RISK: Liability caps below industry standard, broad indemnification, IP ownership issues, unfavorable termination rights, jurisdiction in unfavorable courts
- MEDIUM RISK: Payment terms, notice periods, governing law concerns, warranty limitations
- LOW RISK: Formatting issues, clarity improvements, missing definitions

Return your response as a JSON object with a "findings" array."""


VERIFICATION_PROMPT_TEMPLATE = """Review this finding from primary contract analysis:

Severity: {severity}
Category: {category}
Evidence: {evidence}
Rationale: {rationale}

Original Document Context (excerpt):
{excerpt}

Verify:
1. Is this a genuine risk that requires attention? (verified_risky or verified_safe)
2. Is the severity level ({severity}) accurate, or should it be adjusted?
3. Is the evidence snippet actually present in the document?
4. Any additional notes or corrections?

Return your response as a JSON object with:
{{
  "verification_status": "verified_risky" or "verified_safe",
  "notes": "Brief explanation of your verification decision"
}}"""


def build_verification_prompt(
    candidate: FindingCandidate,
    document_text: str,
    excerpt_chars: int = 1000,
) -> str:
    """Verification prompt for one finding with the leading document excerpt."""
    return VERIFICATION_PROMPT_TEMPLATE.format(
        severity=candidate.severity,
        category=candidate.category,
        evidence=candidate.evidence,
        rationale=candidate.rationale,
        excerpt=document_text[:excerpt_chars],
    )
