"""
Verification stage.

Asks a second model to confirm or dismiss each candidate, one finding at a
time. A failure on one finding marks it unverified and the stage moves on.

Dependencies: legalai.boundary.llm
System role: Third stage of the redline pipeline
"""

import json
import logging

from legalai.boundary.db.models.finding_model import VerificationStatus
from legalai.boundary.llm.azure_openai_gateway import AzureOpenAIGateway
from legalai.core.exceptions import LLMGatewayError
from legalai.core.redline.models import FindingCandidate
from legalai.core.redline.prompts import build_verification_prompt

logger = logging.getLogger(__name__)

VERIFICATION_FAILED_NOTE = "Verification step failed"

_KNOWN_STATUSES = {status.value: status for status in VerificationStatus}


def normalize_verdict(value) -> VerificationStatus:
    """Map a raw verdict onto VerificationStatus; anything unknown is UNVERIFIED."""
    if isinstance(value, str):
        return _KNOWN_STATUSES.get(value.strip().lower(), VerificationStatus.UNVERIFIED)
    return VerificationStatus.UNVERIFIED


def normalize_notes(value) -> str:
    """Verifier notes as text; structured values are serialised as JSON."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(value)


class VerificationStage:
    """Second-opinion check over primary findings."""

    def __init__(self, gateway: AzureOpenAIGateway, excerpt_chars: int = 1000) -> None:
        self._gateway = gateway
        self._excerpt_chars = excerpt_chars

    async def run(
        self,
        document_text: str,
        candidates: list[FindingCandidate],
        model: str,
    ) -> list[FindingCandidate]:
        """
        Verify each candidate sequentially.

        Args:
            document_text: Extracted document text (only the leading excerpt is sent)
            candidates: Findings from primary analysis
            model: Verifier model deployment name

        Returns:
            list[FindingCandidate]: New candidates, same length and order as the input

        Raises:
            ConfigurationError: Gateway credentials missing
        """
        verified: list[FindingCandidate] = []

        for candidate in candidates:
            prompt = build_verification_prompt(candidate, document_text, self._excerpt_chars)
            try:
                verdict = await self._gateway.verify_finding(prompt, model)
            except LLMGatewayError as e:
                logger.warning(
                    "Verification failed for finding",
                    extra={"category": candidate.category, "model": model, "error": str(e)},
                )
                verified.append(
                    candidate.with_verification(
                        VerificationStatus.UNVERIFIED, VERIFICATION_FAILED_NOTE
                    )
                )
                continue

            verified.append(
                candidate.with_verification(
                    normalize_verdict(verdict.get("verification_status")),
                    normalize_notes(verdict.get("notes")),
                )
            )

        logger.info("Verified findings", extra={"model": model, "findings": len(verified)})
        return verified
