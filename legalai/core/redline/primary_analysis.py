"""
Primary analysis stage.

Sends the full document text to the primary model with a fixed contract
review instruction and turns the raw findings into candidates.

Dependencies: legalai.boundary.llm
System role: Second stage of the redline pipeline
"""

import logging

from legalai.boundary.llm.azure_openai_gateway import AzureOpenAIGateway
from legalai.core.exceptions import LLMGatewayError
from legalai.core.redline.models import FindingCandidate, PrimaryAnalysisResult
from legalai.core.redline.prompts import PRIMARY_ANALYSIS_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class PrimaryAnalysisStage:
    """
    Detect candidate findings in a document.

    Gateway failures do not fail the run: they produce an empty result
    with failed=True. A raw finding that cannot be built is dropped.
    A missing gateway configuration propagates.
    """

    def __init__(self, gateway: AzureOpenAIGateway, evidence_max_chars: int = 200) -> None:
        self._gateway = gateway
        self._evidence_max_chars = evidence_max_chars

    async def run(self, document_text: str, model: str) -> PrimaryAnalysisResult:
        """
        Analyze a document.

        Args:
            document_text: Extracted document text
            model: Primary model deployment name

        Returns:
            PrimaryAnalysisResult: Candidates in model order, and whether the call failed

        Raises:
            ConfigurationError: Gateway credentials missing
        """
        try:
            raw_findings = await self._gateway.analyze_document(
                document_text,
                PRIMARY_ANALYSIS_SYSTEM_PROMPT,
                model,
            )
        except LLMGatewayError as e:
            logger.error(
                "Primary analysis failed",
                extra={"model": model, "error": str(e)},
            )
            return PrimaryAnalysisResult(findings=[], failed=True)

        findings: list[FindingCandidate] = []
        for index, raw in enumerate(raw_findings):
            try:
                findings.append(
                    FindingCandidate.from_raw(raw, evidence_max_chars=self._evidence_max_chars)
                )
            except (AttributeError, TypeError, ValueError, OverflowError) as e:
                logger.warning(
                    "Dropping malformed finding from model output",
                    extra={"model": model, "index": index, "error": str(e)},
                )

        logger.info(
            "Primary analysis complete",
            extra={"model": model, "findings": len(findings)},
        )
        return PrimaryAnalysisResult(findings=findings)
