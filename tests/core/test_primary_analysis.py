"""
Test suite for PrimaryAnalysisStage.

System role: Verification of candidate detection from model output
"""

import pytest

from legalai.core.exceptions import ConfigurationError, LLMParseError, LLMTransportError
from legalai.core.redline.primary_analysis import PrimaryAnalysisStage
from legalai.core.redline.prompts import PRIMARY_ANALYSIS_SYSTEM_PROMPT


class TestPrimaryAnalysisStage:
    """Test suite for PrimaryAnalysisStage.run()."""

    @pytest.mark.asyncio
    async def test_should_build_candidates_in_model_order(self, mock_gateway) -> None:
        # Arrange
        mock_gateway.analyze_document.return_value = [
            {"severity": "high", "score": 85, "category": "Indemnification"},
            {"category": "Definitions"},
        ]
        stage = PrimaryAnalysisStage(mock_gateway)

        # Act
        result = await stage.run("This Agreement...", "gpt-4")

        # Assert
        assert result.failed is False
        assert [c.category for c in result.findings] == ["Indemnification", "Definitions"]
        assert result.findings[0].severity == "High"
        assert result.findings[1].severity == "Medium"
        assert result.findings[1].score == 50
        mock_gateway.analyze_document.assert_awaited_once_with(
            "This Agreement...", PRIMARY_ANALYSIS_SYSTEM_PROMPT, "gpt-4"
        )

    @pytest.mark.asyncio
    async def test_should_truncate_evidence(self, mock_gateway) -> None:
        mock_gateway.analyze_document.return_value = [{"evidence": "x" * 500}]
        stage = PrimaryAnalysisStage(mock_gateway, evidence_max_chars=200)

        result = await stage.run("text", "gpt-4")

        assert len(result.findings[0].evidence) == 200

    @pytest.mark.asyncio
    async def test_should_report_failure_on_transport_error(self, mock_gateway) -> None:
        # Arrange
        mock_gateway.analyze_document.side_effect = LLMTransportError(
            "Azure OpenAI API error: quota", status_code=429
        )
        stage = PrimaryAnalysisStage(mock_gateway)

        # Act
        result = await stage.run("text", "gpt-4")

        # Assert
        assert result.failed is True
        assert result.findings == []

    @pytest.mark.asyncio
    async def test_should_keep_finding_with_non_finite_location(self, mock_gateway) -> None:
        # Arrange
        mock_gateway.analyze_document.return_value = [
            {"severity": "High", "category": "Term", "location": {"page": float("inf")}},
        ]

        # Act
        result = await PrimaryAnalysisStage(mock_gateway).run("text", "gpt-4")

        # Assert
        assert result.failed is False
        assert [c.category for c in result.findings] == ["Term"]
        assert result.findings[0].location.page is None

    @pytest.mark.asyncio
    async def test_should_drop_raw_finding_that_cannot_be_built(self, mock_gateway) -> None:
        # Arrange
        mock_gateway.analyze_document.return_value = [
            "not an object",
            {"severity": "Low", "category": "Definitions"},
        ]

        # Act
        result = await PrimaryAnalysisStage(mock_gateway).run("text", "gpt-4")

        # Assert
        assert result.failed is False
        assert [c.category for c in result.findings] == ["Definitions"]

    @pytest.mark.asyncio
    async def test_should_report_failure_on_parse_error(self, mock_gateway) -> None:
        mock_gateway.analyze_document.side_effect = LLMParseError("bad output")

        result = await PrimaryAnalysisStage(mock_gateway).run("text", "gpt-4")

        assert result.failed is True

    @pytest.mark.asyncio
    async def test_should_distinguish_empty_result_from_failure(self, mock_gateway) -> None:
        mock_gateway.analyze_document.return_value = []

        result = await PrimaryAnalysisStage(mock_gateway).run("text", "gpt-4")

        assert result.failed is False
        assert result.findings == []

    @pytest.mark.asyncio
    async def test_should_propagate_configuration_error(self, mock_gateway) -> None:
        mock_gateway.analyze_document.side_effect = ConfigurationError("not configured")

        with pytest.raises(ConfigurationError):
            await PrimaryAnalysisStage(mock_gateway).run("text", "gpt-4")
