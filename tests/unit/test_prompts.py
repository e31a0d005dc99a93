"""
Test suite for redline prompt construction.

System role: Verification of verification prompt contents
"""

from legalai.core.redline.prompts import (
    PRIMARY_ANALYSIS_SYSTEM_PROMPT,
    build_verification_prompt,
)


class TestPrimaryAnalysisPrompt:
    """Test suite for the primary analysis instruction."""

    def test_should_request_findings_array_as_json(self) -> None:
        assert '"findings" array' in PRIMARY_ANALYSIS_SYSTEM_PROMPT
        assert "No specific policy" in PRIMARY_ANALYSIS_SYSTEM_PROMPT
        assert "max 200 chars" in PRIMARY_ANALYSIS_SYSTEM_PROMPT


class TestBuildVerificationPrompt:
    """Test suite for build_verification_prompt()."""

    def test_should_include_finding_fields(self, make_candidate) -> None:
        # Arrange
        candidate = make_candidate(severity="Medium", category="Governing Law")

        # Act
        prompt = build_verification_prompt(candidate, "Contract text")

        # Assert
        assert "Severity: Medium" in prompt
        assert "Category: Governing Law" in prompt
        assert f"Evidence: {candidate.evidence}" in prompt
        assert f"Rationale: {candidate.rationale}" in prompt
        assert "verified_risky" in prompt and "verified_safe" in prompt

    def test_should_include_only_leading_excerpt(self, make_candidate) -> None:
        # Arrange
        document_text = "A" * 1000 + "B" * 500

        # Act
        prompt = build_verification_prompt(make_candidate(), document_text, excerpt_chars=1000)

        # Assert
        assert "A" * 1000 in prompt
        assert "B" not in prompt.split("Original Document Context (excerpt):")[1].split("Verify:")[0]
