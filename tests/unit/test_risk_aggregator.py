"""
Test suite for the overall risk score calculation.

System role: Verification of severity-weighted scoring
"""

from legalai.core.redline.risk_aggregator import calculate_overall_risk_score


class TestCalculateOverallRiskScore:
    """Test suite for calculate_overall_risk_score()."""

    def test_should_return_zero_for_no_findings(self) -> None:
        assert calculate_overall_risk_score([]) == 0

    def test_should_weight_high_over_low(self, make_candidate) -> None:
        # Arrange
        findings = [
            make_candidate(severity="High", score=80),
            make_candidate(severity="Low", score=20),
        ]

        # Act
        score = calculate_overall_risk_score(findings)

        # Assert
        assert score == 70

    def test_should_be_order_independent(self, make_candidate) -> None:
        # Arrange
        findings = [
            make_candidate(severity="High", score=90),
            make_candidate(severity="Medium", score=40),
            make_candidate(severity="Low", score=10),
        ]

        # Act / Assert
        assert calculate_overall_risk_score(findings) == calculate_overall_risk_score(
            list(reversed(findings))
        )

    def test_should_weight_unknown_severity_like_low(self, make_candidate) -> None:
        # Arrange
        unknown = [make_candidate(severity="Critical", score=20), make_candidate(severity="High", score=80)]
        low = [make_candidate(severity="Low", score=20), make_candidate(severity="High", score=80)]

        # Act / Assert
        assert calculate_overall_risk_score(unknown) == calculate_overall_risk_score(low)

    def test_should_round_halves_up(self, make_candidate) -> None:
        # Arrange
        findings = [
            make_candidate(severity="High", score=71),
            make_candidate(severity="High", score=70),
        ]

        # Act
        score = calculate_overall_risk_score(findings)

        # Assert
        assert score == 71

    def test_single_finding_should_return_its_score(self, make_candidate) -> None:
        assert calculate_overall_risk_score([make_candidate(severity="Medium", score=45)]) == 45
