"""
Test suite for FindingCandidate construction from raw model output.

System role: Verification of lenient parsing and field defaults
"""

import pytest

from legalai.boundary.db.models import Severity, VerificationStatus
from legalai.core.redline.models import (
    FindingCandidate,
    FindingLocation,
    normalize_score,
    normalize_severity,
)


class TestNormalizeSeverity:
    """Test suite for normalize_severity()."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("High", "High"),
            ("high", "High"),
            (" MEDIUM ", "Medium"),
            ("low", "Low"),
            (None, "Medium"),
            ("", "Medium"),
        ],
    )
    def test_should_canonicalise_known_labels(self, raw, expected) -> None:
        assert normalize_severity(raw) == expected

    def test_should_keep_unknown_label_unchanged(self) -> None:
        assert normalize_severity("Critical") == "Critical"


class TestNormalizeScore:
    """Test suite for normalize_score()."""

    @pytest.mark.parametrize("raw", [None, 0, "", "not a number"])
    def test_should_default_missing_or_falsy_score_to_50(self, raw) -> None:
        assert normalize_score(raw) == 50

    def test_should_clamp_out_of_range_scores(self) -> None:
        assert normalize_score(150) == 100
        assert normalize_score(-5) == 0

    def test_should_accept_numeric_strings(self) -> None:
        assert normalize_score("72") == 72


class TestFindingCandidateFromRaw:
    """Test suite for FindingCandidate.from_raw()."""

    def test_from_raw_should_map_all_fields(self) -> None:
        # Arrange
        raw = {
            "severity": "High",
            "category": "Liability Cap",
            "location": {"page": 2, "start_offset": 120, "end_offset": 180},
            "evidence": "liable for damages exceeding EUR 10,000",
            "policy_reference": "Liability Policy 4.2",
            "rationale": "Cap is far below contract value.",
            "proposed_rewrite": "Liability is capped at 12 months of fees.",
            "score": 85,
        }

        # Act
        candidate = FindingCandidate.from_raw(raw)

        # Assert
        assert candidate.severity == "High"
        assert candidate.severity_level == Severity.HIGH
        assert candidate.score == 85
        assert candidate.category == "Liability Cap"
        assert candidate.location == FindingLocation(page=2, start_offset=120, end_offset=180)
        assert candidate.policy_reference == "Liability Policy 4.2"
        assert candidate.proposed_rewrite == "Liability is capped at 12 months of fees."
        assert candidate.verification_status == VerificationStatus.UNVERIFIED
        assert candidate.verifier_notes is None

    def test_from_raw_should_apply_defaults_for_missing_fields(self) -> None:
        # Act
        candidate = FindingCandidate.from_raw({})

        # Assert
        assert candidate.severity == "Medium"
        assert candidate.score == 50
        assert candidate.category == "General"
        assert candidate.evidence == ""
        assert candidate.policy_reference == "No specific policy"
        assert candidate.proposed_rewrite is None
        assert candidate.location == FindingLocation()

    def test_from_raw_should_truncate_evidence(self) -> None:
        # Arrange
        raw = {"evidence": "x" * 500}

        # Act
        candidate = FindingCandidate.from_raw(raw, evidence_max_chars=200)

        # Assert
        assert len(candidate.evidence) == 200

    def test_from_raw_should_ignore_malformed_location(self) -> None:
        # Act
        candidate = FindingCandidate.from_raw({"location": "page 3"})

        # Assert
        assert candidate.location.page is None
        assert candidate.location.start_offset is None

    @pytest.mark.parametrize(
        "page", [float("inf"), float("-inf"), float("nan"), 10**20, 2**31, -(2**31) - 1]
    )
    def test_from_raw_should_drop_location_values_outside_integer_range(self, page) -> None:
        # Act
        candidate = FindingCandidate.from_raw(
            {"category": "Liability Cap", "location": {"page": page, "start_offset": 12}}
        )

        # Assert
        assert candidate.category == "Liability Cap"
        assert candidate.location.page is None
        assert candidate.location.start_offset == 12

    def test_from_raw_should_keep_location_values_at_integer_bounds(self) -> None:
        candidate = FindingCandidate.from_raw(
            {"location": {"page": 2**31 - 1, "start_offset": -(2**31), "end_offset": 4.0}}
        )

        assert candidate.location.page == 2**31 - 1
        assert candidate.location.start_offset == -(2**31)
        assert candidate.location.end_offset == 4

    def test_unknown_severity_should_persist_as_low(self) -> None:
        # Act
        candidate = FindingCandidate.from_raw({"severity": "Critical"})

        # Assert
        assert candidate.severity == "Critical"
        assert candidate.severity_level == Severity.LOW


class TestWithVerification:
    """Test suite for FindingCandidate.with_verification()."""

    def test_should_return_copy_and_leave_original_untouched(self, make_candidate) -> None:
        # Arrange
        original = make_candidate()

        # Act
        verified = original.with_verification(VerificationStatus.VERIFIED_SAFE, "Standard clause")

        # Assert
        assert verified.verification_status == VerificationStatus.VERIFIED_SAFE
        assert verified.verifier_notes == "Standard clause"
        assert original.verification_status == VerificationStatus.UNVERIFIED
        assert original.verifier_notes is None
        assert verified.category == original.category
