"""
Unit tests for match reasons, fit analysis and potential contribution.
"""

import pytest

from app.domain.scoring import ReasonGenerator
from app.domain.scoring.explanations import (
    CANDIDATE_FALLBACK_REASONS,
    SCHOLARSHIP_FALLBACK_REASONS,
)


@pytest.fixture
def reasons():
    return ReasonGenerator()


class TestScholarshipReasons:

    def test_fallbacks_when_nothing_stands_out(self, reasons, make_scholarship):
        result = reasons.scholarship_reasons({}, make_scholarship())
        assert result == SCHOLARSHIP_FALLBACK_REASONS

    def test_single_reason_is_padded(self, reasons, make_scholarship):
        result = reasons.scholarship_reasons({"fieldMatch": 100.0}, make_scholarship())
        assert result == [
            "Field of study is a perfect match",
            SCHOLARSHIP_FALLBACK_REASONS[0],
        ]

    def test_priority_order_and_cap(self, reasons, make_scholarship):
        factors = {
            "fieldMatch": 100.0,
            "levelMatch": 100.0,
            "countryMatch": 100.0,
            "gpaMatch": 98.0,
            "languageMatch": 80.0,
            "institutionPrestige": 90.0,
            "deadlineUrgency": 100.0,
        }
        scholarship = make_scholarship(amount=30000, renewable=True)

        result = reasons.scholarship_reasons(factors, scholarship)

        assert len(result) == ReasonGenerator.SCHOLARSHIP_MAX_REASONS
        assert result == [
            "Field of study is a perfect match",
            "Ideal study level for your progression",
            "Preferred study destination",
            "Your GPA is well above the requirements",
            "Language skills match",
        ]

    def test_weaker_variants(self, reasons, make_scholarship):
        result = reasons.scholarship_reasons(
            {"fieldMatch": 60.0, "gpaMatch": 75.0}, make_scholarship()
        )
        assert result == ["Compatible field of study", "GPA compatible with the requirements"]


class TestCandidateReasons:

    def test_fallbacks(self, reasons, sparse_candidate):
        assert reasons.candidate_reasons({}, sparse_candidate) == CANDIDATE_FALLBACK_REASONS

    def test_cap_at_six(self, reasons, strong_candidate):
        factors = {
            "academicExcellence": 100.0,
            "fieldAlignment": 100.0,
            "achievementQuality": 95.0,
            "researchCapability": 85.0,
            "leadershipPotential": 90.0,
            "languageCompatibility": 100.0,
            "geographicFit": 100.0,
            "diversityValue": 100.0,
            "experienceRelevance": 80.0,
        }
        result = reasons.candidate_reasons(factors, strong_candidate)

        assert len(result) == ReasonGenerator.CANDIDATE_MAX_REASONS
        assert result[0] == "Exceptional academic excellence (GPA: 3.95)"
        assert "Relevant professional experience" not in result


class TestFitAnalysis:

    def test_strong_points_and_gaps(self, reasons, institution):
        analysis = reasons.fit_analysis(
            {"academicExcellence": 90.0, "fieldAlignment": 100.0, "languageCompatibility": 40.0,
             "experienceRelevance": 80.0},
            institution,
        )
        assert analysis == (
            "Candidate with academic excellence, field alignment. "
            "Could benefit from developing language skills."
        )

    def test_balanced_profile_names_institution(self, reasons, institution):
        analysis = reasons.fit_analysis(
            {"languageCompatibility": 100.0, "experienceRelevance": 70.0}, institution
        )
        assert analysis == "Candidate with a balanced profile for Ecole Polytechnique."


class TestPotentialContribution:

    def test_strong_candidate(self, reasons, strong_candidate):
        contribution = reasons.potential_contribution(strong_candidate)
        assert contribution.startswith("Academic excellence")
        assert "Linguistic and cultural diversity" in contribution
        assert contribution.endswith(".")

    def test_generic_when_nothing_known(self, reasons, sparse_candidate):
        assert reasons.potential_contribution(sparse_candidate) == (
            "Positive contribution to the program expected."
        )
