"""
Unit tests for the match scorer pipeline.

Tests aggregation (skip-zero normalization, flat bonuses, clamping),
per-pair scoring in both directions, ranking and batch behavior.
"""

from unittest.mock import patch

import pytest

from app.domain.scoring import (
    CandidateDirection,
    ConfidenceLevel,
    MatchScorer,
    RiskLevel,
    ScholarshipDirection,
    StudentProfile,
    UrgencyLevel,
    aggregate_factor_scores,
)
from app.infrastructure.exceptions import ScoringTimeoutError


@pytest.fixture
def scholarship_scorer():
    return MatchScorer(ScholarshipDirection())


@pytest.fixture
def candidate_scorer():
    return MatchScorer(CandidateDirection())


# ============== Aggregation ==============

class TestAggregateFactorScores:

    def test_zero_factors_are_excluded(self):
        weights = {"a": 0.5, "b": 0.5}
        assert aggregate_factor_scores({"a": 80.0, "b": 0.0}, weights) == pytest.approx(80.0)

    def test_normalizes_by_included_weights(self):
        weights = {"a": 0.25, "b": 0.15, "c": 0.60}
        score = aggregate_factor_scores({"a": 100.0, "b": 50.0, "c": 0.0}, weights)
        assert score == pytest.approx((25.0 + 7.5) / 0.40)

    def test_bonuses_added_after_normalization(self):
        weights = {"a": 0.5, "bonus": 0.03}
        score = aggregate_factor_scores({"a": 60.0, "bonus": 15.0}, weights, {"bonus"})
        assert score == pytest.approx(75.0)

    def test_clamped_to_100(self):
        weights = {"a": 1.0, "r": 0.03, "f": 0.02}
        score = aggregate_factor_scores({"a": 95.0, "r": 15.0, "f": 10.0}, weights, {"r", "f"})
        assert score == 100.0

    def test_insufficient_data_scores_zero(self):
        weights = {"a": 0.5, "bonus": 0.03}
        assert aggregate_factor_scores({"a": 0.0, "bonus": 15.0}, weights, {"bonus"}) == 0.0

    def test_missing_factor_counts_as_unevaluable(self):
        assert aggregate_factor_scores({}, {"a": 1.0}) == 0.0


# ============== Scholarship Direction ==============

class TestScholarshipScoring:

    def test_direction_weights(self):
        direction = ScholarshipDirection()
        assert len(direction.factors) == 15
        assert direction.weights["fieldMatch"] == 0.25
        assert direction.weights["levelMatch"] == 0.20
        assert direction.weights["institutionPrestige"] == 0.07
        assert direction.bonus_factors == {"renewabilityBonus", "featuredBonus"}

    def test_strong_match(self, scholarship_scorer, cs_student, masters_scholarship, context):
        result = scholarship_scorer.score_pair(cs_student, masters_scholarship, context)

        assert result.factors["fieldMatch"] == 100.0
        assert result.factors["levelMatch"] == 100.0
        assert result.factors["gpaMatch"] == pytest.approx(98.0)
        assert result.factors["countryMatch"] == 0.0
        assert result.factors["nationalityMatch"] == 80.0
        assert result.factors["ageMatch"] == 80.0
        assert result.factors["languageMatch"] == 80.0
        assert result.factors["amountScore"] == 80.0

        assert result.match_score > 85
        assert result.match_score == pytest.approx(89.14, abs=0.01)
        assert result.confidence_level == ConfidenceLevel.HIGH
        assert result.urgency_level == UrgencyLevel.HIGH

    def test_low_gpa_scores_below_missing_gpa(self, scholarship_scorer, make_scholarship, context):
        scholarship = make_scholarship(min_gpa=3.5)
        low_gpa = StudentProfile(id="low", gpa=2.5)
        no_gpa = StudentProfile(id="none")

        low = scholarship_scorer.score_pair(low_gpa, scholarship, context)
        missing = scholarship_scorer.score_pair(no_gpa, scholarship, context)

        assert low.factors["gpaMatch"] == pytest.approx(42.86, abs=0.01)
        assert missing.factors["gpaMatch"] == 0.0
        assert low.match_score < missing.match_score

    def test_fully_open_match(self, scholarship_scorer, empty_student, make_scholarship, context):
        result = scholarship_scorer.score_pair(empty_student, make_scholarship(), context)

        # nationality, gpa, age, language at 80; deadline 40; prestige 50
        assert result.match_score == pytest.approx(72.12, abs=0.01)
        assert 70 <= result.match_score <= 85

    def test_bonuses_raise_score(self, scholarship_scorer, empty_student, make_scholarship, context):
        plain = scholarship_scorer.score_pair(empty_student, make_scholarship(), context)
        boosted = scholarship_scorer.score_pair(
            empty_student, make_scholarship(renewable=True, is_featured=True), context
        )
        assert boosted.match_score == pytest.approx(min(plain.match_score + 25, 100), abs=0.01)

    def test_more_matching_field_never_lowers_score(
        self, scholarship_scorer, make_scholarship, context
    ):
        scholarship = make_scholarship(study_fields=["Computer Science", "Biology"])
        partial = StudentProfile(id="a", field_of_study="Physics")
        full = StudentProfile(id="b", field_of_study="Computer Science")

        partial_result = scholarship_scorer.score_pair(partial, scholarship, context)
        full_result = scholarship_scorer.score_pair(full, scholarship, context)

        assert full_result.match_score >= partial_result.match_score

    def test_higher_gpa_never_lowers_score(self, scholarship_scorer, make_scholarship, context):
        scholarship = make_scholarship(
            study_fields=["Computer Science"],
            min_gpa=2.0,
            eligibility_criteria="Minimum GPA of 2.0 and a strong academic record",
        )
        gpas = [2.0 + step * 0.1 for step in range(21)]

        results = [
            scholarship_scorer.score_pair(
                StudentProfile(
                    id="student-gpa",
                    field_of_study="Computer Science",
                    gpa=gpa,
                    academic_achievements="Dean's list",
                ),
                scholarship,
                context,
            )
            for gpa in gpas
        ]

        for lower, higher in zip(results, results[1:]):
            assert higher.factors["gpaMatch"] >= lower.factors["gpaMatch"]
            assert higher.factors["eligibilityMatch"] >= lower.factors["eligibilityMatch"]
            assert higher.match_score >= lower.match_score
        # both eligibility GPA tiers are crossed
        assert results[-1].factors["eligibilityMatch"] == results[0].factors["eligibilityMatch"] + 20

    def test_result_bounds(self, scholarship_scorer, cs_student, make_scholarship, context):
        scholarship = make_scholarship(
            days_left=3,
            study_fields=["Computer Science"],
            study_level="Master",
            amount=80000,
            renewable=True,
            is_featured=True,
            institution_id="inst-top",
        )
        result = scholarship_scorer.score_pair(cs_student, scholarship, context)

        assert 0 <= result.match_score <= 100
        assert all(0 <= value <= 100 for value in result.factors.values())
        assert 2 <= len(result.reasons) <= 5

    def test_to_dict_shape(self, scholarship_scorer, cs_student, masters_scholarship, context):
        data = scholarship_scorer.score_pair(cs_student, masters_scholarship, context).to_dict()

        assert data["candidateId"] == "sch-masters"
        assert data["subjectId"] == "student-1"
        assert data["confidenceLevel"] == "high"
        assert data["urgencyLevel"] == "high"
        assert data["generatedAt"] == context.now.isoformat()
        assert data["scholarshipData"]["title"] == "Scholarship sch-masters"
        assert "riskAssessment" not in data


# ============== Candidate Direction ==============

class TestCandidateScoring:

    def test_direction_weights(self):
        direction = CandidateDirection()
        assert len(direction.factors) == 12
        assert direction.weights["academicExcellence"] == 0.25
        assert direction.bonus_factors == set()

    def test_strong_candidate(self, candidate_scorer, institution, strong_candidate, context):
        result = candidate_scorer.score_pair(institution, strong_candidate, context)

        assert result.match_score >= 70
        assert result.risk_assessment == RiskLevel.LOW
        assert result.fit_analysis.startswith("Candidate with academic excellence")
        assert 2 <= len(result.reasons) <= 6
        assert result.to_dict()["candidateData"]["fullName"] == "Amina Diallo"

    def test_sparse_candidate_not_zeroed(self, candidate_scorer, institution, sparse_candidate, context):
        result = candidate_scorer.score_pair(institution, sparse_candidate, context)

        # Only the baseline factors are evaluable
        assert result.match_score == pytest.approx(39.6, abs=0.01)
        assert result.risk_assessment == RiskLevel.HIGH


# ============== Ranking & Batches ==============

class TestSelectRecommendations:

    def test_filters_sorts_and_limits(self, scholarship_scorer, cs_student, make_scholarship, context):
        scholarships = [
            make_scholarship(id="b-open"),
            make_scholarship(id="a-open"),
            make_scholarship(
                id="c-best",
                days_left=10,
                study_fields=["Computer Science"],
                study_level="Master",
                amount=30000,
            ),
            make_scholarship(id="d-closed", target_nationalities=["Mars"], study_level="PhD"),
        ]

        results = scholarship_scorer.select_recommendations(
            cs_student, scholarships, context, limit=2, min_score=60
        )

        assert [r.candidate_id for r in results] == ["c-best", "a-open"]
        assert all(r.match_score >= 60 for r in results)

    def test_ties_ordered_by_id(self, scholarship_scorer, empty_student, make_scholarship, context):
        scholarships = [make_scholarship(id=i) for i in ("s3", "s1", "s2")]
        results = scholarship_scorer.select_recommendations(
            empty_student, scholarships, context, limit=10, min_score=0
        )
        assert [r.candidate_id for r in results] == ["s1", "s2", "s3"]

    def test_min_score_above_everything(self, scholarship_scorer, empty_student, make_scholarship, context):
        results = scholarship_scorer.select_recommendations(
            empty_student, [make_scholarship()], context, limit=10, min_score=99
        )
        assert results == []

    def test_idempotent(self, scholarship_scorer, cs_student, make_scholarship, masters_scholarship, context):
        scholarships = [masters_scholarship, make_scholarship(id="x"), make_scholarship(id="y")]

        first = scholarship_scorer.select_recommendations(
            cs_student, scholarships, context, limit=5, min_score=0
        )
        second = scholarship_scorer.select_recommendations(
            cs_student, scholarships, context, limit=5, min_score=0
        )

        assert [r.to_dict() for r in first] == [r.to_dict() for r in second]

    def test_failing_candidate_is_skipped(
        self, scholarship_scorer, cs_student, make_scholarship, context, caplog
    ):
        broken = make_scholarship(id="broken", application_deadline=None)
        good = make_scholarship(id="good")

        results = scholarship_scorer.score_all(cs_student, [broken, good], context)

        assert [r.candidate_id for r in results] == ["good"]
        assert "broken" in caplog.text

    def test_batch_timeout(self, scholarship_scorer, empty_student, make_scholarship, context):
        scholarships = [make_scholarship(id=f"s{i}") for i in range(3)]

        with patch("app.domain.scoring.match_scorer.time") as mock_time:
            mock_time.monotonic.side_effect = [0.0, 0.0, 5.0]
            with pytest.raises(ScoringTimeoutError) as exc_info:
                scholarship_scorer.score_all(
                    empty_student, scholarships, context, budget_seconds=1.0
                )

        assert exc_info.value.details["scored_count"] == 1
        assert exc_info.value.code == "SCORING_TIMEOUT"
