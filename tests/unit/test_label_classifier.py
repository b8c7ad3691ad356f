"""
Unit tests for confidence, urgency and risk labels.
"""

from datetime import date, datetime, timezone

import pytest

from app.domain.scoring import (
    ConfidenceLevel,
    LabelClassifier,
    RiskLevel,
    StudentCandidate,
    UrgencyLevel,
    days_until,
)


@pytest.fixture
def label_classifier():
    """Label classifier instance."""
    return LabelClassifier()


class TestDaysUntil:

    def test_partial_day_rounds_up(self, now):
        # now is noon on 2026-03-01
        assert days_until(date(2026, 3, 15), now) == 14

    def test_exact_midnight(self):
        midnight = datetime(2026, 3, 1, tzinfo=timezone.utc)
        assert days_until(date(2026, 3, 15), midnight) == 14

    def test_deadline_today_or_past(self, now):
        assert days_until(date(2026, 3, 1), now) == 0
        assert days_until(date(2026, 2, 20), now) < 0


class TestConfidence:

    @pytest.mark.parametrize("score, expected", [
        (100.0, ConfidenceLevel.HIGH),
        (85.0, ConfidenceLevel.HIGH),
        (84.99, ConfidenceLevel.MEDIUM),
        (70.0, ConfidenceLevel.MEDIUM),
        (69.99, ConfidenceLevel.LOW),
        (0.0, ConfidenceLevel.LOW),
    ])
    def test_boundaries(self, label_classifier, score, expected):
        assert label_classifier.confidence(score) == expected


class TestUrgency:

    @pytest.mark.parametrize("days, expected", [
        (0, UrgencyLevel.HIGH),
        (14, UrgencyLevel.HIGH),
        (15, UrgencyLevel.MEDIUM),
        (45, UrgencyLevel.MEDIUM),
        (46, UrgencyLevel.LOW),
    ])
    def test_boundaries(self, label_classifier, days, expected):
        assert label_classifier.urgency_for_days(days) == expected

    def test_from_deadline(self, label_classifier, now):
        assert label_classifier.urgency(date(2026, 3, 15), now) == UrgencyLevel.HIGH
        assert label_classifier.urgency(date(2026, 3, 16), now) == UrgencyLevel.MEDIUM
        assert label_classifier.urgency(date(2026, 4, 15), now) == UrgencyLevel.MEDIUM
        assert label_classifier.urgency(date(2026, 4, 16), now) == UrgencyLevel.LOW


class TestRisk:

    def test_complete_profile_is_low_risk(self, label_classifier, strong_candidate):
        assert label_classifier.risk_points(strong_candidate) == 0
        assert label_classifier.risk(strong_candidate) == RiskLevel.LOW

    def test_empty_profile_is_high_risk(self, label_classifier, sparse_candidate):
        assert label_classifier.risk_points(sparse_candidate) == 75
        assert label_classifier.risk(sparse_candidate) == RiskLevel.HIGH

    @pytest.mark.parametrize("overrides, points, expected", [
        ({"academic_achievements": None}, 20, RiskLevel.LOW),
        ({"gpa": 2.8}, 30, RiskLevel.MEDIUM),
        ({"gpa": None, "languages_spoken": ["French"]}, 40, RiskLevel.MEDIUM),
        ({"gpa": None, "work_experience": None}, 45, RiskLevel.HIGH),
    ])
    def test_point_boundaries(self, label_classifier, overrides, points, expected):
        fields = {
            "id": "c",
            "gpa": 3.5,
            "academic_achievements": "Award",
            "work_experience": "Internship",
            "languages_spoken": ["French", "English"],
        }
        fields.update(overrides)
        student = StudentCandidate(**fields)

        assert label_classifier.risk_points(student) == points
        assert label_classifier.risk(student) == expected
