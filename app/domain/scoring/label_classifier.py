"""
Label Classifier

Derives categorical labels attached to match results.
Labels come from raw values, not from factor scores: urgency uses the
deadline itself and risk uses the candidate's missing data.
"""

import math
from datetime import date, datetime, time

from app.domain.scoring.interfaces import (
    ConfidenceLevel,
    RiskLevel,
    StudentProfile,
    UrgencyLevel,
)


SECONDS_PER_DAY = 24 * 60 * 60


def days_until(deadline: date, now: datetime) -> int:
    """
    Whole days left before the deadline, rounded up.

    The deadline is taken as the start of its day in ``now``'s timezone.
    Past deadlines yield zero or negative values.
    """
    deadline_start = datetime.combine(deadline, time.min, tzinfo=now.tzinfo)
    seconds = (deadline_start - now).total_seconds()
    return math.ceil(seconds / SECONDS_PER_DAY)


class LabelClassifier:
    """
    Match result label classifier.

    - Confidence: high >= 85, medium >= 70, else low (overall score)
    - Urgency: high <= 14 days, medium <= 45 days, else low (deadline)
    - Risk: missing-data penalty points, low <= 20, medium <= 40, else high
    """

    HIGH_CONFIDENCE_SCORE = 85.0
    MEDIUM_CONFIDENCE_SCORE = 70.0

    HIGH_URGENCY_DAYS = 14
    MEDIUM_URGENCY_DAYS = 45

    LOW_RISK_POINTS = 20
    MEDIUM_RISK_POINTS = 40

    def confidence(self, match_score: float) -> ConfidenceLevel:
        if match_score >= self.HIGH_CONFIDENCE_SCORE:
            return ConfidenceLevel.HIGH
        if match_score >= self.MEDIUM_CONFIDENCE_SCORE:
            return ConfidenceLevel.MEDIUM
        return ConfidenceLevel.LOW

    def urgency(self, deadline: date, now: datetime) -> UrgencyLevel:
        return self.urgency_for_days(days_until(deadline, now))

    def urgency_for_days(self, days_remaining: int) -> UrgencyLevel:
        if days_remaining <= self.HIGH_URGENCY_DAYS:
            return UrgencyLevel.HIGH
        if days_remaining <= self.MEDIUM_URGENCY_DAYS:
            return UrgencyLevel.MEDIUM
        return UrgencyLevel.LOW

    def risk_points(self, student: StudentProfile) -> int:
        """Accumulate penalty points for weak or missing candidate data."""
        points = 0
        if student.gpa is None or student.gpa < 3.0:
            points += 30
        if not student.academic_achievements:
            points += 20
        if not student.work_experience:
            points += 15
        if not student.languages_spoken or len(student.languages_spoken) < 2:
            points += 10
        return points

    def risk(self, student: StudentProfile) -> RiskLevel:
        points = self.risk_points(student)
        if points <= self.LOW_RISK_POINTS:
            return RiskLevel.LOW
        if points <= self.MEDIUM_RISK_POINTS:
            return RiskLevel.MEDIUM
        return RiskLevel.HIGH
