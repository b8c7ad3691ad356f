"""
Scholarship Offer Factors

Attributes of the offer itself rather than of the student's fit:
deadline urgency, award amount, prestige of the awarding institution,
and the flat renewable/featured bonuses.
"""

import logging

from app.domain.scoring.interfaces import (
    BaseScoringFactor,
    Scholarship,
    ScoringContext,
    StudentProfile,
)
from app.domain.scoring.label_classifier import days_until


logger = logging.getLogger(__name__)


class DeadlineUrgencyFactor(BaseScoringFactor):
    """
    Deadline urgency.

    Weight: 5%

    Time-sensitive rather than a fit signal: closer deadlines score higher.
    """

    @property
    def name(self) -> str:
        return "deadlineUrgency"

    @property
    def base_weight(self) -> float:
        return 0.05

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        days = days_until(scholarship.application_deadline, context.now)

        if days <= 7:
            return 100.0
        if days <= 30:
            return 80.0
        if days <= 90:
            return 60.0
        return 40.0


class AmountScoreFactor(BaseScoringFactor):
    """
    Award amount tiers.

    Weight: 8%

    Not evaluable for variable (unspecified) amounts.
    """

    # (minimum amount, score), highest tier first
    TIERS = (
        (50000, 100.0),
        (25000, 80.0),
        (10000, 60.0),
        (5000, 40.0),
    )
    FLOOR_SCORE = 20.0

    @property
    def name(self) -> str:
        return "amountScore"

    @property
    def base_weight(self) -> float:
        return 0.08

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        if not scholarship.amount:
            return 0.0

        for minimum, score in self.TIERS:
            if scholarship.amount >= minimum:
                return score
        return self.FLOOR_SCORE


class InstitutionPrestigeFactor(BaseScoringFactor):
    """
    Prestige of the institution offering the scholarship.

    Weight: 7%

    Base 50, plus a global ranking tier bonus (up to +30) and a founding
    age bonus (up to +10). Falls back to the neutral 50 when the
    institution is unknown or the lookup fails.
    """

    NEUTRAL_SCORE = 50.0

    # (maximum global rank, bonus)
    RANKING_TIERS = (
        (50, 30),
        (100, 25),
        (200, 20),
        (500, 15),
    )
    UNRANKED_TIER_BONUS = 10

    @property
    def name(self) -> str:
        return "institutionPrestige"

    @property
    def base_weight(self) -> float:
        return 0.07

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        if not scholarship.institution_id or context.institution_lookup is None:
            return self.NEUTRAL_SCORE

        try:
            institution = context.institution_lookup.get_institution(
                scholarship.institution_id
            )
        except Exception as e:
            logger.warning(
                "Prestige lookup failed for institution %s, using neutral score: %s",
                scholarship.institution_id,
                e,
            )
            return self.NEUTRAL_SCORE

        if institution is None:
            return self.NEUTRAL_SCORE

        score = self.NEUTRAL_SCORE

        if institution.ranking_global:
            score += self._ranking_bonus(institution.ranking_global)

        if institution.established_year:
            age = context.today.year - institution.established_year
            if age >= 100:
                score += 10
            elif age >= 50:
                score += 5

        return min(score, 100.0)

    def _ranking_bonus(self, ranking: int) -> int:
        for max_rank, bonus in self.RANKING_TIERS:
            if ranking <= max_rank:
                return bonus
        return self.UNRANKED_TIER_BONUS


class RenewabilityBonusFactor(BaseScoringFactor):
    """Flat +15 for renewable scholarships, added after normalization."""

    BONUS = 15.0

    @property
    def name(self) -> str:
        return "renewabilityBonus"

    @property
    def base_weight(self) -> float:
        return 0.03

    @property
    def is_bonus(self) -> bool:
        return True

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        return self.BONUS if scholarship.renewable else 0.0


class FeaturedBonusFactor(BaseScoringFactor):
    """Flat +10 for featured scholarships, added after normalization."""

    BONUS = 10.0

    @property
    def name(self) -> str:
        return "featuredBonus"

    @property
    def base_weight(self) -> float:
        return 0.02

    @property
    def is_bonus(self) -> bool:
        return True

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        return self.BONUS if scholarship.is_featured else 0.0
