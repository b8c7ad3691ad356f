"""
Match Scorer

Central scoring engine that aggregates all factor scores.
One pipeline serves both directions: factors -> weighted score ->
explanation -> ranking. Factors scoring 0 could not be evaluated and are
left out of the weighted average entirely, so missing profile data never
counts as a failed criterion.
"""

import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Set

from app.domain.scoring.directions import ScoringDirection
from app.domain.scoring.interfaces import MatchResult, ScoringContext
from app.infrastructure.exceptions import ScoringTimeoutError


logger = logging.getLogger(__name__)


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def aggregate_factor_scores(
    factors: Dict[str, float],
    weights: Dict[str, float],
    bonus_factors: Optional[Set[str]] = None,
) -> float:
    """
    Combine factor scores into one 0-100 match score.

    Only factors with a positive score enter the weighted average, and
    the average is divided by the weights of those factors alone. Bonus
    factors are added flat on top of the normalized average. With no
    evaluable factor at all the score is 0 (insufficient data).
    """
    bonus_factors = bonus_factors or set()

    total_score = 0.0
    total_weight = 0.0
    for name, weight in weights.items():
        if name in bonus_factors:
            continue
        value = factors.get(name, 0.0)
        if value > 0:
            total_score += value * weight
            total_weight += weight

    if total_weight == 0:
        return 0.0

    bonus = sum(factors.get(name, 0.0) for name in bonus_factors)
    return _clamp(total_score / total_weight + bonus)


class MatchScorer:
    """
    Match scoring engine.

    Follows Single Responsibility - only calculates and ranks scores.
    Uses Strategy pattern for the direction (factor set, weights, labels).
    """

    def __init__(self, direction: ScoringDirection):
        self._direction = direction

    @property
    def direction(self) -> ScoringDirection:
        return self._direction

    def score_pair(
        self,
        subject: Any,
        target: Any,
        context: ScoringContext,
    ) -> MatchResult:
        """
        Score a single candidate for the subject.

        Returns:
            MatchResult with score, factor breakdown, reasons and labels
        """
        factor_scores: Dict[str, float] = {}
        for factor in self._direction.factors:
            factor_scores[factor.name] = _clamp(factor.calculate(subject, target, context))

        match_score = aggregate_factor_scores(
            factor_scores,
            self._direction.weights,
            self._direction.bonus_factors,
        )

        result = MatchResult(
            candidate_id=target.id,
            subject_id=subject.id,
            match_score=round(match_score, 2),
            factors=factor_scores,
            reasons=[],
            generated_at=context.now,
        )
        return self._direction.annotate(result, subject, target, context)

    def score_all(
        self,
        subject: Any,
        targets: Iterable[Any],
        context: ScoringContext,
        budget_seconds: Optional[float] = None,
    ) -> List[MatchResult]:
        """
        Score every candidate, skipping the ones that fail.

        Raises:
            ScoringTimeoutError: the batch ran past ``budget_seconds``
        """
        started = time.monotonic()
        results: List[MatchResult] = []

        for target in targets:
            if budget_seconds is not None and time.monotonic() - started > budget_seconds:
                raise ScoringTimeoutError(
                    f"Scoring exceeded {budget_seconds}s budget",
                    budget_seconds=budget_seconds,
                    scored_count=len(results),
                )

            try:
                results.append(self.score_pair(subject, target, context))
            except Exception:
                logger.exception(
                    "Skipping %s candidate %s after scoring error",
                    self._direction.name,
                    getattr(target, "id", "<unknown>"),
                )

        return results

    def select_recommendations(
        self,
        subject: Any,
        targets: Iterable[Any],
        context: ScoringContext,
        limit: int,
        min_score: float,
        budget_seconds: Optional[float] = None,
    ) -> List[MatchResult]:
        """
        Select the best matches for the subject.

        Keeps matches scoring at least ``min_score``, sorted by descending
        score (ties by candidate id), truncated to ``limit``.
        """
        scored = self.score_all(subject, targets, context, budget_seconds)
        return self.rank(scored, limit, min_score)

    @staticmethod
    def rank(
        results: Iterable[MatchResult],
        limit: int,
        min_score: float,
    ) -> List[MatchResult]:
        viable = [r for r in results if r.match_score >= min_score]
        viable.sort(key=lambda r: (-r.match_score, r.candidate_id))
        return viable[: max(limit, 0)]
