"""
Recommendation Service

Orchestrates one recommendation request: load the subject and the
candidate pool, score every pair, rank, and wrap the results with
request metadata. Loading failures abort the request; a candidate that
cannot be mapped or scored is logged and skipped.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from app.config.settings import Settings, get_settings
from app.domain.scoring import (
    CandidateDirection,
    MatchResult,
    MatchScorer,
    ScholarshipDirection,
    ScoringContext,
    SimilarityStrategy,
)
from app.domain.scoring.records import (
    InstitutionDirectory,
    institution_profile_from_row,
    institution_record_from_row,
    scholarship_from_row,
    student_candidate_from_row,
    student_profile_from_row,
)
from app.infrastructure.db.recommendation_repository import RecommendationRepository
from app.infrastructure.exceptions import (
    NotFoundError,
    RecommendationError,
    ScholarMatchError,
    SubjectNotFoundError,
    ValidationError,
)


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _map_rows(rows: List[Dict[str, Any]], mapper: Callable[[Dict[str, Any]], Any], kind: str) -> List[Any]:
    """Map rows to records, dropping the ones that cannot be read."""
    records = []
    for row in rows:
        try:
            records.append(mapper(row))
        except Exception:
            logger.exception("Skipping unreadable %s row %s", kind, row.get("id"))
    return records


class RecommendationService:
    """
    Service producing scholarship and candidate recommendations.

    Handles:
    - Scholarship recommendations for a student
    - Candidate recommendations for an institution
    - Best-effort recommendation history
    """

    def __init__(
        self,
        repository: RecommendationRepository,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
        similarity: Optional[SimilarityStrategy] = None,
    ):
        self._repository = repository
        self._settings = settings or get_settings()
        self._clock = clock or _utc_now
        self._scholarship_scorer = MatchScorer(ScholarshipDirection(similarity))
        self._candidate_scorer = MatchScorer(CandidateDirection(similarity))

    def _validate(self, subject_id: str, limit: int, min_score: float) -> None:
        if not subject_id or not subject_id.strip():
            raise ValidationError("subjectId is required")
        if limit < 1:
            raise ValidationError("candidateLimit must be a positive integer")
        if not 0 <= min_score <= 100:
            raise ValidationError("minScore must be between 0 and 100")

    @staticmethod
    def _envelope(
        results: List[MatchResult],
        considered: int,
        now: datetime,
        **extra: Any,
    ) -> Dict[str, Any]:
        average = (
            sum(r.match_score for r in results) / len(results) if results else 0.0
        )
        metadata = {
            "totalCandidatesConsidered": considered,
            "recommendationsGenerated": len(results),
            "averageScore": round(average, 2),
            "generatedAt": now.isoformat(),
        }
        metadata.update(extra)
        return {
            "success": True,
            "data": [r.to_dict() for r in results],
            "metadata": metadata,
        }

    async def recommend_scholarships(
        self,
        subject_id: str,
        limit: Optional[int] = None,
        min_score: Optional[float] = None,
        scholarship_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Rank active scholarships for a student.

        Args:
            subject_id: The student's profile id
            limit: Maximum number of results
            min_score: Minimum match score to include
            scholarship_id: Restrict scoring to this scholarship

        Raises:
            SubjectNotFoundError: No student profile for ``subject_id``
            DatabaseError: Subject or scholarships could not be loaded
        """
        limit = limit if limit is not None else self._settings.scholarship_default_limit
        if min_score is None:
            min_score = self._settings.scholarship_min_score
        self._validate(subject_id, limit, min_score)

        try:
            now = self._clock()

            profile = await self._repository.get_profile(subject_id)
            if not profile or profile.get("user_type") != "student":
                raise SubjectNotFoundError(
                    f"Student profile not found for {subject_id}",
                    operation="select",
                    table="profiles",
                )

            student_row = await self._repository.get_student_profile(subject_id)
            student = student_profile_from_row(subject_id, student_row or {})

            rows = await self._repository.get_active_scholarships(now.date(), scholarship_id)
            scholarships = _map_rows(rows, scholarship_from_row, "scholarship")

            directory = await self._load_institutions(
                s.institution_id for s in scholarships
            )
            context = ScoringContext(now=now, institution_lookup=directory)

            results = await asyncio.to_thread(
                self._scholarship_scorer.select_recommendations,
                student,
                scholarships,
                context,
                limit=limit,
                min_score=min_score,
                budget_seconds=self._settings.scoring_batch_timeout_seconds,
            )

            response = self._envelope(results, len(rows), now)

            if self._settings.save_recommendation_history:
                await self._repository.save_recommendation_history(
                    subject_id, response["data"], self._settings.algorithm_version
                )

            logger.info(
                "Generated %d scholarship recommendations for %s from %d scholarships",
                len(results),
                subject_id,
                len(rows),
            )
            return response

        except ScholarMatchError:
            raise
        except Exception as e:
            logger.exception("Scholarship recommendation failed for %s", subject_id)
            raise RecommendationError(
                f"Scholarship recommendation failed: {str(e)}",
                original_error=e,
                code="ML_RECOMMENDATION_ERROR",
            )

    async def recommend_candidates(
        self,
        subject_id: str,
        limit: Optional[int] = None,
        min_score: Optional[float] = None,
        scholarship_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Rank student candidates for an institution.

        Args:
            subject_id: The institution's profile id
            limit: Maximum number of results
            min_score: Minimum match score to include
            scholarship_id: Scholarship the candidates are sought for

        Raises:
            SubjectNotFoundError: No institution profile for ``subject_id``
            NotFoundError: ``scholarship_id`` does not exist
            DatabaseError: Subject or candidates could not be loaded
        """
        limit = limit if limit is not None else self._settings.candidate_default_limit
        if min_score is None:
            min_score = self._settings.candidate_min_score
        self._validate(subject_id, limit, min_score)

        try:
            now = self._clock()

            institution_row = await self._repository.get_institution_profile(subject_id)
            if not institution_row:
                raise SubjectNotFoundError(
                    f"Institution profile not found for {subject_id}",
                    operation="select",
                    table="institution_profiles",
                )
            institution = institution_profile_from_row(subject_id, institution_row)

            extra: Dict[str, Any] = {"institutionName": institution.institution_name}
            if scholarship_id:
                scholarship = await self._repository.get_scholarship(scholarship_id)
                if not scholarship:
                    raise NotFoundError(
                        f"Scholarship {scholarship_id} not found",
                        operation="select",
                        table="scholarships",
                    )
                extra["scholarshipId"] = scholarship_id
                extra["scholarshipTitle"] = scholarship.get("title")

            rows = await self._repository.get_student_candidates()
            candidates = _map_rows(rows, student_candidate_from_row, "student candidate")

            context = ScoringContext(now=now)
            results = await asyncio.to_thread(
                self._candidate_scorer.select_recommendations,
                institution,
                candidates,
                context,
                limit=limit,
                min_score=min_score,
                budget_seconds=self._settings.scoring_batch_timeout_seconds,
            )

            logger.info(
                "Generated %d candidate recommendations for %s from %d students",
                len(results),
                institution.institution_name,
                len(rows),
            )
            return self._envelope(results, len(rows), now, **extra)

        except ScholarMatchError:
            raise
        except Exception as e:
            logger.exception("Candidate recommendation failed for %s", subject_id)
            raise RecommendationError(
                f"Candidate recommendation failed: {str(e)}",
                original_error=e,
                code="CANDIDATE_RECOMMENDATION_ERROR",
            )

    async def _load_institutions(self, institution_ids) -> InstitutionDirectory:
        """
        Preload institutions for prestige scoring.

        A failed load degrades every prestige score to neutral instead of
        failing the request.
        """
        try:
            rows = await self._repository.get_institutions(institution_ids)
        except Exception as e:
            logger.warning(f"Institution lookup failed, prestige scores will be neutral: {e}")
            return InstitutionDirectory()

        return InstitutionDirectory(
            _map_rows(rows, institution_record_from_row, "institution")
        )
