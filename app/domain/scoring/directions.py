"""
Scoring Directions

A direction bundles everything that differs between the two scorers:
the factor set (and therefore the weight table), how a scored pair is
labelled and explained, and which candidate fields are echoed back.

- ScholarshipDirection: student subject, scholarship candidates
- CandidateDirection: institution subject, student candidates
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Set

from app.domain.scoring.explanations import ReasonGenerator
from app.domain.scoring.factors import (
    AcademicExcellenceFactor,
    AchievementMatchFactor,
    AchievementQualityFactor,
    AgeMatchFactor,
    AmountScoreFactor,
    CareerPotentialFactor,
    CountryMatchFactor,
    DeadlineUrgencyFactor,
    DiversityValueFactor,
    EligibilityMatchFactor,
    ExperienceMatchFactor,
    ExperienceRelevanceFactor,
    FeaturedBonusFactor,
    FieldAlignmentFactor,
    FieldMatchFactor,
    FinancialNeedFactor,
    GeographicFitFactor,
    GpaMatchFactor,
    InstitutionPrestigeFactor,
    LanguageCompatibilityFactor,
    LanguageMatchFactor,
    LeadershipPotentialFactor,
    LevelMatchFactor,
    MotivationAlignmentFactor,
    NationalityMatchFactor,
    RenewabilityBonusFactor,
    ResearchCapabilityFactor,
)
from app.domain.scoring.interfaces import (
    InstitutionProfile,
    MatchResult,
    Scholarship,
    ScoringContext,
    ScoringFactor,
    SimilarityStrategy,
    StudentCandidate,
    StudentProfile,
)
from app.domain.scoring.label_classifier import LabelClassifier


class ScoringDirection(ABC):
    """Direction-specific strategy plugged into MatchScorer."""

    name: str = ""

    def __init__(
        self,
        factors: Optional[List[ScoringFactor]] = None,
        label_classifier: Optional[LabelClassifier] = None,
        reason_generator: Optional[ReasonGenerator] = None,
    ):
        self._factors = factors or self._default_factors()
        self._labels = label_classifier or LabelClassifier()
        self._reasons = reason_generator or ReasonGenerator()

    @abstractmethod
    def _default_factors(self) -> List[ScoringFactor]:
        pass

    @abstractmethod
    def annotate(
        self,
        result: MatchResult,
        subject: Any,
        target: Any,
        context: ScoringContext,
    ) -> MatchResult:
        """Attach reasons, labels and the candidate summary."""

    @property
    def factors(self) -> List[ScoringFactor]:
        return list(self._factors)

    @property
    def weights(self) -> Dict[str, float]:
        return {f.name: f.base_weight for f in self._factors}

    @property
    def bonus_factors(self) -> Set[str]:
        return {f.name for f in self._factors if f.is_bonus}


class ScholarshipDirection(ScoringDirection):
    """
    Ranks scholarships for one student.

    Results carry a confidence level (from the score) and an urgency
    level (from the deadline).
    """

    name = "scholarship"

    def __init__(
        self,
        similarity: Optional[SimilarityStrategy] = None,
        factors: Optional[List[ScoringFactor]] = None,
        label_classifier: Optional[LabelClassifier] = None,
        reason_generator: Optional[ReasonGenerator] = None,
    ):
        self._similarity = similarity
        super().__init__(
            factors=factors,
            label_classifier=label_classifier,
            reason_generator=reason_generator,
        )

    def _default_factors(self) -> List[ScoringFactor]:
        return [
            FieldMatchFactor(self._similarity),
            LevelMatchFactor(),
            CountryMatchFactor(),
            NationalityMatchFactor(),
            GpaMatchFactor(),
            AgeMatchFactor(),
            LanguageMatchFactor(),
            DeadlineUrgencyFactor(),
            AmountScoreFactor(),
            EligibilityMatchFactor(),
            ExperienceMatchFactor(),
            AchievementMatchFactor(),
            InstitutionPrestigeFactor(),
            RenewabilityBonusFactor(),
            FeaturedBonusFactor(),
        ]

    def annotate(
        self,
        result: MatchResult,
        subject: StudentProfile,
        target: Scholarship,
        context: ScoringContext,
    ) -> MatchResult:
        result.reasons = self._reasons.scholarship_reasons(result.factors, target)
        result.confidence_level = self._labels.confidence(result.match_score)
        result.urgency_level = self._labels.urgency(target.application_deadline, context.now)
        result.summary_key = "scholarshipData"
        result.summary = {
            "title": target.title,
            "description": target.description,
            "amount": target.amount,
            "currency": target.currency,
            "applicationDeadline": target.application_deadline.isoformat(),
            "studyLevel": target.study_level,
            "studyFields": list(target.study_fields),
            "targetCountries": target.target_countries,
            "institutionId": target.institution_id,
        }
        return result


class CandidateDirection(ScoringDirection):
    """
    Ranks student candidates for one institution.

    Results carry a risk assessment, a fit analysis and the candidate's
    expected contribution.
    """

    name = "candidate"

    def __init__(
        self,
        similarity: Optional[SimilarityStrategy] = None,
        factors: Optional[List[ScoringFactor]] = None,
        label_classifier: Optional[LabelClassifier] = None,
        reason_generator: Optional[ReasonGenerator] = None,
    ):
        self._similarity = similarity
        super().__init__(
            factors=factors,
            label_classifier=label_classifier,
            reason_generator=reason_generator,
        )

    def _default_factors(self) -> List[ScoringFactor]:
        return [
            AcademicExcellenceFactor(),
            FieldAlignmentFactor(self._similarity),
            GeographicFitFactor(),
            LanguageCompatibilityFactor(),
            ExperienceRelevanceFactor(),
            AchievementQualityFactor(),
            MotivationAlignmentFactor(),
            DiversityValueFactor(),
            FinancialNeedFactor(),
            CareerPotentialFactor(),
            ResearchCapabilityFactor(),
            LeadershipPotentialFactor(),
        ]

    def annotate(
        self,
        result: MatchResult,
        subject: InstitutionProfile,
        target: StudentCandidate,
        context: ScoringContext,
    ) -> MatchResult:
        result.reasons = self._reasons.candidate_reasons(result.factors, target)
        result.risk_assessment = self._labels.risk(target)
        result.fit_analysis = self._reasons.fit_analysis(result.factors, subject)
        result.potential_contribution = self._reasons.potential_contribution(target)
        result.summary_key = "candidateData"
        result.summary = {
            "fullName": target.full_name,
            "email": target.email,
            "fieldOfStudy": target.field_of_study,
            "currentEducationLevel": target.current_education_level,
            "gpa": target.gpa,
            "nationality": target.nationality,
            "languagesSpoken": target.languages_spoken,
            "bio": target.bio,
            "academicAchievements": target.academic_achievements,
            "workExperience": target.work_experience,
        }
        return result
