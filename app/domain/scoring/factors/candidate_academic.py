"""
Candidate Academic Factors

How strong a student's academic record is for an institution:
GPA tier, field alignment with the institution's focus areas,
achievement quality and research capability.
"""

from typing import Optional

from app.domain.scoring.interfaces import (
    BaseScoringFactor,
    InstitutionProfile,
    ScoringContext,
    SimilarityStrategy,
    StudentCandidate,
)
from app.domain.scoring.similarity import (
    KeywordSimilarity,
    count_keywords,
    field_overlap_score,
)


HIGH_IMPACT_KEYWORDS = [
    "publication", "patent", "brevet", "award", "prix", "medal", "médaille",
    "scholarship", "bourse", "fellowship", "grant", "subvention",
    "first place", "winner", "champion", "laureate", "lauréat",
]

ACADEMIC_HONOR_KEYWORDS = [
    "dean's list", "honor roll", "summa cum laude", "magna cum laude",
    "valedictorian", "thesis", "thèse", "research", "conference",
]

LEADERSHIP_ROLE_KEYWORDS = [
    "president", "leader", "captain", "coordinator", "organizer",
    "founder", "fondateur", "director", "manager", "head",
]

RESEARCH_KEYWORDS = [
    "research", "recherche", "publication", "thesis", "thèse",
    "conference", "journal", "study", "analysis", "investigation",
]


class AcademicExcellenceFactor(BaseScoringFactor):
    """
    GPA tiers.

    Weight: 25%

    3.9+ = 100, 3.7+ = 90, 3.5+ = 80, 3.2+ = 70, 3.0+ = 60,
    below 3.0 proportional up to 50.
    """

    TIERS = (
        (3.9, 100.0),
        (3.7, 90.0),
        (3.5, 80.0),
        (3.2, 70.0),
        (3.0, 60.0),
    )

    @property
    def name(self) -> str:
        return "academicExcellence"

    @property
    def base_weight(self) -> float:
        return 0.25

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        if student.gpa is None:
            return 0.0

        for minimum, score in self.TIERS:
            if student.gpa >= minimum:
                return score
        return max(0.0, (student.gpa / 3.0) * 50)


class FieldAlignmentFactor(BaseScoringFactor):
    """
    Field of study against the institution's focus areas.

    Weight: 20%
    """

    def __init__(self, similarity: Optional[SimilarityStrategy] = None):
        self._similarity = similarity or KeywordSimilarity()

    @property
    def name(self) -> str:
        return "fieldAlignment"

    @property
    def base_weight(self) -> float:
        return 0.20

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        if not student.field_of_study or not institution.focus_areas:
            return 0.0

        return field_overlap_score(
            student.field_of_study, institution.focus_areas, self._similarity
        )


class AchievementQualityFactor(BaseScoringFactor):
    """
    Achievement quality.

    Weight: 15%

    Base 30; +20 per high-impact keyword, +15 per academic honor,
    +12 per leadership role.
    """

    @property
    def name(self) -> str:
        return "achievementQuality"

    @property
    def base_weight(self) -> float:
        return 0.15

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        achievements = student.academic_achievements
        if not achievements:
            return 0.0

        score = 30
        score += count_keywords(achievements, HIGH_IMPACT_KEYWORDS) * 20
        score += count_keywords(achievements, ACADEMIC_HONOR_KEYWORDS) * 15
        score += count_keywords(achievements, LEADERSHIP_ROLE_KEYWORDS) * 12
        return float(min(score, 100))


class ResearchCapabilityFactor(BaseScoringFactor):
    """
    Research capability.

    Weight: 8%

    Base 30; +15 per research keyword in achievements, +10 per keyword in
    work experience.
    """

    @property
    def name(self) -> str:
        return "researchCapability"

    @property
    def base_weight(self) -> float:
        return 0.08

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        score = 30
        if student.academic_achievements:
            score += count_keywords(student.academic_achievements, RESEARCH_KEYWORDS) * 15
        if student.work_experience:
            score += count_keywords(student.work_experience, RESEARCH_KEYWORDS) * 10
        return float(min(score, 100))
