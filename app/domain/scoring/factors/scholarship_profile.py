"""
Scholarship Profile Factors

Keyword heuristics over the free-text parts of a student profile
(achievements, work experience) and the scholarship's eligibility text.
"""

from typing import Dict, List

from app.domain.scoring.interfaces import (
    BaseScoringFactor,
    Scholarship,
    ScoringContext,
    StudentProfile,
)
from app.domain.scoring.similarity import contains_any, count_keywords


# Criteria vocabulary per profile dimension
ELIGIBILITY_KEYWORDS: Dict[str, List[str]] = {
    "gpa": ["gpa", "grade", "note", "moyenne"],
    "experience": ["experience", "expérience", "work", "travail"],
    "achievement": ["achievement", "award", "prix", "distinction", "honor"],
    "language": ["language", "langue", "english", "français", "spanish"],
}

EXPERIENCE_KEYWORDS = [
    "internship", "stage", "research", "recherche", "project", "projet",
    "leadership", "management", "volunteer", "bénévole", "publication",
]

HIGH_VALUE_ACHIEVEMENTS = [
    "publication", "research", "award", "prix", "honor", "distinction",
    "scholarship", "bourse", "dean", "summa cum laude", "magna cum laude",
]

MEDIUM_VALUE_ACHIEVEMENTS = [
    "project", "projet", "competition", "concours", "conference",
    "presentation", "thesis", "thèse", "internship", "stage",
]


class EligibilityMatchFactor(BaseScoringFactor):
    """
    Eligibility criteria scan.

    Weight: 12%

    Starts at 50 and adds points for each criteria category the student
    can back up: GPA (+20 at 3.5+, +10 at 3.0+), work experience (+15),
    achievements (+15), languages (+10). Only evaluated when the
    scholarship has criteria text and the student lists achievements.
    """

    BASE_SCORE = 50.0

    @property
    def name(self) -> str:
        return "eligibilityMatch"

    @property
    def base_weight(self) -> float:
        return 0.12

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        criteria = scholarship.eligibility_criteria
        if not criteria or not student.academic_achievements:
            return 0.0

        score = self.BASE_SCORE

        if student.gpa is not None and contains_any(criteria, ELIGIBILITY_KEYWORDS["gpa"]):
            if student.gpa >= 3.5:
                score += 20
            elif student.gpa >= 3.0:
                score += 10

        if student.work_experience and contains_any(criteria, ELIGIBILITY_KEYWORDS["experience"]):
            score += 15

        if contains_any(criteria, ELIGIBILITY_KEYWORDS["achievement"]):
            score += 15

        if student.languages_spoken and contains_any(criteria, ELIGIBILITY_KEYWORDS["language"]):
            score += 10

        return min(score, 100.0)


class ExperienceMatchFactor(BaseScoringFactor):
    """
    Work experience relevance.

    Weight: 8%

    +15 for every valued keyword present in both the student's experience
    and the scholarship's criteria.
    """

    POINTS_PER_KEYWORD = 15

    @property
    def name(self) -> str:
        return "experienceMatch"

    @property
    def base_weight(self) -> float:
        return 0.08

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        if not student.work_experience or not scholarship.eligibility_criteria:
            return 0.0

        experience = student.work_experience.lower()
        criteria = scholarship.eligibility_criteria.lower()

        shared = [k for k in EXPERIENCE_KEYWORDS if k in experience and k in criteria]
        return float(min(len(shared) * self.POINTS_PER_KEYWORD, 100))


class AchievementMatchFactor(BaseScoringFactor):
    """
    Academic achievements quality.

    Weight: 10%

    Base 20 for listing any achievement, +15 per high-value keyword,
    +8 per medium-value keyword.
    """

    @property
    def name(self) -> str:
        return "achievementMatch"

    @property
    def base_weight(self) -> float:
        return 0.10

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        achievements = student.academic_achievements
        if not achievements:
            return 0.0

        score = 20
        score += count_keywords(achievements, HIGH_VALUE_ACHIEVEMENTS) * 15
        score += count_keywords(achievements, MEDIUM_VALUE_ACHIEVEMENTS) * 8
        return float(min(score, 100))
