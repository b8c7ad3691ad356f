"""
Scholarship Fit Factors

Hard-criteria fit between a student and a scholarship: field of study,
study level, destination country, nationality, GPA floor, age bounds and
required languages.

A restriction the scholarship does not impose scores the neutral 80
("open to everyone"). A restriction that cannot be checked because the
student left the field empty scores 0, which drops the factor from the
weighted average instead of counting as a failure.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from app.domain.scoring.interfaces import (
    BaseScoringFactor,
    Scholarship,
    ScoringContext,
    SimilarityStrategy,
    StudentProfile,
)
from app.domain.scoring.similarity import KeywordSimilarity, field_overlap_score


# Score when the scholarship imposes no restriction on a dimension
OPEN_RESTRICTION_SCORE = 80.0

# Levels a student at a given level can apply for next
LEVEL_PROGRESSION: Dict[str, List[str]] = {
    "high school": ["bachelor", "associate"],
    "bachelor": ["master", "graduate"],
    "master": ["phd", "doctorate", "postgraduate"],
    "phd": ["postdoc", "research"],
}

WILDCARD_LEVELS = {"all", "any"}


def _lowered(values: Iterable[str]) -> Set[str]:
    return {value.strip().lower() for value in values}


def calculate_age(birth_date: date, today: date) -> int:
    """Age in whole years, minus one until this year's birthday."""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


class FieldMatchFactor(BaseScoringFactor):
    """
    Field of study match.

    Weight: 25%

    100 when the student's field is listed verbatim, otherwise the share
    of the scholarship's study fields matching by containment or through
    the similarity strategy.
    """

    def __init__(self, similarity: Optional[SimilarityStrategy] = None):
        self._similarity = similarity or KeywordSimilarity()

    @property
    def name(self) -> str:
        return "fieldMatch"

    @property
    def base_weight(self) -> float:
        return 0.25

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        if not student.field_of_study or not scholarship.study_fields:
            return 0.0

        return field_overlap_score(
            student.field_of_study, scholarship.study_fields, self._similarity
        )


class LevelMatchFactor(BaseScoringFactor):
    """
    Study level match.

    Weight: 20%

    - 100: scholarship level is the student's next step or current level
    - 80: scholarship open to all levels
    - 0: anything else
    """

    @property
    def name(self) -> str:
        return "levelMatch"

    @property
    def base_weight(self) -> float:
        return 0.20

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        if not student.current_education_level or not scholarship.study_level:
            return 0.0

        current = student.current_education_level.strip().lower()
        offered = scholarship.study_level.strip().lower()

        if offered == current or offered in LEVEL_PROGRESSION.get(current, []):
            return 100.0
        if offered in WILDCARD_LEVELS:
            return OPEN_RESTRICTION_SCORE
        return 0.0


class CountryMatchFactor(BaseScoringFactor):
    """
    Destination country match.

    Weight: 15%

    Share of the student's preferred countries the scholarship targets.
    Not evaluable unless both sides list countries.
    """

    @property
    def name(self) -> str:
        return "countryMatch"

    @property
    def base_weight(self) -> float:
        return 0.15

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        if not student.preferred_study_countries or not scholarship.target_countries:
            return 0.0

        targets = _lowered(scholarship.target_countries)
        preferred = [c.strip().lower() for c in student.preferred_study_countries]
        common = [c for c in preferred if c in targets]
        return len(common) / len(preferred) * 100


class NationalityMatchFactor(BaseScoringFactor):
    """
    Nationality eligibility.

    Weight: 10%
    """

    @property
    def name(self) -> str:
        return "nationalityMatch"

    @property
    def base_weight(self) -> float:
        return 0.10

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        if not scholarship.target_nationalities:
            return OPEN_RESTRICTION_SCORE

        if student.nationality and (
            student.nationality.strip().lower()
            in _lowered(scholarship.target_nationalities)
        ):
            return 100.0
        return 0.0


class GpaMatchFactor(BaseScoringFactor):
    """
    GPA against the scholarship's minimum.

    Weight: 15%

    - Meets the floor: 80 plus 20 points per GPA point above it, capped at 100
    - Below the floor: proportional, up to 60
    - No floor: 80
    """

    @property
    def name(self) -> str:
        return "gpaMatch"

    @property
    def base_weight(self) -> float:
        return 0.15

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        if not scholarship.min_gpa:
            return OPEN_RESTRICTION_SCORE

        if student.gpa is None:
            return 0.0

        if student.gpa >= scholarship.min_gpa:
            excess = student.gpa - scholarship.min_gpa
            return 80.0 + min(20.0, excess * 20)

        return max(0.0, (student.gpa / scholarship.min_gpa) * 60)


class AgeMatchFactor(BaseScoringFactor):
    """
    Age bounds.

    Weight: 5%

    A missing bound is unbounded on that side.
    """

    @property
    def name(self) -> str:
        return "ageMatch"

    @property
    def base_weight(self) -> float:
        return 0.05

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        has_bounds = scholarship.min_age is not None or scholarship.max_age is not None
        if not has_bounds or student.date_of_birth is None:
            return OPEN_RESTRICTION_SCORE

        age = calculate_age(student.date_of_birth, context.today)
        if scholarship.min_age is not None and age < scholarship.min_age:
            return 0.0
        if scholarship.max_age is not None and age > scholarship.max_age:
            return 0.0
        return 100.0


class LanguageMatchFactor(BaseScoringFactor):
    """
    Required languages.

    Weight: 10%

    Share of the required languages the student speaks.
    """

    @property
    def name(self) -> str:
        return "languageMatch"

    @property
    def base_weight(self) -> float:
        return 0.10

    def calculate(
        self,
        student: StudentProfile,
        scholarship: Scholarship,
        context: ScoringContext,
    ) -> float:
        if not scholarship.required_languages:
            return OPEN_RESTRICTION_SCORE

        if not student.languages_spoken:
            return 0.0

        spoken = _lowered(student.languages_spoken)
        required = [lang.strip().lower() for lang in scholarship.required_languages]
        matching = [lang for lang in required if lang in spoken]
        return len(matching) / len(required) * 100
