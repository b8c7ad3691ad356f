"""
Candidate Fit Factors

How well a student fits the institution's setting: geography,
language, diversity contribution and financial need.
"""

from typing import Dict, List

from app.domain.scoring.interfaces import (
    BaseScoringFactor,
    InstitutionProfile,
    ScoringContext,
    StudentCandidate,
)
from app.domain.scoring.similarity import contains_any


REGIONS: Dict[str, List[str]] = {
    "europe": [
        "france", "germany", "spain", "italy", "united kingdom",
        "netherlands", "belgium",
    ],
    "north_america": ["united states", "canada", "mexico"],
    "asia": ["china", "japan", "south korea", "singapore", "india"],
    "oceania": ["australia", "new zealand"],
}

# Languages of instruction expected per institution country
COUNTRY_LANGUAGES: Dict[str, List[str]] = {
    "france": ["french", "français"],
    "germany": ["german", "deutsch", "allemand"],
    "spain": ["spanish", "español", "espagnol"],
    "italy": ["italian", "italiano", "italien"],
    "united kingdom": ["english", "anglais"],
    "united states": ["english", "anglais"],
    "canada": ["english", "french", "anglais", "français"],
}
DEFAULT_LANGUAGES = ["english"]

COMMUNITY_KEYWORDS = ["volunteer", "bénévole", "nonprofit", "community", "social"]


class GeographicFitFactor(BaseScoringFactor):
    """
    Geographic compatibility.

    Weight: 10%

    - 100: institution country is a preferred destination
    - 70: a preferred destination is in the same region
    - 30: otherwise (openness to studying abroad)
    """

    @property
    def name(self) -> str:
        return "geographicFit"

    @property
    def base_weight(self) -> float:
        return 0.10

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        if not student.preferred_study_countries or not institution.country:
            return 0.0

        country = institution.country.strip().lower()
        preferred = {c.strip().lower() for c in student.preferred_study_countries}

        if country in preferred:
            return 100.0

        for countries in REGIONS.values():
            if country in countries and preferred.intersection(countries):
                return 70.0

        return 30.0


class LanguageCompatibilityFactor(BaseScoringFactor):
    """
    Language compatibility with the institution's country.

    Weight: 8%

    100 when the student speaks an expected language, otherwise 20 per
    spoken language up to 60.
    """

    @property
    def name(self) -> str:
        return "languageCompatibility"

    @property
    def base_weight(self) -> float:
        return 0.08

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        if not student.languages_spoken:
            return 0.0

        country = (institution.country or "").strip().lower()
        expected = COUNTRY_LANGUAGES.get(country, DEFAULT_LANGUAGES)
        spoken = [lang.strip().lower() for lang in student.languages_spoken]

        if any(lang in s or s in lang for lang in expected for s in spoken):
            return 100.0

        return float(min(len(spoken) * 20, 60))


class DiversityValueFactor(BaseScoringFactor):
    """
    Diversity contribution.

    Weight: 5%

    Base 50; +25 for a nationality different from the institution's
    country, +15 for speaking more than two languages, +10 for
    community or volunteer experience.
    """

    @property
    def name(self) -> str:
        return "diversityValue"

    @property
    def base_weight(self) -> float:
        return 0.05

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        score = 50

        if student.nationality and institution.country:
            if student.nationality.strip().lower() != institution.country.strip().lower():
                score += 25

        if student.languages_spoken and len(student.languages_spoken) > 2:
            score += 15

        if student.work_experience and contains_any(student.work_experience, COMMUNITY_KEYWORDS):
            score += 10

        return float(min(score, 100))


class FinancialNeedFactor(BaseScoringFactor):
    """
    Financial need, 1-5 scale mapped linearly to 20-100.

    Weight: 3%
    """

    @property
    def name(self) -> str:
        return "financialNeed"

    @property
    def base_weight(self) -> float:
        return 0.03

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        if not student.financial_need_level:
            return 0.0
        return float(max(0, min(student.financial_need_level * 20, 100)))
