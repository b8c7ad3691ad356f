"""
Candidate Potential Factors

Forward-looking signals read from a student's experience, achievements
and bio: experience relevance, motivation, career and leadership potential.
"""

from typing import Dict, List

from app.domain.scoring.interfaces import (
    BaseScoringFactor,
    InstitutionProfile,
    ScoringContext,
    StudentCandidate,
)
from app.domain.scoring.similarity import contains_any, count_keywords


# Experience vocabulary valued by each kind of focus area
DOMAIN_KEYWORDS: Dict[str, List[str]] = {
    "technology": ["programming", "software", "development", "coding", "tech", "digital"],
    "research": ["research", "recherche", "analysis", "study", "investigation"],
    "healthcare": ["medical", "health", "patient", "clinical", "hospital"],
    "business": ["management", "sales", "marketing", "finance", "consulting"],
    "education": ["teaching", "tutoring", "training", "education", "mentoring"],
}

INTERNATIONAL_KEYWORDS = ["international", "global", "abroad", "étranger", "overseas"]

MOTIVATION_KEYWORDS = [
    "passionate", "passionné", "dedicated", "dévoué", "committed", "engagé",
    "aspire", "aspirer", "dream", "rêve", "goal", "objectif", "mission",
]

LEADERSHIP_KEYWORDS = [
    "leader", "president", "captain", "coordinator", "organizer",
    "manager", "director", "founder", "head", "chief",
]

ADVANCED_LEVELS = {"phd", "master"}


class ExperienceRelevanceFactor(BaseScoringFactor):
    """
    Work experience relevance to the institution's focus areas.

    Weight: 12%

    Base 20; +25 per focus area named in the experience, +8 per domain
    keyword for focus areas of a known domain, +15 for international
    experience.
    """

    @property
    def name(self) -> str:
        return "experienceRelevance"

    @property
    def base_weight(self) -> float:
        return 0.12

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        if not student.work_experience:
            return 0.0

        experience = student.work_experience.lower()
        score = 20

        for area in institution.focus_areas or []:
            area_lower = area.lower()
            if area_lower in experience:
                score += 25

            for domain, keywords in DOMAIN_KEYWORDS.items():
                if domain in area_lower:
                    score += count_keywords(experience, keywords) * 8

        if contains_any(experience, INTERNATIONAL_KEYWORDS):
            score += 15

        return float(min(score, 100))


class MotivationAlignmentFactor(BaseScoringFactor):
    """
    Motivation read from the student's bio.

    Weight: 10%

    Base 20; +10 per motivation keyword, +20 per focus area mentioned.
    """

    @property
    def name(self) -> str:
        return "motivationAlignment"

    @property
    def base_weight(self) -> float:
        return 0.10

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        if not student.bio:
            return 0.0

        bio = student.bio.lower()
        score = 20
        score += count_keywords(bio, MOTIVATION_KEYWORDS) * 10
        score += sum(20 for area in institution.focus_areas or [] if area.lower() in bio)
        return float(min(score, 100))


class CareerPotentialFactor(BaseScoringFactor):
    """
    Career potential.

    Weight: 7%

    Base 50; +20 for graduate level, +15 for GPA 3.7+, +10 for work
    experience, +15 for listed achievements.
    """

    @property
    def name(self) -> str:
        return "careerPotential"

    @property
    def base_weight(self) -> float:
        return 0.07

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        score = 50

        level = (student.current_education_level or "").strip().lower()
        if level in ADVANCED_LEVELS:
            score += 20
        if student.gpa is not None and student.gpa >= 3.7:
            score += 15
        if student.work_experience:
            score += 10
        if student.academic_achievements:
            score += 15

        return float(min(score, 100))


class LeadershipPotentialFactor(BaseScoringFactor):
    """
    Leadership potential.

    Weight: 5%

    Base 30; +12 per leadership keyword in each of achievements,
    experience and bio.
    """

    @property
    def name(self) -> str:
        return "leadershipPotential"

    @property
    def base_weight(self) -> float:
        return 0.05

    def calculate(
        self,
        institution: InstitutionProfile,
        student: StudentCandidate,
        context: ScoringContext,
    ) -> float:
        score = 30
        sources = [student.academic_achievements, student.work_experience, student.bio]
        for source in sources:
            if source:
                score += count_keywords(source, LEADERSHIP_KEYWORDS) * 12
        return float(min(score, 100))
