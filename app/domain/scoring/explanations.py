"""
Match Explanations

Turns factor scores into short human-readable reasons.
Checks run in factor-importance order so the strongest signals come first.
"""

from typing import Dict, List

from app.domain.scoring.interfaces import (
    InstitutionProfile,
    Scholarship,
    StudentCandidate,
)


SCHOLARSHIP_FALLBACK_REASONS = [
    "Eligibility criteria match your profile",
    "Profile compatible with the requirements",
]

CANDIDATE_FALLBACK_REASONS = [
    "Profile matches the general criteria",
    "Profile compatible with the institution's requirements",
]

# Award amount from which funding is called out as substantial
SUBSTANTIAL_AMOUNT = 20000


def _ensure_minimum(reasons: List[str], fallbacks: List[str], minimum: int = 2) -> List[str]:
    """Append fallback reasons until the list holds ``minimum`` entries."""
    for fallback in fallbacks:
        if len(reasons) >= minimum:
            break
        if fallback not in reasons:
            reasons.append(fallback)
    return reasons


class ReasonGenerator:
    """Threshold cascades producing the reasons attached to each match."""

    SCHOLARSHIP_MAX_REASONS = 5
    CANDIDATE_MAX_REASONS = 6

    def scholarship_reasons(
        self,
        factors: Dict[str, float],
        scholarship: Scholarship,
    ) -> List[str]:
        reasons: List[str] = []

        field_match = factors.get("fieldMatch", 0.0)
        if field_match >= 80:
            reasons.append("Field of study is a perfect match")
        elif field_match >= 60:
            reasons.append("Compatible field of study")

        if factors.get("levelMatch", 0.0) >= 90:
            reasons.append("Ideal study level for your progression")

        if factors.get("countryMatch", 0.0) >= 80:
            reasons.append("Preferred study destination")

        gpa_match = factors.get("gpaMatch", 0.0)
        if gpa_match >= 90:
            reasons.append("Your GPA is well above the requirements")
        elif gpa_match >= 70:
            reasons.append("GPA compatible with the requirements")

        if factors.get("languageMatch", 0.0) >= 80:
            reasons.append("Language skills match")

        if factors.get("institutionPrestige", 0.0) >= 80:
            reasons.append("Internationally prestigious institution")

        if scholarship.amount and scholarship.amount >= SUBSTANTIAL_AMOUNT:
            reasons.append("Substantial funding offered")

        if scholarship.renewable:
            reasons.append("Renewable scholarship for financial security")

        if factors.get("deadlineUrgency", 0.0) >= 80:
            reasons.append("Deadline approaching, apply soon")

        if factors.get("achievementMatch", 0.0) >= 70:
            reasons.append("Your academic achievements are valued")

        if factors.get("experienceMatch", 0.0) >= 70:
            reasons.append("Your work experience is an asset")

        _ensure_minimum(reasons, SCHOLARSHIP_FALLBACK_REASONS)
        return reasons[: self.SCHOLARSHIP_MAX_REASONS]

    def candidate_reasons(
        self,
        factors: Dict[str, float],
        student: StudentCandidate,
    ) -> List[str]:
        reasons: List[str] = []

        academic = factors.get("academicExcellence", 0.0)
        if academic >= 90:
            reasons.append(f"Exceptional academic excellence (GPA: {student.gpa})")
        elif academic >= 80:
            reasons.append("Very strong academic record")

        alignment = factors.get("fieldAlignment", 0.0)
        if alignment >= 80:
            reasons.append("Field of study perfectly aligned")
        elif alignment >= 60:
            reasons.append("Compatible field of study")

        if factors.get("achievementQuality", 0.0) >= 80:
            reasons.append("Remarkable academic achievements")

        if factors.get("researchCapability", 0.0) >= 80:
            reasons.append("Strong demonstrated research capability")

        if factors.get("leadershipPotential", 0.0) >= 80:
            reasons.append("Clear leadership potential")

        if factors.get("languageCompatibility", 0.0) >= 90:
            reasons.append("Excellent language skills")

        if factors.get("geographicFit", 0.0) >= 90:
            reasons.append("Preferred study destination")

        if factors.get("diversityValue", 0.0) >= 80:
            reasons.append("Brings valuable diversity")

        if factors.get("experienceRelevance", 0.0) >= 70:
            reasons.append("Relevant professional experience")

        _ensure_minimum(reasons, CANDIDATE_FALLBACK_REASONS)
        return reasons[: self.CANDIDATE_MAX_REASONS]

    def fit_analysis(
        self,
        factors: Dict[str, float],
        institution: InstitutionProfile,
    ) -> str:
        """One or two sentences naming strong points and areas to develop."""
        strong_points = []
        if factors.get("academicExcellence", 0.0) >= 85:
            strong_points.append("academic excellence")
        if factors.get("fieldAlignment", 0.0) >= 80:
            strong_points.append("field alignment")
        if factors.get("achievementQuality", 0.0) >= 80:
            strong_points.append("quality of achievements")
        if factors.get("researchCapability", 0.0) >= 75:
            strong_points.append("research capability")

        improvement_areas = []
        if factors.get("languageCompatibility", 0.0) < 70:
            improvement_areas.append("language skills")
        if factors.get("experienceRelevance", 0.0) < 60:
            improvement_areas.append("relevant experience")

        if strong_points:
            analysis = f"Candidate with {', '.join(strong_points)}."
        else:
            analysis = f"Candidate with a balanced profile for {institution.institution_name}."

        if improvement_areas:
            analysis += f" Could benefit from developing {', '.join(improvement_areas)}."

        return analysis

    def potential_contribution(self, student: StudentCandidate) -> str:
        contributions = []

        if student.gpa is not None and student.gpa >= 3.8:
            contributions.append("Academic excellence that will raise the program's reputation")
        if student.languages_spoken and len(student.languages_spoken) > 2:
            contributions.append("Linguistic and cultural diversity")
        if student.academic_achievements:
            contributions.append("Research and publication potential")
        if student.work_experience:
            contributions.append("Valuable practical experience")

        if not contributions:
            return "Positive contribution to the program expected."
        return ". ".join(contributions) + "."
