# Scoring factors submodule
from app.domain.scoring.factors.scholarship_fit import (
    FieldMatchFactor,
    LevelMatchFactor,
    CountryMatchFactor,
    NationalityMatchFactor,
    GpaMatchFactor,
    AgeMatchFactor,
    LanguageMatchFactor,
)
from app.domain.scoring.factors.scholarship_profile import (
    EligibilityMatchFactor,
    ExperienceMatchFactor,
    AchievementMatchFactor,
)
from app.domain.scoring.factors.scholarship_offer import (
    DeadlineUrgencyFactor,
    AmountScoreFactor,
    InstitutionPrestigeFactor,
    RenewabilityBonusFactor,
    FeaturedBonusFactor,
)
from app.domain.scoring.factors.candidate_academic import (
    AcademicExcellenceFactor,
    FieldAlignmentFactor,
    AchievementQualityFactor,
    ResearchCapabilityFactor,
)
from app.domain.scoring.factors.candidate_fit import (
    GeographicFitFactor,
    LanguageCompatibilityFactor,
    DiversityValueFactor,
    FinancialNeedFactor,
)
from app.domain.scoring.factors.candidate_potential import (
    ExperienceRelevanceFactor,
    MotivationAlignmentFactor,
    CareerPotentialFactor,
    LeadershipPotentialFactor,
)

__all__ = [
    "FieldMatchFactor",
    "LevelMatchFactor",
    "CountryMatchFactor",
    "NationalityMatchFactor",
    "GpaMatchFactor",
    "AgeMatchFactor",
    "LanguageMatchFactor",
    "EligibilityMatchFactor",
    "ExperienceMatchFactor",
    "AchievementMatchFactor",
    "DeadlineUrgencyFactor",
    "AmountScoreFactor",
    "InstitutionPrestigeFactor",
    "RenewabilityBonusFactor",
    "FeaturedBonusFactor",
    "AcademicExcellenceFactor",
    "FieldAlignmentFactor",
    "AchievementQualityFactor",
    "ResearchCapabilityFactor",
    "GeographicFitFactor",
    "LanguageCompatibilityFactor",
    "DiversityValueFactor",
    "FinancialNeedFactor",
    "ExperienceRelevanceFactor",
    "MotivationAlignmentFactor",
    "CareerPotentialFactor",
    "LeadershipPotentialFactor",
]
