"""
Scoring Interfaces for the Scholarship Match service

Defines protocols and data models for the scoring engine.
Records are read-only views of rows owned by the profile and
scholarship management system; optional fields are ``None`` when absent,
never an empty string or zero sentinel.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, List, Dict, Any, Protocol, runtime_checkable
from enum import Enum


class ConfidenceLevel(Enum):
    """Confidence in a scholarship recommendation."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class UrgencyLevel(Enum):
    """How soon the student has to act on a scholarship."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLevel(Enum):
    """Risk assessment of a candidate for an institution."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class StudentProfile:
    """
    Student profile used as the subject of the scholarship direction.

    ``date_of_birth`` is only used to derive the student's age.
    """
    id: str

    # Academic
    field_of_study: Optional[str] = None
    current_education_level: Optional[str] = None  # High School, Bachelor, Master, PhD
    gpa: Optional[float] = None  # 0.0-4.0

    # Identity & preferences
    nationality: Optional[str] = None
    languages_spoken: Optional[List[str]] = None
    preferred_study_countries: Optional[List[str]] = None
    preferred_study_fields: Optional[List[str]] = None
    financial_need_level: Optional[int] = None  # 1-5

    # Free text
    academic_achievements: Optional[str] = None
    work_experience: Optional[str] = None

    date_of_birth: Optional[date] = None


@dataclass
class StudentCandidate(StudentProfile):
    """Student evaluated as a candidate by an institution."""
    full_name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None


@dataclass
class InstitutionProfile:
    """Institution used as the subject of the candidate direction."""
    id: str
    institution_name: str
    institution_type: Optional[str] = None
    country: Optional[str] = None
    focus_areas: Optional[List[str]] = None
    ranking_global: Optional[int] = None
    total_students: Optional[int] = None
    scholarship_budget_annual: Optional[float] = None


@dataclass
class Scholarship:
    """
    Scholarship offer evaluated for a student.

    Absent restrictions (countries, nationalities, GPA, age, languages)
    mean the scholarship is open on that dimension.
    """
    id: str
    title: str
    application_deadline: date
    study_fields: List[str]

    description: str = ""
    amount: Optional[float] = None  # None means "variable"
    currency: Optional[str] = None
    study_level: Optional[str] = None  # Single level, or All/Any

    # Restrictions
    target_countries: Optional[List[str]] = None
    target_nationalities: Optional[List[str]] = None
    min_gpa: Optional[float] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    required_languages: Optional[List[str]] = None
    eligibility_criteria: Optional[str] = None

    scholarship_type: Optional[str] = None
    renewable: bool = False
    is_featured: bool = False
    is_active: bool = True
    institution_id: Optional[str] = None


@dataclass
class InstitutionRecord:
    """Institution facts used to rate prestige."""
    id: str
    ranking_global: Optional[int] = None
    ranking_national: Optional[int] = None
    established_year: Optional[int] = None


@runtime_checkable
class InstitutionLookup(Protocol):
    """Read-only access to institution records."""

    def get_institution(self, institution_id: str) -> Optional[InstitutionRecord]:
        ...


@runtime_checkable
class SimilarityStrategy(Protocol):
    """
    Text similarity between two short phrases.

    Returns a non-negative ratio; values above 0.7 are treated as a match.
    """

    def similarity(self, text1: str, text2: str) -> float:
        ...


@dataclass
class ScoringContext:
    """
    Per-invocation inputs shared by every pair in a batch.

    ``now`` is fixed for the whole batch so repeated runs over identical
    input produce identical results.
    """
    now: datetime
    institution_lookup: Optional[InstitutionLookup] = None

    @property
    def today(self) -> date:
        return self.now.date()


@dataclass
class MatchResult:
    """
    Scored (subject, candidate) pair.

    Ephemeral: the caller decides whether to persist it.
    """
    candidate_id: str
    subject_id: str
    match_score: float  # 0-100, two decimals
    factors: Dict[str, float]
    reasons: List[str]
    generated_at: datetime

    # Scholarship direction
    confidence_level: Optional[ConfidenceLevel] = None
    urgency_level: Optional[UrgencyLevel] = None

    # Candidate direction
    risk_assessment: Optional[RiskLevel] = None
    fit_analysis: Optional[str] = None
    potential_contribution: Optional[str] = None

    # Denormalized candidate summary
    summary_key: str = "candidateData"
    summary: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response format."""
        data: Dict[str, Any] = {
            "candidateId": self.candidate_id,
            "subjectId": self.subject_id,
            "matchScore": self.match_score,
            "factors": {name: round(value, 2) for name, value in self.factors.items()},
            "reasons": list(self.reasons),
        }
        if self.confidence_level is not None:
            data["confidenceLevel"] = self.confidence_level.value
        if self.urgency_level is not None:
            data["urgencyLevel"] = self.urgency_level.value
        if self.risk_assessment is not None:
            data["riskAssessment"] = self.risk_assessment.value
        if self.fit_analysis is not None:
            data["fitAnalysis"] = self.fit_analysis
        if self.potential_contribution is not None:
            data["potentialContribution"] = self.potential_contribution
        data["generatedAt"] = self.generated_at.isoformat()
        data[self.summary_key] = dict(self.summary)
        return data


@runtime_checkable
class ScoringFactor(Protocol):
    """
    Protocol for scoring factors.

    Each factor calculates a 0-100 score for one dimension of fit.
    A score of 0 means "not evaluable" and removes the factor from the
    weighted average.
    """

    @property
    def name(self) -> str:
        """Factor name used in the factor map."""
        ...

    @property
    def base_weight(self) -> float:
        """Weight in the direction's weight table."""
        ...

    @property
    def is_bonus(self) -> bool:
        """Bonus factors are added after normalization."""
        ...

    def calculate(self, subject: Any, target: Any, context: ScoringContext) -> float:
        """
        Calculate score for this factor.

        Returns: Score from 0-100
        """
        ...


class BaseScoringFactor(ABC):
    """Base class for scoring factors with common functionality."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def base_weight(self) -> float:
        pass

    @property
    def is_bonus(self) -> bool:
        """Default: part of the weighted base."""
        return False

    @abstractmethod
    def calculate(self, subject: Any, target: Any, context: ScoringContext) -> float:
        pass
