# Scoring module for the Scholarship Match service
from app.domain.scoring.interfaces import (
    StudentProfile,
    StudentCandidate,
    InstitutionProfile,
    Scholarship,
    InstitutionRecord,
    InstitutionLookup,
    ScoringContext,
    MatchResult,
    ScoringFactor,
    BaseScoringFactor,
    SimilarityStrategy,
    ConfidenceLevel,
    UrgencyLevel,
    RiskLevel,
)
from app.domain.scoring.similarity import KeywordSimilarity
from app.domain.scoring.directions import (
    ScoringDirection,
    ScholarshipDirection,
    CandidateDirection,
)
from app.domain.scoring.match_scorer import MatchScorer, aggregate_factor_scores
from app.domain.scoring.label_classifier import LabelClassifier, days_until
from app.domain.scoring.explanations import ReasonGenerator

__all__ = [
    "StudentProfile",
    "StudentCandidate",
    "InstitutionProfile",
    "Scholarship",
    "InstitutionRecord",
    "InstitutionLookup",
    "ScoringContext",
    "MatchResult",
    "ScoringFactor",
    "BaseScoringFactor",
    "SimilarityStrategy",
    "ConfidenceLevel",
    "UrgencyLevel",
    "RiskLevel",
    "KeywordSimilarity",
    "ScoringDirection",
    "ScholarshipDirection",
    "CandidateDirection",
    "MatchScorer",
    "aggregate_factor_scores",
    "LabelClassifier",
    "days_until",
    "ReasonGenerator",
]
