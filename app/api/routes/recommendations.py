"""
Recommendation Routes

Endpoints for scholarship recommendations (student subject) and
candidate recommendations (institution subject).
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from app.api.dependencies import (
    Caller,
    ensure_subject_access,
    get_current_caller,
    get_recommendation_service,
)
from app.config.settings import settings
from app.domain.services import RecommendationService


router = APIRouter()


# ============================================================================
# Request Models
# ============================================================================

class RecommendationRequest(BaseModel):
    """Common request body; accepts camelCase or snake_case keys."""
    model_config = ConfigDict(populate_by_name=True)

    subject_id: str = Field(..., alias="subjectId", min_length=1)
    target_id: Optional[str] = Field(None, alias="targetId")


class ScholarshipRecommendationRequest(RecommendationRequest):
    """Request scholarships for a student."""
    candidate_limit: int = Field(
        settings.scholarship_default_limit, alias="candidateLimit", ge=1, le=200
    )
    min_score: float = Field(
        settings.scholarship_min_score, alias="minScore", ge=0.0, le=100.0
    )


class CandidateRecommendationRequest(RecommendationRequest):
    """Request student candidates for an institution."""
    candidate_limit: int = Field(
        settings.candidate_default_limit, alias="candidateLimit", ge=1, le=200
    )
    min_score: float = Field(
        settings.candidate_min_score, alias="minScore", ge=0.0, le=100.0
    )


# ============================================================================
# Endpoints
# ============================================================================

@router.post("/recommendations/scholarships")
async def recommend_scholarships(
    request: ScholarshipRecommendationRequest,
    caller: Caller = Depends(get_current_caller),
    service: RecommendationService = Depends(get_recommendation_service),
) -> Dict[str, Any]:
    """
    Rank active scholarships for a student.

    ``targetId`` restricts scoring to a single scholarship.
    """
    ensure_subject_access(caller, request.subject_id)
    return await service.recommend_scholarships(
        request.subject_id,
        limit=request.candidate_limit,
        min_score=request.min_score,
        scholarship_id=request.target_id,
    )


@router.post("/recommendations/candidates")
async def recommend_candidates(
    request: CandidateRecommendationRequest,
    caller: Caller = Depends(get_current_caller),
    service: RecommendationService = Depends(get_recommendation_service),
) -> Dict[str, Any]:
    """
    Rank student candidates for an institution.

    ``targetId`` names the scholarship the candidates are sought for.
    """
    ensure_subject_access(caller, request.subject_id)
    return await service.recommend_candidates(
        request.subject_id,
        limit=request.candidate_limit,
        min_score=request.min_score,
        scholarship_id=request.target_id,
    )
