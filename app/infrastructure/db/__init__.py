"""
Database Infrastructure Package for Scholarship Match

Exports the Supabase-backed recommendation repository.
"""

from app.infrastructure.db.recommendation_repository import (
    RecommendationRepository,
    create_supabase_client,
)


__all__ = [
    "RecommendationRepository",
    "create_supabase_client",
]
