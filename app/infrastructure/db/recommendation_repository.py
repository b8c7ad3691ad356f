"""
Recommendation Repository

Read access to the profile and scholarship tables the scoring engine
consumes, plus the best-effort recommendation history insert.
Uses the Supabase client; blocking calls run in a worker thread.
"""

import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional

from supabase import create_client, Client
from supabase.lib.client_options import ClientOptions

from app.config.settings import get_settings
from app.infrastructure.exceptions import (
    ConfigurationError,
    DatabaseError,
    ScholarMatchError,
)


logger = logging.getLogger(__name__)

CANDIDATE_PROFILE_COLUMNS = "id, full_name, email, bio, user_type, verified, created_at"


def create_supabase_client() -> Client:
    """Create a service-role Supabase client from Settings."""
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise ConfigurationError(
            "Missing Supabase configuration",
            missing_keys=["SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY"],
        )

    options = ClientOptions(
        postgrest_client_timeout=settings.supabase_client_timeout,
        storage_client_timeout=30,
    )
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
        options,
    )


class RecommendationRepository:
    """
    Supabase-backed data access for the recommendation engines.

    Every read returns raw rows; mapping to scoring records happens in
    the service so a single malformed row only drops that candidate.
    """

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = create_supabase_client()
        return self._client

    async def _run(self, operation: Callable[[], Any], action: str, table: str) -> Any:
        try:
            return await asyncio.to_thread(operation)
        except ScholarMatchError:
            raise
        except Exception as e:
            raise DatabaseError(
                f"Error reading {table}: {str(e)}",
                operation=action,
                table=table,
                original_error=e,
            )

    @staticmethod
    def _single(response: Any) -> Optional[Dict[str, Any]]:
        # maybe_single() yields no response object at all when nothing matches
        if response is None or not response.data:
            return None
        return response.data

    async def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Base ``profiles`` row (carries ``user_type``)."""
        response = await self._run(
            lambda: self.client.table("profiles").select("*").eq(
                "id", user_id
            ).maybe_single().execute(),
            "select",
            "profiles",
        )
        return self._single(response)

    async def get_student_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        response = await self._run(
            lambda: self.client.table("student_profiles").select("*").eq(
                "profile_id", user_id
            ).maybe_single().execute(),
            "select",
            "student_profiles",
        )
        return self._single(response)

    async def get_institution_profile(self, profile_id: str) -> Optional[Dict[str, Any]]:
        response = await self._run(
            lambda: self.client.table("institution_profiles").select("*").eq(
                "profile_id", profile_id
            ).maybe_single().execute(),
            "select",
            "institution_profiles",
        )
        return self._single(response)

    async def get_scholarship(self, scholarship_id: str) -> Optional[Dict[str, Any]]:
        response = await self._run(
            lambda: self.client.table("scholarships").select("*").eq(
                "id", scholarship_id
            ).maybe_single().execute(),
            "select",
            "scholarships",
        )
        return self._single(response)

    async def get_active_scholarships(
        self,
        today: date,
        scholarship_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Active scholarships whose deadline has not passed."""

        def query():
            builder = self.client.table("scholarships").select("*").eq(
                "is_active", True
            ).gte("application_deadline", today.isoformat())
            if scholarship_id:
                builder = builder.eq("id", scholarship_id)
            return builder.order("id").execute()

        response = await self._run(query, "select", "scholarships")
        return list(response.data or [])

    async def get_student_candidates(self) -> List[Dict[str, Any]]:
        """Student profiles joined with their base profile row."""
        response = await self._run(
            lambda: self.client.table("student_profiles").select(
                f"*, profiles!inner({CANDIDATE_PROFILE_COLUMNS})"
            ).eq("profiles.user_type", "student").order("profile_id").execute(),
            "select",
            "student_profiles",
        )
        return list(response.data or [])

    async def get_institutions(self, institution_ids: Iterable[str]) -> List[Dict[str, Any]]:
        """Institution rows used for prestige scoring."""
        ids = sorted({i for i in institution_ids if i})
        if not ids:
            return []

        response = await self._run(
            lambda: self.client.table("institutions").select(
                "id, ranking_global, ranking_national, established_year"
            ).in_("id", ids).execute(),
            "select",
            "institutions",
        )
        return list(response.data or [])

    async def save_recommendation_history(
        self,
        user_id: str,
        recommendations: List[Dict[str, Any]],
        algorithm_version: str,
    ) -> bool:
        """
        Record which scholarships were recommended.

        Failures are logged and reported as ``False``; they never fail the
        recommendation request.
        """
        if not recommendations:
            return True

        now = datetime.now(timezone.utc).isoformat()
        entries = [
            {
                "user_id": user_id,
                "scholarship_id": rec["candidateId"],
                "recommendation_score": rec["matchScore"],
                "factors_considered": rec["factors"],
                "algorithm_version": algorithm_version,
                "created_at": now,
            }
            for rec in recommendations
        ]

        try:
            await asyncio.to_thread(
                lambda: self.client.table("recommendation_history").insert(entries).execute()
            )
            return True
        except Exception as e:
            logger.error(f"Failed to save recommendation history for {user_id}: {e}")
            return False
