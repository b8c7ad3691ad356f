"""
Test configuration and fixtures for Scholarship Match.

Provides shared fixtures for unit and integration tests.
"""

import os
import time

# Settings are read at import time; provide test values before any app import.
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-0123456789abcdef0123456789")
os.environ.setdefault("ENVIRONMENT", "development")

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import jwt
import pytest
from fastapi.testclient import TestClient

from app.domain.scoring import (
    InstitutionProfile,
    InstitutionRecord,
    Scholarship,
    ScoringContext,
    StudentCandidate,
    StudentProfile,
)
from app.domain.scoring.records import InstitutionDirectory


FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app():
    """Get the FastAPI application."""
    from app.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Get synchronous test client."""
    return TestClient(app)


# =============================================================================
# Scoring Context Fixtures
# =============================================================================

@pytest.fixture
def now():
    """Fixed evaluation time shared by a whole batch."""
    return FIXED_NOW


@pytest.fixture
def institution_directory():
    """Preloaded institutions used for prestige scoring."""
    return InstitutionDirectory([
        InstitutionRecord(id="inst-top", ranking_global=12, established_year=1850),
        InstitutionRecord(id="inst-mid", ranking_global=320, established_year=1990),
    ])


@pytest.fixture
def context(now, institution_directory):
    """Scoring context with a fixed clock and known institutions."""
    return ScoringContext(now=now, institution_lookup=institution_directory)


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def cs_student():
    """Bachelor's student in Computer Science with a 3.9 GPA."""
    return StudentProfile(
        id="student-1",
        field_of_study="Computer Science",
        gpa=3.9,
        current_education_level="Bachelor",
    )


@pytest.fixture
def empty_student():
    """Student who has filled in nothing beyond the account."""
    return StudentProfile(id="student-empty")


@pytest.fixture
def make_scholarship(now):
    """Factory for scholarships with a deadline relative to ``now``."""

    def _make(id="sch-1", days_left=120, **overrides):
        fields = {
            "id": id,
            "title": f"Scholarship {id}",
            "application_deadline": (now + timedelta(days=days_left)).date(),
            "study_fields": [],
        }
        fields.update(overrides)
        return Scholarship(**fields)

    return _make


@pytest.fixture
def masters_scholarship(make_scholarship):
    """CS master's scholarship, 30k, deadline in 10 days, no restrictions."""
    return make_scholarship(
        id="sch-masters",
        days_left=10,
        study_fields=["Computer Science", "Engineering"],
        study_level="Master",
        min_gpa=3.0,
        amount=30000,
    )


@pytest.fixture
def institution():
    """French engineering school looking for candidates."""
    return InstitutionProfile(
        id="inst-profile-1",
        institution_name="Ecole Polytechnique",
        institution_type="university",
        country="France",
        focus_areas=["Computer Science", "Engineering"],
        ranking_global=40,
    )


@pytest.fixture
def strong_candidate():
    """Candidate with a complete, strong profile."""
    return StudentCandidate(
        id="cand-strong",
        full_name="Amina Diallo",
        email="amina@example.com",
        field_of_study="Computer Science",
        current_education_level="Master",
        gpa=3.95,
        nationality="Senegal",
        languages_spoken=["French", "English", "Wolof"],
        preferred_study_countries=["France"],
        financial_need_level=4,
        academic_achievements="Research publication at an international conference, dean's list",
        work_experience="Software development internship, research assistant, volunteer tutor",
        bio="Passionate about computer science research, my goal is a PhD.",
    )


@pytest.fixture
def sparse_candidate():
    """Candidate with almost nothing filled in."""
    return StudentCandidate(id="cand-sparse", full_name="Sam Doe")


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_repository():
    """Mock for RecommendationRepository with an empty data set."""
    mock = MagicMock()
    mock.get_profile = AsyncMock(return_value={"id": "student-1", "user_type": "student"})
    mock.get_student_profile = AsyncMock(return_value=None)
    mock.get_institution_profile = AsyncMock(return_value=None)
    mock.get_scholarship = AsyncMock(return_value=None)
    mock.get_active_scholarships = AsyncMock(return_value=[])
    mock.get_student_candidates = AsyncMock(return_value=[])
    mock.get_institutions = AsyncMock(return_value=[])
    mock.save_recommendation_history = AsyncMock(return_value=True)
    return mock


# =============================================================================
# Auth Fixtures
# =============================================================================

@pytest.fixture
def mock_user_id():
    """Authenticated student's user id."""
    return "student-1"


def make_token(user_id: str, expires_in: int = 3600) -> str:
    """Sign an HS256 Supabase-style access token with the test secret."""
    from app.config.settings import get_settings

    settings = get_settings()
    payload = {
        "sub": user_id,
        "aud": "authenticated",
        "iss": f"{settings.supabase_url}/auth/v1",
        "exp": int(time.time()) + expires_in,
    }
    return jwt.encode(payload, settings.supabase_jwt_secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def no_jwks_fetch():
    """Skip the JWKS network round trip; tokens fall through to HS256."""
    with patch(
        "app.api.dependencies._decode_with_jwks",
        side_effect=jwt.InvalidTokenError("JWKS unavailable in tests"),
    ):
        yield


@pytest.fixture
def token_factory():
    """Sign test tokens for arbitrary users."""
    return make_token


@pytest.fixture
def auth_headers(mock_user_id):
    """Bearer header for ``mock_user_id``."""
    return {"Authorization": f"Bearer {make_token(mock_user_id)}"}


@pytest.fixture
def service_role_headers():
    """Bearer header carrying the service role key."""
    return {"Authorization": f"Bearer {os.environ['SUPABASE_SERVICE_ROLE_KEY']}"}
