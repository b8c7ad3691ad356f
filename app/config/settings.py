"""
Application Settings for the Scholarship Match service

Centralized configuration using Pydantic Settings with .env support.
All environment variables are validated at startup.
"""

from functools import lru_cache
from typing import Optional
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Scoring defaults mirror the request contract: the scholarship
    direction returns up to 20 matches scoring 60+, the candidate
    direction up to 50 candidates scoring 70+.
    """

    # Supabase Configuration
    supabase_url: str
    supabase_service_role_key: str
    supabase_jwt_secret: Optional[str] = None
    supabase_client_timeout: int = 10

    # Application Settings
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # CORS Configuration
    allowed_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    # Scoring Defaults
    scholarship_default_limit: int = 20
    scholarship_min_score: float = 60.0
    candidate_default_limit: int = 50
    candidate_min_score: float = 70.0

    # Wall-clock budget for scoring one batch of candidates
    scoring_batch_timeout_seconds: float = 30.0

    # Recommendation history
    save_recommendation_history: bool = True
    algorithm_version: str = "v2.1.0"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_scoring_defaults(self) -> "Settings":
        """Reject scoring defaults that could never produce a result."""
        for name in ("scholarship_min_score", "candidate_min_score"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name.upper()} must be between 0 and 100")

        for name in ("scholarship_default_limit", "candidate_default_limit"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name.upper()} must be a positive integer")

        if self.scoring_batch_timeout_seconds <= 0:
            raise ValueError("SCORING_BATCH_TIMEOUT_SECONDS must be positive")

        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience export for direct import
settings = get_settings()
