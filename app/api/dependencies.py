"""
API Dependencies

FastAPI dependency injection for authentication, subject access checks
and the recommendation service.

Security: access tokens are Supabase JWTs verified against the project's
JWKS (ES256), falling back to the legacy HS256 secret. Tokens are never
decoded without verification.
"""

import hmac
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
from jwt import PyJWKClient
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.config.settings import get_settings
from app.domain.services import RecommendationService
from app.infrastructure.db.recommendation_repository import RecommendationRepository


logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

REQUIRED_CLAIMS = ["exp", "sub", "iss"]
TOKEN_AUDIENCE = "authenticated"

# PyJWKClient caches signing keys between requests
_jwks_client: Optional[PyJWKClient] = None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _get_jwks_client() -> PyJWKClient:
    """Return the shared PyJWKClient for the Supabase JWKS endpoint."""
    global _jwks_client
    if _jwks_client is None:
        settings = get_settings()
        jwks_url = f"{settings.supabase_url}/auth/v1/.well-known/jwks.json"
        _jwks_client = PyJWKClient(jwks_url, cache_keys=True)
    return _jwks_client


def _decode_with_jwks(token: str, issuer: str) -> Dict[str, Any]:
    """Verify an ES256 token against the project's published keys."""
    signing_key = _get_jwks_client().get_signing_key_from_jwt(token)
    return jwt.decode(
        token,
        signing_key.key,
        algorithms=["ES256"],
        issuer=issuer,
        audience=TOKEN_AUDIENCE,
        options={"require": REQUIRED_CLAIMS},
    )


def _decode_with_secret(token: str, secret: str, issuer: str) -> Dict[str, Any]:
    """Verify a legacy HS256 token with the shared JWT secret."""
    return jwt.decode(
        token,
        secret,
        algorithms=["HS256"],
        issuer=issuer,
        audience=TOKEN_AUDIENCE,
        options={"require": REQUIRED_CLAIMS},
    )


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Verify a Supabase access token and return its claims.

    JWKS is tried first so rotated asymmetric keys work without a
    deploy; the HS256 secret is only consulted when JWKS rejects the token.

    Raises:
        HTTPException 401: token expired or unverifiable.
    """
    settings = get_settings()
    issuer = f"{settings.supabase_url}/auth/v1"

    try:
        return _decode_with_jwks(token, issuer)
    except (jwt.exceptions.PyJWKClientError, jwt.InvalidTokenError) as e:
        logger.debug("JWKS verification failed, trying HS256 fallback: %s", e)

    if settings.supabase_jwt_secret:
        try:
            return _decode_with_secret(token, settings.supabase_jwt_secret, issuer)
        except jwt.ExpiredSignatureError:
            raise _unauthorized("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning("HS256 JWT verification also failed: %s", e)

    raise _unauthorized("Invalid or unverifiable token")


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Authenticated user ID (``sub`` claim) of the bearer token.

    Raises:
        HTTPException 401: token missing, expired, or invalid.
    """
    if not credentials:
        raise _unauthorized("Missing authorization token")

    user_id = verify_access_token(credentials.credentials).get("sub")
    if not user_id:
        raise _unauthorized("Invalid token: missing user ID")
    return user_id


@dataclass(frozen=True)
class Caller:
    """Authenticated caller of a recommendation endpoint."""

    user_id: Optional[str]
    is_service_role: bool = False


async def get_current_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Caller:
    """
    Resolve the caller from the bearer token.

    The Supabase service role key is accepted as-is and may act on any
    subject; anything else must be a verifiable user JWT.
    """
    settings = get_settings()
    service_key = settings.supabase_service_role_key
    if credentials and service_key and hmac.compare_digest(
        credentials.credentials.encode(), service_key.encode()
    ):
        return Caller(user_id=None, is_service_role=True)

    return Caller(user_id=await get_current_user_id(credentials))


def ensure_subject_access(caller: Caller, subject_id: str) -> None:
    """Users may only request recommendations for themselves."""
    if caller.is_service_role:
        return
    if caller.user_id != subject_id:
        logger.warning(
            "User %s attempted to request recommendations for %s",
            caller.user_id,
            subject_id,
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to request recommendations for this subject",
        )


def get_recommendation_service() -> RecommendationService:
    """Get recommendation service instance."""
    return RecommendationService(RecommendationRepository())
