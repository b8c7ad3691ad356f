"""
Scholarship Match - FastAPI Application

Entry point for the recommendation API. Wires logging, CORS, the error
envelope and the recommendation routes.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import recommendations
from app.config.settings import settings
from app.infrastructure.exceptions import (
    ScholarMatchError,
    ValidationError,
    NotFoundError,
    DatabaseError,
    ScoringTimeoutError,
)

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Most specific class first; anything else maps to 500
ERROR_STATUS = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (DatabaseError, 502),
    (ScoringTimeoutError, 504),
)


def status_for(exc: ScholarMatchError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Scholarship Match starting in %s mode (algorithm %s)",
        settings.environment,
        settings.algorithm_version,
    )
    yield
    logger.info("Scholarship Match shutting down")


app = FastAPI(
    title="Scholarship Match",
    description="Scholarship and candidate matching for students and institutions",
    version="2.1.0",
    lifespan=lifespan,
    debug=settings.debug,
    docs_url=None if settings.is_production else "/docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ScholarMatchError)
async def scholar_match_error_handler(request: Request, exc: ScholarMatchError):
    """Render application errors as ``{"error": {"code", "message"}}``."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            "%s %s failed with %s: %s %s",
            request.method,
            request.url.path,
            exc.code,
            exc.message,
            exc.details,
        )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def describe_request_errors(exc: RequestValidationError) -> str:
    """One entry per invalid field, e.g. ``minScore: Input should be ...``."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies use the same envelope as application errors."""
    error = ValidationError(describe_request_errors(exc), details={"errors": exc.errors()})
    return JSONResponse(status_code=status_for(error), content=error.to_dict())


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "scholarship-match"}


@app.get("/")
async def root():
    return {
        "message": "Scholarship Match API",
        "version": settings.algorithm_version,
        "docs": None if settings.is_production else "/docs",
    }


app.include_router(recommendations.router, prefix="/api", tags=["Recommendations"])
