"""
Custom Exceptions for the Scholarship Match service

Hierarchical exception classes for proper error handling across layers.
Every exception carries a stable ``code`` surfaced in the API error envelope.
"""

from typing import Optional, Dict, Any


class ScholarMatchError(Exception):
    """Base exception for all Scholarship Match errors."""

    code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error
        if code:
            self.code = code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the API error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class ValidationError(ScholarMatchError):
    """Raised when input validation fails."""

    code = "VALIDATION_ERROR"


class DatabaseError(ScholarMatchError):
    """Raised when database operations fail."""

    code = "DATA_ACCESS_ERROR"

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        table: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table
        super().__init__(message, details, original_error)


class NotFoundError(DatabaseError):
    """Raised when a requested resource is not found."""

    code = "NOT_FOUND"


class SubjectNotFoundError(NotFoundError):
    """Raised when the scoring subject is missing or has the wrong role."""

    code = "SUBJECT_NOT_FOUND"


class ScoringTimeoutError(ScholarMatchError):
    """Raised when a batch exceeds its wall-clock budget."""

    code = "SCORING_TIMEOUT"

    def __init__(
        self,
        message: str,
        budget_seconds: float,
        scored_count: int = 0,
    ):
        super().__init__(
            message,
            details={
                "budget_seconds": budget_seconds,
                "scored_count": scored_count,
            },
        )


class RecommendationError(ScholarMatchError):
    """Raised for unexpected failures while building recommendations."""

    code = "RECOMMENDATION_ERROR"


class ConfigurationError(ScholarMatchError):
    """Raised when configuration is missing or invalid."""

    code = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        missing_keys: Optional[list] = None,
        original_error: Optional[Exception] = None
    ):
        details = {}
        if missing_keys:
            details["missing_keys"] = missing_keys
        super().__init__(message, details, original_error)
