"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code and error code
- Used by the API layer for consistent error responses
- No stack traces leaked in production
"""
from typing import Optional


class KnowYourselfException(Exception):
    """
    Base exception for all application errors.

    Subclass this for specific error types.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


class NotFoundError(KnowYourselfException):
    """Raised when a requested resource does not exist."""
    status_code = 404
    error_code = "not_found"


class ValidationError(KnowYourselfException):
    """Raised when input validation fails."""
    status_code = 400
    error_code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details=f"field={field}" if field else None)
        self.field = field


class AuthenticationError(KnowYourselfException):
    """Raised when credentials or tokens are missing or invalid."""
    status_code = 401
    error_code = "authentication_error"

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)


class RateLimitExceeded(KnowYourselfException):
    """Raised when a user exceeds the rate limit."""
    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(self, retry_after: int = 60):
        super().__init__(
            message=f"Rate limit exceeded. Please wait {retry_after} seconds.",
            details=f"retry_after={retry_after}"
        )
        self.retry_after = retry_after


class DatabaseError(KnowYourselfException):
    """Raised when database operations fail."""
    status_code = 500
    error_code = "database_error"

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(message)


class LLMError(KnowYourselfException):
    """Raised when the analysis model cannot be reached or rejects the request."""
    status_code = 503
    error_code = "llm_error"

    def __init__(
        self,
        message: str = "AI analysis service is currently unavailable. Please try again later.",
        details: Optional[str] = None
    ):
        super().__init__(message, details)


class LLMQuotaError(LLMError):
    """Raised when the model provider reports a rate-limit or quota condition."""
    error_code = "llm_quota_exceeded"

    def __init__(self, details: Optional[str] = None):
        super().__init__(
            message=(
                "AI analysis is temporarily unavailable due to high demand. "
                "Please try again in a few minutes."
            ),
            details=details
        )


class LLMEmptyResponseError(LLMError):
    """Raised when the model returns no text."""
    status_code = 502
    error_code = "llm_empty_response"

    def __init__(self):
        super().__init__(message="Empty response from AI model")


class AnalysisParseError(ValueError):
    """
    Raised when the model's JSON is valid but not a list of strings.

    Like json.JSONDecodeError (also a ValueError), this is not mapped to a
    friendly message; the global handler turns it into a 500.
    """
    pass
