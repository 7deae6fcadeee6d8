"""
Analysis Routes - AI discoveries.

Endpoints:
- GET /api/analysis: The caller's stored analysis, or null
- POST /api/analysis/generate: Generate a new analysis, replacing the old one

Generation is rate limited per user because every call goes to a paid
hosted model.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.exc import SQLAlchemyError

from knowyourself.api.dependencies import get_analysis_service, get_current_user
from knowyourself.core.exceptions import DatabaseError, RateLimitExceeded
from knowyourself.core.logging_config import get_logger
from knowyourself.core.rate_limiter import RateLimiter, get_rate_limiter
from knowyourself.models.auth import UserProfile
from knowyourself.models.common import ErrorResponse
from knowyourself.models.journal import Analysis
from knowyourself.services.analysis_service import AnalysisService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/analysis",
    tags=["Analysis"],
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
)


@router.get(
    "",
    response_model=Optional[Analysis],
    summary="Get the caller's analysis",
)
def read_analysis(
    user: UserProfile = Depends(get_current_user),
    service: AnalysisService = Depends(get_analysis_service)
) -> Optional[Analysis]:
    try:
        return service.get(user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching analysis: {e}")
        raise DatabaseError("Failed to fetch analysis") from e


@router.post(
    "/generate",
    response_model=Analysis,
    summary="Generate a new analysis",
    responses={
        400: {"model": ErrorResponse, "description": "No answered questions"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        503: {"model": ErrorResponse, "description": "AI service unavailable"},
    },
)
def generate_analysis(
    response: Response,
    user: UserProfile = Depends(get_current_user),
    service: AnalysisService = Depends(get_analysis_service),
    rate_limiter: RateLimiter = Depends(get_rate_limiter)
) -> Analysis:
    """
    Analyze every answered question and store the discoveries.

    Fails with 400 before calling the model when nothing has been answered;
    such requests do not count against the rate limit. Model failures leave
    the previously stored analysis in place.
    """
    try:
        response_texts = service.collect_responses(user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error loading reflections for analysis: {e}")
        raise DatabaseError("Failed to generate analysis") from e

    is_allowed, remaining = rate_limiter.is_allowed(user.id)

    response.headers["X-RateLimit-Limit"] = str(rate_limiter.limit)
    response.headers["X-RateLimit-Remaining"] = str(remaining)

    if not is_allowed:
        raise RateLimitExceeded(retry_after=rate_limiter.retry_after_seconds(user.id))

    try:
        return service.generate_for_user(user.id, response_texts)
    except SQLAlchemyError as e:
        logger.error(f"Error generating analysis: {e}")
        raise DatabaseError("Failed to generate analysis") from e
