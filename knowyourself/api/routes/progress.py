"""
Progress Routes - dashboard completion summary.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from knowyourself.api.dependencies import get_current_user, get_progress_calculator
from knowyourself.core.exceptions import DatabaseError
from knowyourself.core.logging_config import get_logger
from knowyourself.models.auth import UserProfile
from knowyourself.models.journal import Progress
from knowyourself.services.progress_service import ProgressCalculator

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/progress",
    tags=["Progress"],
)


@router.get(
    "",
    response_model=Progress,
    summary="Get the caller's progress",
)
def read_progress(
    user: UserProfile = Depends(get_current_user),
    calculator: ProgressCalculator = Depends(get_progress_calculator)
) -> Progress:
    try:
        return calculator.compute(user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching progress: {e}")
        raise DatabaseError("Failed to fetch progress") from e
