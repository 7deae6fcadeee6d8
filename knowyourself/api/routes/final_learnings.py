"""
Final Learnings Routes - the caller's closing reflection document.
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from knowyourself.api.dependencies import get_current_user, get_final_learning_store
from knowyourself.core.exceptions import DatabaseError
from knowyourself.core.logging_config import get_logger
from knowyourself.models.auth import UserProfile
from knowyourself.models.journal import FinalLearning, FinalLearningCreate
from knowyourself.storage.final_learnings import FinalLearningStore

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/final-learnings",
    tags=["Final Learnings"],
)


@router.get(
    "",
    response_model=Optional[FinalLearning],
    summary="Get the caller's final learnings",
)
def read_final_learnings(
    user: UserProfile = Depends(get_current_user),
    store: FinalLearningStore = Depends(get_final_learning_store)
) -> Optional[FinalLearning]:
    try:
        return store.get(user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching final learnings: {e}")
        raise DatabaseError("Failed to fetch final learnings") from e


@router.post(
    "",
    response_model=FinalLearning,
    summary="Save the caller's final learnings",
)
def save_final_learnings(
    body: FinalLearningCreate,
    user: UserProfile = Depends(get_current_user),
    store: FinalLearningStore = Depends(get_final_learning_store)
) -> FinalLearning:
    try:
        return store.upsert(user.id, body.self_written_learnings)
    except SQLAlchemyError as e:
        logger.error(f"Error saving final learnings: {e}")
        raise DatabaseError("Failed to save final learnings") from e
