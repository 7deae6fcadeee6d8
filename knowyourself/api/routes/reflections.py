"""
Reflection Routes - read and autosave answers.

Endpoints:
- GET /api/reflections: All of the caller's reflections
- GET /api/reflections/{question_id}: One reflection, or null
- POST /api/reflections: Upsert the caller's answer to a question
"""
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from knowyourself.api.dependencies import get_current_user, get_reflection_store
from knowyourself.catalog import get_question
from knowyourself.core.exceptions import DatabaseError, NotFoundError
from knowyourself.core.logging_config import get_logger
from knowyourself.models.auth import UserProfile
from knowyourself.models.common import ErrorResponse
from knowyourself.models.journal import Reflection, ReflectionCreate
from knowyourself.storage.reflections import ReflectionStore

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/reflections",
    tags=["Reflections"],
    responses={500: {"model": ErrorResponse, "description": "Storage failure"}},
)


@router.get(
    "",
    response_model=List[Reflection],
    summary="List the caller's reflections",
)
def list_reflections(
    user: UserProfile = Depends(get_current_user),
    store: ReflectionStore = Depends(get_reflection_store)
) -> List[Reflection]:
    try:
        return store.list(user.id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching reflections: {e}")
        raise DatabaseError("Failed to fetch reflections") from e


@router.get(
    "/{question_id}",
    response_model=Optional[Reflection],
    summary="Get the caller's reflection for one question",
)
def read_reflection(
    question_id: int,
    user: UserProfile = Depends(get_current_user),
    store: ReflectionStore = Depends(get_reflection_store)
) -> Optional[Reflection]:
    """Returns null when nothing was saved for this question yet."""
    try:
        return store.get(user.id, question_id)
    except SQLAlchemyError as e:
        logger.error(f"Error fetching reflection: {e}")
        raise DatabaseError("Failed to fetch reflection") from e


@router.post(
    "",
    response_model=Reflection,
    summary="Save a reflection",
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
)
def save_reflection(
    body: ReflectionCreate,
    user: UserProfile = Depends(get_current_user),
    store: ReflectionStore = Depends(get_reflection_store)
) -> Reflection:
    """
    Insert or update the caller's answer.

    Called by the client's autosave, so it is idempotent per question:
    saving again replaces the text rather than adding a row.
    """
    if get_question(body.question_id) is None:
        raise NotFoundError("Question not found", details=f"question_id={body.question_id}")

    try:
        return store.upsert(
            user_id=user.id,
            question_id=body.question_id,
            question_text=body.question_text,
            user_response=body.user_response,
        )
    except SQLAlchemyError as e:
        logger.error(f"Error saving reflection: {e}")
        raise DatabaseError("Failed to save reflection") from e
