"""
Question Routes - the fixed reflection catalog.

The full listing is public; single questions are only served to
logged-in users.
"""
from typing import List

from fastapi import APIRouter, Depends

from knowyourself.api.dependencies import get_current_user
from knowyourself.catalog import QUESTIONS, get_question
from knowyourself.core.exceptions import NotFoundError
from knowyourself.models.auth import UserProfile
from knowyourself.models.common import ErrorResponse
from knowyourself.models.journal import Question

router = APIRouter(
    prefix="/api/questions",
    tags=["Questions"],
)


@router.get(
    "",
    response_model=List[Question],
    summary="List all questions",
)
async def list_questions() -> List[Question]:
    return list(QUESTIONS)


@router.get(
    "/{question_id}",
    response_model=Question,
    summary="Get one question",
    responses={404: {"model": ErrorResponse, "description": "Question not found"}},
)
async def read_question(
    question_id: int,
    user: UserProfile = Depends(get_current_user)
) -> Question:
    question = get_question(question_id)
    if question is None:
        raise NotFoundError("Question not found", details=f"question_id={question_id}")
    return question
