"""
Progress Service - how far a user is through the question catalog.

Nothing is stored: progress is recomputed from the user's reflections on
every request.
"""
import math
from typing import Optional

from knowyourself.catalog import TOTAL_QUESTIONS, question_ids
from knowyourself.core.logging_config import get_logger
from knowyourself.models.journal import Progress
from knowyourself.storage.reflections import ReflectionStore

logger = get_logger(__name__)


def has_response(text: Optional[str]) -> bool:
    """True when an answer has any non-whitespace content."""
    return bool(text and text.strip())


def percentage_of(completed: int, total: int) -> int:
    """Whole-number percentage, rounding halves up."""
    if total <= 0:
        return 0
    return int(math.floor(completed / total * 100 + 0.5))


class ProgressCalculator:
    """
    Derives completed/total/percentage for a user.

    Example:
        >>> ProgressCalculator().compute("user-1")
        Progress(completed=3, total=10, percentage=30)
    """

    def __init__(self, reflection_store: Optional[ReflectionStore] = None):
        self.reflection_store = reflection_store or ReflectionStore()

    def compute(self, user_id: str) -> Progress:
        """Count answered catalog questions for a user."""
        catalog_ids = question_ids()
        completed = sum(
            1
            for reflection in self.reflection_store.list(user_id)
            if reflection.question_id in catalog_ids and has_response(reflection.user_response)
        )

        progress = Progress(
            completed=completed,
            total=TOTAL_QUESTIONS,
            percentage=percentage_of(completed, TOTAL_QUESTIONS),
        )
        logger.debug(f"Progress for {user_id[:8]}: {progress.completed}/{progress.total}")
        return progress
