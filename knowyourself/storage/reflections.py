"""
Reflection Store - one answer per (user, question).

Upserts look the row up by its (user_id, question_id) key first: an
existing row has its response and timestamp updated in place, otherwise a
new row is inserted. Repeated saves never create duplicates.
"""
from datetime import datetime
from typing import List, Optional

from knowyourself.core.logging_config import get_logger
from knowyourself.database.connection import DatabaseConnection, get_database
from knowyourself.database.models import Reflection as ReflectionRow
from knowyourself.models.journal import Reflection

logger = get_logger(__name__)


class ReflectionStore:
    """
    Database-backed storage for reflections.

    Example:
        >>> store = ReflectionStore()
        >>> store.upsert("user-1", 2, "Talk about a failure...", "I learned to be patient.")
        >>> store.get("user-1", 2).user_response
        'I learned to be patient.'
    """

    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_database()

    def list(self, user_id: str) -> List[Reflection]:
        """All of a user's reflections, ordered by question id."""
        with self.db.get_session() as db_session:
            rows = (
                db_session.query(ReflectionRow)
                .filter(ReflectionRow.user_id == user_id)
                .order_by(ReflectionRow.question_id)
                .all()
            )
            return [Reflection.model_validate(row) for row in rows]

    def get(self, user_id: str, question_id: int) -> Optional[Reflection]:
        """A single reflection, or None if the user never saved one for this question."""
        with self.db.get_session() as db_session:
            row = self._find(db_session, user_id, question_id)
            return Reflection.model_validate(row) if row else None

    def upsert(
        self,
        user_id: str,
        question_id: int,
        question_text: str,
        user_response: Optional[str]
    ) -> Reflection:
        """
        Insert or update the reflection for (user_id, question_id).

        The response is stored as given; blank answers are kept and simply
        do not count as completed.

        Returns:
            The stored reflection
        """
        with self.db.get_session() as db_session:
            row = self._find(db_session, user_id, question_id)

            if row:
                row.user_response = user_response
                row.updated_at = datetime.utcnow()
                action = "updated"
            else:
                row = ReflectionRow(
                    user_id=user_id,
                    question_id=question_id,
                    question_text=question_text,
                    user_response=user_response,
                    updated_at=datetime.utcnow(),
                )
                db_session.add(row)
                action = "created"

            db_session.commit()
            db_session.refresh(row)

            logger.debug(
                f"Reflection {action}: user={user_id[:8]}, question={question_id}, "
                f"length={len(user_response or '')}"
            )
            return Reflection.model_validate(row)

    @staticmethod
    def _find(db_session, user_id: str, question_id: int) -> Optional[ReflectionRow]:
        return (
            db_session.query(ReflectionRow)
            .filter(
                ReflectionRow.user_id == user_id,
                ReflectionRow.question_id == question_id,
            )
            .first()
        )
