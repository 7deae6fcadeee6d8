"""
Final-Learnings Store - a single closing document per user.
"""
from datetime import datetime
from typing import Optional

from knowyourself.core.logging_config import get_logger
from knowyourself.database.connection import DatabaseConnection, get_database
from knowyourself.database.models import FinalLearning as FinalLearningRow
from knowyourself.models.journal import FinalLearning

logger = get_logger(__name__)


class FinalLearningStore:
    """Database-backed storage for final learnings (upsert per user)."""

    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_database()

    def get(self, user_id: str) -> Optional[FinalLearning]:
        """The user's document, or None if nothing was saved yet."""
        with self.db.get_session() as db_session:
            row = self._find(db_session, user_id)
            return FinalLearning.model_validate(row) if row else None

    def upsert(self, user_id: str, text: Optional[str]) -> FinalLearning:
        """Replace the document text and refresh submitted_at, creating it on first save."""
        with self.db.get_session() as db_session:
            row = self._find(db_session, user_id)

            if row:
                row.self_written_learnings = text
                row.submitted_at = datetime.utcnow()
            else:
                row = FinalLearningRow(
                    user_id=user_id,
                    self_written_learnings=text,
                    submitted_at=datetime.utcnow(),
                )
                db_session.add(row)

            db_session.commit()
            db_session.refresh(row)

            logger.debug(f"Final learnings saved: user={user_id[:8]}, length={len(text or '')}")
            return FinalLearning.model_validate(row)

    @staticmethod
    def _find(db_session, user_id: str) -> Optional[FinalLearningRow]:
        return (
            db_session.query(FinalLearningRow)
            .filter(FinalLearningRow.user_id == user_id)
            .first()
        )
