"""
Analysis Store - the user's current AI discoveries.

Only the latest analysis is kept: replace() deletes any previous rows for
the user and inserts the new one inside a single transaction.
"""
from datetime import datetime
from typing import List, Optional

from knowyourself.core.logging_config import get_logger
from knowyourself.database.connection import DatabaseConnection, get_database
from knowyourself.database.models import Analysis as AnalysisRow
from knowyourself.models.journal import Analysis

logger = get_logger(__name__)


class AnalysisStore:
    """Database-backed storage for generated analyses."""

    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_database()

    def get(self, user_id: str) -> Optional[Analysis]:
        """The user's stored analysis, or None if none was generated yet."""
        with self.db.get_session() as db_session:
            row = (
                db_session.query(AnalysisRow)
                .filter(AnalysisRow.user_id == user_id)
                .order_by(AnalysisRow.analysis_timestamp.desc(), AnalysisRow.id.desc())
                .first()
            )
            return Analysis.model_validate(row) if row else None

    def replace(self, user_id: str, discoveries: List[str]) -> Analysis:
        """
        Store a new analysis in place of any existing one.

        Args:
            user_id: Owner of the analysis
            discoveries: Ordered discovery strings

        Returns:
            The stored analysis
        """
        with self.db.get_session() as db_session:
            removed = (
                db_session.query(AnalysisRow)
                .filter(AnalysisRow.user_id == user_id)
                .delete(synchronize_session=False)
            )

            row = AnalysisRow(
                user_id=user_id,
                self_discoveries=list(discoveries),
                analysis_timestamp=datetime.utcnow(),
            )
            db_session.add(row)
            db_session.commit()
            db_session.refresh(row)

            logger.info(
                f"Analysis stored: user={user_id[:8]}, discoveries={len(discoveries)}, "
                f"replaced={removed}"
            )
            return Analysis.model_validate(row)

    def count(self, user_id: str) -> int:
        """Number of analysis rows held for a user (0 or 1)."""
        with self.db.get_session() as db_session:
            return (
                db_session.query(AnalysisRow)
                .filter(AnalysisRow.user_id == user_id)
                .count()
            )
