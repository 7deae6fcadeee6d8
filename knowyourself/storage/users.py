"""
User Store - accounts and profiles.
"""
import uuid
from datetime import datetime
from typing import Optional

from knowyourself.core.exceptions import ValidationError
from knowyourself.core.logging_config import get_logger
from knowyourself.core.security import hash_password, verify_password
from knowyourself.database.connection import DatabaseConnection, get_database
from knowyourself.database.models import User as UserRow
from knowyourself.models.auth import ProfileUpdate, UserProfile

logger = get_logger(__name__)


class UserStore:
    """Database-backed account storage."""

    def __init__(self, db: Optional[DatabaseConnection] = None):
        self.db = db or get_database()

    def create(
        self,
        username: str,
        password: str,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None
    ) -> UserProfile:
        """
        Create an account.

        Raises:
            ValidationError: If the username or email is already taken
        """
        with self.db.get_session() as db_session:
            if db_session.query(UserRow).filter(UserRow.username == username).first():
                raise ValidationError("Username already exists", field="username")

            if email and db_session.query(UserRow).filter(UserRow.email == email).first():
                raise ValidationError("Email already registered", field="email")

            row = UserRow(
                id=str(uuid.uuid4()),
                username=username,
                password_hash=hash_password(password),
                email=email,
                first_name=first_name,
                last_name=last_name,
            )
            db_session.add(row)
            db_session.commit()
            db_session.refresh(row)

            logger.info(f"User created: {row.id[:8]} ({username})")
            return UserProfile.model_validate(row)

    def get(self, user_id: str) -> Optional[UserProfile]:
        """Profile for a user id, or None."""
        with self.db.get_session() as db_session:
            row = db_session.get(UserRow, user_id)
            return UserProfile.model_validate(row) if row else None

    def authenticate(self, username: str, password: str) -> Optional[UserProfile]:
        """Profile for matching credentials, or None if they don't match."""
        with self.db.get_session() as db_session:
            row = db_session.query(UserRow).filter(UserRow.username == username).first()
            if row is None or not verify_password(password, row.password_hash):
                logger.warning(f"Failed login for username: {username[:32]!r}")
                return None
            return UserProfile.model_validate(row)

    def update_profile(self, user_id: str, update: ProfileUpdate) -> Optional[UserProfile]:
        """
        Apply the fields present in update; None if the user doesn't exist.

        Raises:
            ValidationError: If the new email belongs to another account
        """
        changes = update.model_dump(exclude_unset=True)

        with self.db.get_session() as db_session:
            row = db_session.get(UserRow, user_id)
            if row is None:
                return None

            email = changes.get("email")
            if email and email != row.email:
                taken = (
                    db_session.query(UserRow)
                    .filter(UserRow.email == email, UserRow.id != user_id)
                    .first()
                )
                if taken:
                    raise ValidationError("Email already registered", field="email")

            for field, value in changes.items():
                setattr(row, field, value)
            row.updated_at = datetime.utcnow()

            db_session.commit()
            db_session.refresh(row)

            logger.info(f"Profile updated: {user_id[:8]} fields={sorted(changes)}")
            return UserProfile.model_validate(row)
