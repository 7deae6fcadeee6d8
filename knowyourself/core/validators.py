"""
Input Validators - Account field validation.

Reflection and learning texts are stored exactly as typed, so only
account fields are validated here.
"""
import re
from typing import Optional, Tuple

from knowyourself.core.logging_config import get_logger

logger = get_logger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,32}$")
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128


def normalize_username(username: str) -> str:
    """Strip surrounding whitespace and lowercase a username."""
    return (username or "").strip().lower()


def validate_username(username: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a (normalized) username.

    Args:
        username: Username to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not username:
        return False, "Username cannot be empty"

    if not USERNAME_PATTERN.match(username):
        logger.debug(f"Rejected username: {username[:32]!r}")
        return False, (
            "Username must be 3-32 characters of letters, digits, '.', '_' or '-'"
        )

    return True, None


def validate_password(password: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a password's length.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters"

    if len(password) > MAX_PASSWORD_LENGTH:
        return False, f"Password too long (max {MAX_PASSWORD_LENGTH} characters)"

    return True, None
