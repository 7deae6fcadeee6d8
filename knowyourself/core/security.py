"""
Security helpers - password hashing and access tokens.

Passwords are hashed with passlib; access tokens are HS256 JWTs signed
with python-jose. The token subject is the user's id.
"""
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from knowyourself.core.config import get_settings
from knowyourself.core.exceptions import AuthenticationError

JWT_ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password with a per-password salt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against its stored hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: str, expires_minutes: Optional[int] = None) -> str:
    """
    Create a signed access token for a user.

    Args:
        user_id: Stored as the token subject
        expires_minutes: Override for the configured lifetime

    Returns:
        JWT token string
    """
    settings = get_settings()
    minutes = expires_minutes if expires_minutes is not None else settings.token_expire_minutes
    expire = datetime.utcnow() + timedelta(minutes=minutes)
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    Verify a token and return the user id it was issued for.

    Raises:
        AuthenticationError: If the token is malformed, expired or has no subject
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        raise AuthenticationError("Invalid or expired token") from e

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid or expired token")
    return user_id
