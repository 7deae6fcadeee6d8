"""
Authentication Routes - accounts and profiles.

Endpoints:
- POST /api/register: Create an account and receive a token
- POST /api/login: Exchange credentials for a token
- GET /api/auth/user: Current user's profile
- PATCH /api/auth/user: Update profile fields
"""
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from knowyourself.api.dependencies import get_current_user, get_user_store
from knowyourself.core.exceptions import AuthenticationError, DatabaseError, NotFoundError, ValidationError
from knowyourself.core.logging_config import get_logger
from knowyourself.core.security import create_access_token
from knowyourself.core.validators import normalize_username, validate_password, validate_username
from knowyourself.models.auth import (
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    TokenResponse,
    UserProfile,
)
from knowyourself.models.common import ErrorResponse
from knowyourself.storage.users import UserStore

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Authentication"],
    responses={401: {"model": ErrorResponse, "description": "Unauthorized"}},
)


def _clean(value: Optional[str]) -> Optional[str]:
    """Trim optional profile text; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=201,
    summary="Register a new account",
)
def register(
    body: RegisterRequest,
    users: UserStore = Depends(get_user_store)
) -> TokenResponse:
    """Create an account and log it in."""
    username = normalize_username(body.username)

    is_valid, error = validate_username(username)
    if not is_valid:
        raise ValidationError(error, field="username")

    is_valid, error = validate_password(body.password)
    if not is_valid:
        raise ValidationError(error, field="password")

    try:
        user = users.create(
            username=username,
            password=body.password,
            email=_clean(body.email),
            first_name=_clean(body.first_name),
            last_name=_clean(body.last_name),
        )
    except SQLAlchemyError as e:
        logger.error(f"Error creating account: {e}")
        raise DatabaseError("Failed to create account") from e

    return TokenResponse(access_token=create_access_token(user.id), user=user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Log in with username and password",
)
def login(
    body: LoginRequest,
    users: UserStore = Depends(get_user_store)
) -> TokenResponse:
    """Exchange credentials for an access token."""
    try:
        user = users.authenticate(normalize_username(body.username), body.password)
    except SQLAlchemyError as e:
        logger.error(f"Error during login: {e}")
        raise DatabaseError("Failed to log in") from e

    if user is None:
        raise AuthenticationError("Incorrect username or password")

    logger.info(f"User logged in: {user.id[:8]}")
    return TokenResponse(access_token=create_access_token(user.id), user=user)


@router.get(
    "/auth/user",
    response_model=UserProfile,
    summary="Current user's profile",
)
def get_profile(user: UserProfile = Depends(get_current_user)) -> UserProfile:
    return user


@router.patch(
    "/auth/user",
    response_model=UserProfile,
    summary="Update the current user's profile",
)
def update_profile(
    body: ProfileUpdate,
    user: UserProfile = Depends(get_current_user),
    users: UserStore = Depends(get_user_store)
) -> UserProfile:
    """Change name or email; fields left out of the body are not touched."""
    changes = {
        field: _clean(value)
        for field, value in body.model_dump(exclude_unset=True).items()
    }

    try:
        updated = users.update_profile(user.id, ProfileUpdate(**changes))
    except SQLAlchemyError as e:
        logger.error(f"Error updating profile: {e}")
        raise DatabaseError("Failed to update profile") from e

    if updated is None:
        raise NotFoundError("User not found")
    return updated
