"""
Account models - registration, login and profile payloads.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from knowyourself.models.common import CamelModel


class RegisterRequest(CamelModel):
    """Request body for POST /api/register."""
    username: str = Field(..., examples=["river"])
    password: str = Field(..., description="At least 8 characters")
    email: Optional[str] = Field(default=None, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class LoginRequest(CamelModel):
    """Request body for POST /api/login."""
    username: str
    password: str


class UserProfile(CamelModel):
    """Public view of an account."""
    id: str
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: datetime


class ProfileUpdate(CamelModel):
    """Request body for PATCH /api/auth/user; omitted fields are left unchanged."""
    email: Optional[str] = Field(default=None, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class TokenResponse(CamelModel):
    """Issued on successful registration or login."""
    access_token: str
    token_type: str = "bearer"
    user: UserProfile
