"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
- Records returned by the storage layer
"""
from knowyourself.models.common import CamelModel, HealthResponse, ErrorResponse
from knowyourself.models.journal import (
    Question,
    Reflection,
    ReflectionCreate,
    Analysis,
    FinalLearning,
    FinalLearningCreate,
    Progress,
)
from knowyourself.models.auth import (
    RegisterRequest,
    LoginRequest,
    TokenResponse,
    UserProfile,
    ProfileUpdate,
)

__all__ = [
    "CamelModel",
    "HealthResponse",
    "ErrorResponse",
    "Question",
    "Reflection",
    "ReflectionCreate",
    "Analysis",
    "FinalLearning",
    "FinalLearningCreate",
    "Progress",
    "RegisterRequest",
    "LoginRequest",
    "TokenResponse",
    "UserProfile",
    "ProfileUpdate",
]
