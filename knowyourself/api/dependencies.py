"""
Shared Dependencies for the API routers.

Provides:
- Store and service instances
- Authentication dependency (get_current_user)
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from knowyourself.core.exceptions import AuthenticationError
from knowyourself.core.logging_config import get_logger
from knowyourself.core.security import decode_access_token
from knowyourself.models.auth import UserProfile
from knowyourself.services.analysis_service import AnalysisGenerator, AnalysisService
from knowyourself.services.progress_service import ProgressCalculator
from knowyourself.storage import AnalysisStore, FinalLearningStore, ReflectionStore, UserStore

logger = get_logger(__name__)

# Token is read from "Authorization: Bearer <token>"; missing tokens are
# reported by get_current_user so the error body matches the other errors.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)

# One generator per process; it holds the configured LLM client
_analysis_generator: Optional[AnalysisGenerator] = None


def get_user_store() -> UserStore:
    return UserStore()


def get_reflection_store() -> ReflectionStore:
    return ReflectionStore()


def get_final_learning_store() -> FinalLearningStore:
    return FinalLearningStore()


def get_analysis_generator() -> AnalysisGenerator:
    """Get or create the shared analysis generator."""
    global _analysis_generator
    if _analysis_generator is None:
        _analysis_generator = AnalysisGenerator()
    return _analysis_generator


def get_analysis_service(
    reflections: ReflectionStore = Depends(get_reflection_store),
    generator: AnalysisGenerator = Depends(get_analysis_generator)
) -> AnalysisService:
    return AnalysisService(
        reflection_store=reflections,
        analysis_store=AnalysisStore(),
        generator=generator,
    )


def get_progress_calculator(
    reflections: ReflectionStore = Depends(get_reflection_store)
) -> ProgressCalculator:
    return ProgressCalculator(reflections)


def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    users: UserStore = Depends(get_user_store)
) -> UserProfile:
    """
    Resolve the caller from their bearer token.

    Raises:
        AuthenticationError: If the token is missing, invalid, expired,
            or belongs to an account that no longer exists
    """
    if not token:
        raise AuthenticationError("Not authenticated")

    user_id = decode_access_token(token)
    user = users.get(user_id)
    if user is None:
        logger.warning(f"Token for unknown user: {user_id[:8]}")
        raise AuthenticationError()

    return user
