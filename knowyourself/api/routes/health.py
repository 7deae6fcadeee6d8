"""
Health Check Routes - System health and monitoring endpoints.

These endpoints are used for:
1. Load balancer health checks
2. Container liveness/readiness probes
"""
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from knowyourself import __version__
from knowyourself.core.logging_config import get_logger
from knowyourself.database.connection import get_database
from knowyourself.models.common import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
)
async def health_check() -> HealthResponse:
    """
    Perform a basic health check.

    Verifies that the API is running and responsive. It does not touch
    the database or the LLM provider.
    """
    logger.debug("Health check requested")

    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.utcnow()
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
    responses={503: {"model": HealthResponse, "description": "Database unreachable"}},
)
def readiness_check():
    """
    Perform a readiness check.

    Returns 503 when the database cannot be reached.
    """
    logger.debug("Readiness check requested")

    database_ok = get_database().check_connection()
    body = HealthResponse(
        status="ready" if database_ok else "unavailable",
        version=__version__,
        database="ok" if database_ok else "unreachable",
        timestamp=datetime.utcnow()
    )

    if not database_ok:
        return JSONResponse(status_code=503, content=body.model_dump(mode="json"))
    return body
