"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization
2. Router registration
3. Middleware configuration (audit & security headers)
4. Exception handlers (application exceptions, request validation)
5. Startup/shutdown events

Run with: uvicorn knowyourself.api.main:app --reload
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from knowyourself import __version__
from knowyourself.core.config import get_settings
from knowyourself.core.logging_config import setup_logging, get_logger
from knowyourself.core.exceptions import (
    KnowYourselfException,
    AuthenticationError,
    RateLimitExceeded,
)
from knowyourself.core.audit import AuditMiddleware, SecurityHeadersMiddleware
from knowyourself.api.routes import (
    health_router,
    auth_router,
    questions_router,
    reflections_router,
    analysis_router,
    final_learnings_router,
    progress_router,
)


# Initialize logging before anything else
settings = get_settings()
setup_logging(settings.log_level, settings.log_dir)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: create tables if missing
    - Shutdown: close pooled connections
    """
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"LLM Provider: {settings.llm_provider}")
    logger.info(f"Analysis Rate Limit: {settings.analysis_rate_limit_per_minute} req/min")
    logger.info(f"Audit Logging: {settings.enable_audit_logging}")

    from knowyourself.database import init_tables
    init_tables()

    yield  # Application runs here

    logger.info(f"Shutting down {settings.app_name}")

    from knowyourself.database import reset_database
    reset_database()


app = FastAPI(
    title="Know Yourself API",
    description="""
    Guided self-reflection journaling.

    ## Features

    - **Ten reflection questions** with guidance for each
    - **Autosaved answers**: one reflection per question, saved in place
    - **AI discoveries**: psychological insights generated from your answers
    - **Final learnings**: a closing summary in your own words
    - **Progress**: how many questions you have answered
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# Middleware Configuration (Order matters!)
# ============================================================

app.add_middleware(SecurityHeadersMiddleware)

if settings.enable_audit_logging:
    app.add_middleware(AuditMiddleware)
    logger.info("Audit logging middleware enabled")

if settings.is_development():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.warning("CORS configured for development (all origins allowed)")


# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers={"Retry-After": str(exc.retry_after)}
    )


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    """Handle missing or invalid credentials."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers={"WWW-Authenticate": "Bearer"}
    )


@app.exception_handler(KnowYourselfException)
async def application_exception_handler(request: Request, exc: KnowYourselfException):
    """Handle all custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies and parameters as 400 validation errors."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body") or None
    message = first.get("msg", "Invalid request")

    logger.warning(f"Request validation failed: {request.method} {request.url.path} field={field}")

    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": f"{field}: {message}" if field else message,
            "details": f"field={field}" if field else None,
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions globally.

    Detailed error information is only included in development mode.
    """
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "details": str(exc) if settings.is_development() else None,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(questions_router)
app.include_router(reflections_router)
app.include_router(analysis_router)
app.include_router(final_learnings_router)
app.include_router(progress_router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "message": "Know Yourself API",
        "version": __version__,
        "documentation": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "knowyourself.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development()
    )
