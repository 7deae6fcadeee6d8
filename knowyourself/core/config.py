"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.
"""
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for daily log files
        database_url: SQLAlchemy connection string
        secret_key: Key used to sign access tokens
        token_expire_minutes: Lifetime of an access token
        llm_provider: Which hosted model answers analysis requests ('google' or 'groq')
        google_api_key: API key for Google Gemini service
        groq_api_key: API key for Groq LLM service
        llm_model_analysis: Gemini model used for analysis
        llm_model_groq: Groq model used for analysis
        llm_temperature: LLM creativity (0.0 = deterministic, 1.0 = creative)
        llm_max_tokens: Maximum response length
        analysis_rate_limit_per_minute: Analysis generations allowed per user per minute
        enable_audit_logging: Log every request through AuditMiddleware
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    log_dir: str

    # Database settings
    database_url: str

    # Auth settings
    secret_key: str
    token_expire_minutes: int

    # LLM settings
    llm_provider: str
    google_api_key: str
    groq_api_key: str
    llm_model_analysis: str
    llm_model_groq: str
    llm_temperature: float
    llm_max_tokens: int

    # Safety settings
    analysis_rate_limit_per_minute: int
    enable_audit_logging: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def normalize_database_url(database_url: str) -> str:
    """
    Rewrite provider-style URLs into ones SQLAlchemy can load.

    Hosted databases hand out 'postgres://' and 'mysql://' URLs; SQLAlchemy
    needs 'postgresql://' and an explicit pymysql driver. The 'ssl-mode'
    query parameter is dropped because pymysql rejects it.
    """
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql://", 1)
    if database_url.startswith("mysql://"):
        database_url = database_url.replace("mysql://", "mysql+pymysql://", 1)

    if "ssl-mode=" in database_url:
        database_url = re.sub(r"[?&]ssl-mode=[^&]+", "", database_url)
        if "?" not in database_url and "&" in database_url:
            database_url = database_url.replace("&", "?", 1)

    return database_url


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with all configuration values

    Raises:
        ValueError: If required environment variables are missing
    """
    # Priority:
    # 1. DATABASE_URL (hosted Postgres/MySQL or sqlite)
    # 2. Local MySQL components (DB_HOST, DB_USER, etc)
    database_url = os.environ.get("DATABASE_URL")

    if not database_url:
        if os.environ.get("DB_HOST"):
            host = _get_env("DB_HOST")
            port = _get_env("DB_PORT", "3306")
            user = _get_env("DB_USER", "root")
            password = _get_env("DB_PASSWORD", "")
            name = _get_env("DB_NAME", "knowyourself")
            database_url = f"mysql+pymysql://{user}:{password}@{host}:{port}/{name}"
        else:
            database_url = "sqlite:///./knowyourself.db"

    # Either name is accepted for the Gemini key
    google_api_key = os.environ.get("GOOGLE_API_KEY") or os.environ.get("GEMINI_API_KEY", "")

    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "KnowYourself"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        log_dir=_get_env("LOG_DIR", "logs"),

        # Database
        database_url=normalize_database_url(database_url),

        # Auth
        secret_key=_get_env("SECRET_KEY"),
        token_expire_minutes=int(_get_env("TOKEN_EXPIRE_MINUTES", "10080")),

        # LLM
        llm_provider=_get_env("LLM_PROVIDER", "google").lower(),
        google_api_key=google_api_key,
        groq_api_key=_get_env("GROQ_API_KEY", ""),
        llm_model_analysis=_get_env("LLM_MODEL_ANALYSIS", "gemini-1.5-flash"),
        llm_model_groq=_get_env("LLM_MODEL_GROQ", "llama-3.3-70b-versatile"),
        llm_temperature=float(_get_env("LLM_TEMPERATURE", "0.7")),
        llm_max_tokens=int(_get_env("LLM_MAX_TOKENS", "2048")),

        # Safety
        analysis_rate_limit_per_minute=int(_get_env("ANALYSIS_RATE_LIMIT_PER_MINUTE", "5")),
        enable_audit_logging=_get_env("ENABLE_AUDIT_LOGGING", "true").lower() == "true",
    )
