"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()

DEFAULT_DATABASE_URL = "postgresql+psycopg2://localhost:5432/helpdesk"


def _split_keys(raw: str) -> tuple[str, ...]:
    return tuple(k.strip().lower() for k in raw.split(",") if k.strip())


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Helpdesk"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

    # Audit trail
    AUDIT_REDACT_KEYS: tuple[str, ...] = _split_keys(
        os.getenv("AUDIT_REDACT_KEYS", "password,token,ssn")
    )
    AUDIT_MAX_STRING_LENGTH: int = int(
        os.getenv("AUDIT_MAX_STRING_LENGTH", "10000")
    )
    AUDIT_DEFAULT_PAGE_SIZE: int = int(
        os.getenv("AUDIT_DEFAULT_PAGE_SIZE", "20")
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused for all
    subsequent calls, so environment variables are read once.
    """
    return Settings()
