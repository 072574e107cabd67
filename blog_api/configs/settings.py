"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the Blogging API backend.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 20
WORDS_PER_MINUTE = 200
MIN_PASSWORD_LENGTH = 6

# Response constants
DEFAULT_ERROR_MESSAGE = "Internal Server Error"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Blogging API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/app.log"
    PRODUCTION_FRONTEND_URL: str | None = None
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Database Configuration
    DATABASE_URL: str = "sqlite+aiosqlite:///./blog.db"
    DATABASE_ECHO: bool = False
    POOL_SIZE: int = 5
    MAX_OVERFLOW: int = 10
    POOL_TIMEOUT: int = 30  # seconds
    POOL_RECYCLE: int = 1800  # seconds

    # Token Configuration
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    JWT_ISSUER: str = "blog-api"
    JWT_AUDIENCE: str = "blog-api-clients"

    # Password hashing
    PASSWORD_SECURITY_LEVEL: Literal["low", "medium", "high"] = "medium"


settings = Settings()


class PasswordConfig(BaseModel):
    """Argon2id cost parameters for one security level."""

    memory_cost: int
    time_cost: int
    parallelism: int


CONFIG_MAP: dict[str, PasswordConfig] = {
    "low": PasswordConfig(memory_cost=8 * 1024, time_cost=1, parallelism=1),
    "medium": PasswordConfig(memory_cost=64 * 1024, time_cost=2, parallelism=2),
    "high": PasswordConfig(memory_cost=512 * 1024, time_cost=3, parallelism=4),
}


def pool_kwargs(database_url: str) -> dict[str, int | bool]:
    """
    Build connection pool arguments for the configured database.

    SQLite uses a single-connection pool, so sizing arguments only apply
    to server databases such as PostgreSQL.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        dict[str, int | bool]: Keyword arguments for ``create_async_engine``
    """
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.POOL_SIZE,
        "max_overflow": settings.MAX_OVERFLOW,
        "pool_timeout": settings.POOL_TIMEOUT,
        "pool_recycle": settings.POOL_RECYCLE,
        "pool_pre_ping": True,
    }
