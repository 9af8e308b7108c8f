"""
Application configuration using Pydantic Settings.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./phaseflow.db"

    # ===========================================
    # Auth
    # ===========================================
    # The bearer token is trusted as the user id; without AUTH_REQUIRED,
    # header-less requests act as the development user.
    AUTH_REQUIRED: bool = False

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    # ===========================================
    # Routine / Streak
    # ===========================================
    # Share of a day's blocks that must be DONE for the day to count.
    DAY_SUCCESS_THRESHOLD: float = Field(default=0.7, gt=0.0, le=1.0)
    DEFAULT_CATEGORY_NAME: str = "Uncategorized"
    DEFAULT_BLOCK_COLOR: str = "primary"

    # Dashboard "mostly skipped" look-back window (days, including today)
    RECENT_PATTERN_DAYS: int = Field(default=5, ge=1, le=31)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
