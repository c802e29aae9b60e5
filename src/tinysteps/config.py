"""
Application Configuration

Uses Pydantic Settings for type-safe environment variable management.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    # ========================================================================
    # APPLICATION
    # ========================================================================

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    DEBUG: bool = False

    # ========================================================================
    # STORE
    # ========================================================================

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite://",
        description="In-memory SQLite connection string (async). State lives for the process only.",
    )

    # ========================================================================
    # LEARNING
    # ========================================================================

    DEFAULT_MARKET: str = Field(
        default="Singapore", description="Market recorded when consent omits one"
    )

    LESSON_ESTIMATED_MINUTES: int = Field(
        default=9, ge=1, description="Estimated duration attached to every daily lesson"
    )

    RECENT_REWARDS_LIMIT: int = Field(
        default=5, ge=1, description="Rewards shown on the progress dashboard"
    )

    REWARD_LABEL: str = Field(default="Shiny Star", description="Label of the completion sticker")

    # ========================================================================
    # COMPUTED PROPERTIES
    # ========================================================================

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.ENVIRONMENT == "production"

    @property
    def is_local(self) -> bool:
        """Check if running locally."""
        return self.ENVIRONMENT == "local"


# Global settings instance
settings = Settings()
