"""Application settings and configuration management."""
from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    DB_PATH: str = Field(default="data/interviews.db")

    MAX_QUESTIONS: int = Field(default=10, ge=1)
    TIME_LIMIT_SECONDS: int = Field(default=1800, ge=0)
    FEEDBACK_THRESHOLD: float = 50.0

    DEFAULT_COMPETENCY: str = "General"
    DEFAULT_DIFFICULTY: float = Field(default=5.0, ge=1.0, le=10.0)
    COMPETENCY_TARGET_SCORE: float = 70.0

    SCORING_TABLES_PATH: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True)


settings = Settings()
