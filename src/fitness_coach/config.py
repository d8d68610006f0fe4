"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: Literal["file", "memory"] = "file"
    storage_dir: Path = Path(".fitness_coach")
    timezone: str = "UTC"
    max_logs: int = Field(default=365, gt=0)
    streak_window_days: int = Field(default=35, gt=0)
    streak_completed_goals: int = Field(default=3, ge=1, le=4)
    stats_default_days: int = Field(default=30, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="FITNESS_COACH_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
