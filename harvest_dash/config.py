"""
Configuration management for Harvest Dash.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from HARVEST_* environment variables."""

    # Difficulty
    difficulty_source: str = Field(
        default="config.json",
        description="Path or http(s) URL of the difficulty JSON"
    )
    config_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout for fetching a remote difficulty file"
    )

    # Display
    fps: int = Field(
        default=60,
        gt=0,
        description="Target frames per second"
    )
    window_title: str = Field(default="Harvest Dash")

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ...)"
    )

    # Randomness
    seed: Optional[int] = Field(
        default=None,
        description="Seed for crop and scarecrow placement. None means random"
    )

    class Config:
        env_prefix = "HARVEST_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Tests call get_settings.cache_clear() after changing the environment.
    """
    return Settings()
