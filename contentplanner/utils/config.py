"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

import random
from typing import Optional
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database (DATABASE_URL wins; SQLite file otherwise)
    DATABASE_URL: Optional[str] = None
    SQLITE_PATH: str = "contentplanner_dev.db"
    SQL_DEBUG: bool = False

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Fixed seed for reproducible mock data (None = system entropy)
    RANDOM_SEED: Optional[int] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields in .env file
        case_sensitive = False  # Allow both UPPERCASE and lowercase


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()


def make_random(seed: Optional[int] = None) -> random.Random:
    """
    Build the random source handed to the generators.

    An explicit seed wins over RANDOM_SEED from the environment.
    """
    if seed is None:
        seed = get_settings().RANDOM_SEED
    return random.Random(seed)
