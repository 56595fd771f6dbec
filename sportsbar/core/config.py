"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Sports Bar API"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    # API
    API_PREFIX: str = "/api"
    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Storage
    STORAGE_BACKEND: str = "database"  # "database" or "memory"
    DATABASE_URL: str = "sqlite:///./sportsbar.db"
    SCHEMA_MANAGED_BY_ALEMBIC: bool = False

    # Fixtures (defaults to the bundled sportsbar/data directory)
    FIXTURES_DIR: Optional[Path] = None
    RUN_FIXTURE_MIGRATION: bool = True

    # JWT
    JWT_SECRET_KEY: str = "jwt-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
