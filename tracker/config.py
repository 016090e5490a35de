"""
Application configuration using Pydantic settings.

Usage:
    from tracker.config import get_settings
    settings = get_settings()
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Issue Tracker"
    debug: bool = Field(default=False)

    # Database
    database_url: str = Field(default="sqlite:///tracker.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")

    # Celery
    celery_broker_url: str = Field(default="redis://localhost:6379/1", validation_alias="CELERY_BROKER_URL")
    celery_result_backend: str = Field(default="redis://localhost:6379/2", validation_alias="CELERY_RESULT_BACKEND")
    celery_task_always_eager: bool = Field(default=False, validation_alias="CELERY_TASK_ALWAYS_EAGER")

    # Similarity search ingestion
    vector_service_url: Optional[str] = Field(default=None, validation_alias="VECTOR_SERVICE_URL")
    vector_service_timeout: float = Field(default=10.0, validation_alias="VECTOR_SERVICE_TIMEOUT")

    # Issue titles
    title_max_length: int = Field(default=80, ge=10, validation_alias="TITLE_MAX_LENGTH")

    @field_validator("vector_service_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """Normalize the vector service base URL; empty strings disable ingestion."""
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


__all__ = ["Settings", "get_settings"]
