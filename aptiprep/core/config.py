"""
Application Configuration

Uses Pydantic Settings for environment variable management with validation.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Firebase project
    FIREBASE_PROJECT_ID: str = "aptiprep-learning-platform"
    FIREBASE_CREDENTIALS_PATH: str = "service-account-key.json"
    FIREBASE_WEB_API_KEY: str = ""

    # Document store backend
    DOCUMENT_STORE: Literal["firestore", "sql"] = "firestore"
    DATABASE_URL: str = "sqlite+aiosqlite:///./aptiprep.db"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Admin
    ADMIN_REDIRECT_DEFAULT: str = "/admin/dashboard"

    # Identity Toolkit HTTP calls
    HTTP_MAX_RETRIES: int = 0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are only loaded once.
    """
    return Settings()


# Global settings instance
settings = get_settings()
