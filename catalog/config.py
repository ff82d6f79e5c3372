"""Application configuration using Pydantic Settings.

This module centralizes all configuration values that may vary between environments.
Values can be overridden via environment variables or .env file.
"""
import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # ===== Application =====
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Attractions Catalog")
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    CLIENT_URL: str = os.getenv("CLIENT_URL", "http://localhost:3000")
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # ===== Database =====
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DATABASE_USER: str = os.getenv("DATABASE_USER", "root")
    DATABASE_PASSWORD: str = os.getenv("DATABASE_PASSWORD", "")
    DATABASE_HOST: str = os.getenv("DATABASE_HOST", "localhost")
    DATABASE_PORT: int = int(os.getenv("DATABASE_PORT", "3306"))
    DATABASE_NAME: str = os.getenv("DATABASE_NAME", "attractions")

    # ===== Security =====
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))
    PASSWORD_RESET_TOKEN_TTL_MINUTES: int = int(os.getenv("PASSWORD_RESET_TOKEN_TTL_MINUTES", "60"))
    PASSWORD_RESET_TOKEN_MIN_LENGTH: int = 32
    PASSWORD_RESET_TOKEN_MAX_LENGTH: int = 128
    PASSWORD_MIN_LENGTH: int = 6
    PASSWORD_MAX_LENGTH: int = 128
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))
    MAX_LOGIN_ATTEMPTS: int = int(os.getenv("MAX_LOGIN_ATTEMPTS", "5"))
    LOGIN_LOCK_MINUTES: int = int(os.getenv("LOGIN_LOCK_MINUTES", "120"))

    # ===== Email (SMTP) =====
    SMTP_HOST: Optional[str] = os.getenv("SMTP_HOST")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME: Optional[str] = os.getenv("SMTP_USERNAME")
    SMTP_PASSWORD: Optional[str] = os.getenv("SMTP_PASSWORD")
    SMTP_USE_TLS: bool = os.getenv("SMTP_USE_TLS", "true").lower() == "true"
    SMTP_FROM_EMAIL: str = os.getenv("SMTP_FROM_EMAIL", "noreply@attractions.local")
    SMTP_FROM_NAME: str = os.getenv("SMTP_FROM_NAME", "Attractions Catalog")
    SMTP_TIMEOUT_SECONDS: int = int(os.getenv("SMTP_TIMEOUT_SECONDS", "30"))

    # ===== Celery / Redis =====
    CELERY_BROKER_URL: str = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
    CELERY_ALWAYS_EAGER: bool = os.getenv("CELERY_ALWAYS_EAGER", "false").lower() == "true"
    REDIS_SOCKET_TIMEOUT_SECONDS: int = int(os.getenv("REDIS_SOCKET_TIMEOUT_SECONDS", "5"))

    # ===== Pagination Defaults =====
    DEFAULT_PAGE_SIZE: int = int(os.getenv("DEFAULT_PAGE_SIZE", "12"))
    MAX_PAGE_SIZE: int = int(os.getenv("MAX_PAGE_SIZE", "50"))
    SEARCH_MAX_LENGTH: int = int(os.getenv("SEARCH_MAX_LENGTH", "100"))
    SEARCH_SUGGESTIONS_MIN_QUERY: int = int(os.getenv("SEARCH_SUGGESTIONS_MIN_QUERY", "2"))
    SEARCH_SUGGESTIONS_ATTRACTIONS_LIMIT: int = int(os.getenv("SEARCH_SUGGESTIONS_ATTRACTIONS_LIMIT", "8"))
    SEARCH_SUGGESTIONS_CATEGORIES_LIMIT: int = int(os.getenv("SEARCH_SUGGESTIONS_CATEGORIES_LIMIT", "5"))
    RECENT_ATTRACTIONS_LIMIT: int = int(os.getenv("RECENT_ATTRACTIONS_LIMIT", "10"))

    # ===== Catalog Defaults =====
    DEFAULT_CATEGORY_COLOR: str = "#3B82F6"
    METRO_LINE_COLORS: List[str] = ["red", "blue", "green", "orange", "purple"]

    # ===== Logging & Debug =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Extra keys in .env that aren't defined here are ignored
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def database_url(self) -> str:
        """Full SQLAlchemy URL, built from the individual parts when not provided."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    @property
    def smtp_enabled(self) -> bool:
        return bool(self.SMTP_HOST and self.SMTP_USERNAME and self.SMTP_PASSWORD)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure singleton pattern - settings are loaded once.
    """
    return Settings()


# Global settings instance for easy import
settings = get_settings()
