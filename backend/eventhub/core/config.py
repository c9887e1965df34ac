"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from typing import Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "EventHub API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    # Sessions
    SESSION_TTL_SECONDS: int = 86400  # 24 hours
    BCRYPT_ROUNDS: int = 12

    # Store
    SEED_CATEGORIES: bool = True

    # Optional admin account created at startup
    BOOTSTRAP_ADMIN_USERNAME: Optional[str] = None
    BOOTSTRAP_ADMIN_PASSWORD: Optional[str] = None
    BOOTSTRAP_ADMIN_EMAIL: str = "admin@example.com"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
