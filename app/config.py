"""
Configuration module for environment variables.
"""
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = Field(
        default="sqlite:///./tracker.db",
        description="SQLAlchemy connection URL"
    )

    # Authentication
    secret_key: str = Field(
        default="CHANGE_THIS_SECRET",
        description="HMAC key used to sign access tokens"
    )
    algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60)

    # Application Settings
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Convenience function for direct access
settings = get_settings()
