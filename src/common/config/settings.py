# File: common/config/settings.py

from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Calculate base directory for consistent file paths
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = BASE_DIR / ".env"


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"  # "production" or "development"

    LOG_TO_FILE: bool = Field(True, description="Write logs to a daily file under src/logs")

    # MongoDB
    MONGO_URI: str = Field("mongodb://localhost:27017", description="MongoDB connection URI")
    MONGO_DB: str = Field("moger_mulluk_v2", description="MongoDB database name")
    MONGO_TIMEOUT: int = Field(5000, description="MongoDB server selection timeout in milliseconds")

    # Redis
    REDIS_HOST: str = Field("localhost", description="Redis host")
    REDIS_PORT: int = Field(6379, description="Redis port")
    REDIS_DB: int = Field(0, description="Redis database number")
    REDIS_PASSWORD: Optional[str] = Field(None, description="Redis password")

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = Field(True, description="Enable per-IP request throttling")
    RATE_LIMIT_REQUESTS: int = Field(20, description="Requests allowed per window and client IP")
    RATE_LIMIT_WINDOW: int = Field(60, description="Throttling window in seconds")

    # Cloudinary
    CLOUDINARY_CLOUD_NAME: str = Field("", description="Cloudinary cloud name")
    CLOUDINARY_API_KEY: str = Field("", description="Cloudinary API key")
    CLOUDINARY_API_SECRET: str = Field("", description="Cloudinary API secret")
    CLOUDINARY_FOLDER: str = Field("moger_mulluk", description="Folder every upload is stored under")
    CLOUDINARY_TIMEOUT: int = Field(60, description="Upload timeout in seconds")

    # Sentry
    SENTRY_DSN: Optional[str] = Field(None, description="Sentry DSN, disabled when empty")
    SENTRY_TRACES_SAMPLE_RATE: float = Field(0.0, description="Sentry performance sampling rate")
    SENTRY_SEND_PII: bool = Field(False, description="Send personally identifiable info to Sentry")

    # Localization
    SEARCH_LANGUAGES: List[str] = Field(
        default_factory=lambda: ["en", "bn", "hi", "es"],
        description="Languages whose title/description variants are searched"
    )

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")

    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Singleton settings instance
settings = Settings()
