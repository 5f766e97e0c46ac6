"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (DB URI, secrets, etc.)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, field_validator, ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # MongoDB
    MONGODB_URL: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI"
    )
    MONGODB_DB_NAME: str = Field(
        default="quickserve",
        description="MongoDB database name"
    )

    # Onboarding
    PROVIDER_CONFLICT_POLICY: Literal["resume", "fail"] = Field(
        default="resume",
        description=(
            "What a retried submission does when the provider record already exists: "
            "'resume' treats it as done, 'fail' reports it to the user"
        )
    )
    DEFAULT_SERVICE_RADIUS_KM: int = Field(
        default=10,
        description="Service radius written on newly created provider records"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    API_PREFIX: str = Field(
        default="/api/v1",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # Security
    SECRET_KEY: str = Field(
        default="change-me-in-production",
        description="Application secret key"
    )

    @field_validator("SECRET_KEY")
    @classmethod
    def validate_secret_key(cls, v: str, info: ValidationInfo) -> str:
        """Ensure secret key is changed in production."""
        if info.data.get("ENVIRONMENT") == "production" and v == "change-me-in-production":
            raise ValueError("SECRET_KEY must be changed in production environment")
        return v

    @field_validator("DEFAULT_SERVICE_RADIUS_KM")
    @classmethod
    def validate_service_radius(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("DEFAULT_SERVICE_RADIUS_KM must be positive")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


# Global settings instance
settings = Settings()


def validate_settings():
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    errors = []

    if not settings.MONGODB_URL:
        errors.append("MONGODB_URL is required")

    if not settings.MONGODB_DB_NAME:
        errors.append("MONGODB_DB_NAME is required")

    if settings.is_production and settings.DEBUG:
        errors.append("DEBUG must be disabled in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
