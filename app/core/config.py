"""
app/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (users file, email provider, etc.)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


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

    # Document store
    STORE_BACKEND: Literal["json", "memory"] = Field(
        default="json",
        description="Persistence backend for the user collection"
    )
    USERS_FILE: str = Field(
        default="users.json",
        description="Path of the JSON document holding the user collection"
    )
    USERS_FILE_INDENT: int = Field(
        default=2,
        description="Indentation used when writing the users document"
    )

    # Welcome email provider
    EMAIL_API_URL: Optional[str] = Field(
        default=None,
        description="HTTP endpoint of the transactional email provider"
    )
    EMAIL_API_KEY: Optional[str] = Field(
        default=None,
        description="Bearer token for the email provider"
    )
    EMAIL_SENDER: str = Field(
        default="no-reply@usuarios.local",
        description="From address for outgoing emails"
    )
    EMAIL_API_TIMEOUT: float = Field(
        default=10.0,
        description="Email provider request timeout in seconds"
    )
    WELCOME_EMAIL_SUBJECT: str = Field(
        default="¡Bienvenido!",
        description="Subject line of the welcome email"
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
        default="",
        description="API route prefix"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    HOST: str = Field(default="0.0.0.0", description="Bind address")
    PORT: int = Field(default=3000, description="Listen port")

    @field_validator("EMAIL_API_KEY")
    @classmethod
    def validate_email_api_key(cls, v, info: ValidationInfo):
        """Ensure the email provider key is set in production when a provider is configured."""
        data = info.data
        if data.get("ENVIRONMENT") == "production" and data.get("EMAIL_API_URL") and not v:
            raise ValueError("EMAIL_API_KEY is required when EMAIL_API_URL is set in production")
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

    if settings.STORE_BACKEND == "json" and not settings.USERS_FILE:
        errors.append("USERS_FILE is required for the json store")

    if settings.USERS_FILE_INDENT < 0:
        errors.append("USERS_FILE_INDENT must not be negative")

    if settings.EMAIL_API_TIMEOUT <= 0:
        errors.append("EMAIL_API_TIMEOUT must be positive")

    # Production-specific validations
    if settings.is_production:
        if settings.STORE_BACKEND == "memory":
            errors.append("STORE_BACKEND=memory is not allowed in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
