"""Configuration models for the echo service."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .. import __version__


class ServiceConfig(BaseSettings):
    """Service configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
        populate_by_name=True,  # Allow both field names and validation aliases
    )

    # Environment configuration
    environment: Literal["development", "production"] = Field(
        default="development",
        description="The environment the service is running in",
        validation_alias="ENVIRONMENT",
    )
    service_name: str = Field(
        default="echo-service",
        description="Service name reported by the health endpoint",
        validation_alias="SERVICE_NAME",
    )
    service_version: str = Field(
        default=__version__,
        description="Service version reported by the health endpoint",
        validation_alias="SERVICE_VERSION",
    )

    # Routing configuration
    api_prefix: str = Field(
        default="",
        description="Path prefix the chat route is mounted under, e.g. '/api/chat'",
        validation_alias="API_PREFIX",
    )

    # Local server configuration
    host: str = Field(
        default="0.0.0.0",
        description="Bind host for the local server",
        validation_alias="HOST",
    )
    port: int = Field(
        default=8000,
        description="Bind port for the local server",
        validation_alias="PORT",
    )

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, value: str) -> str:
        value = value.strip()
        if not value:
            return ""
        if not value.startswith("/"):
            raise ValueError(f"api_prefix must start with '/', got '{value}'")
        return value.rstrip("/")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return not self.is_production
