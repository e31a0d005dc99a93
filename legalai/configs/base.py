"""
Shared application settings.

Fields every deployment sets regardless of which collaborators it wires:
runtime environment, log level, CORS origins and the bind address used
when the API is launched directly.

Dependencies: pydantic_settings
System role: Root of the settings hierarchy
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class BaseSettings(PydanticBaseSettings):
    """Process-wide settings read from the environment or a local .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment name (development, staging, production)",
    )
    debug: bool = Field(default=False, description="FastAPI debug tracebacks")
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser",
    )
    api_host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    api_port: int = Field(default=8000, description="Bind port for uvicorn")

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level
