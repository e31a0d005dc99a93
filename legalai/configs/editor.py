"""
Document editor integration settings.

Signing secret and URLs for the third-party (ONLYOFFICE) editor session handshake.

Dependencies: pydantic_settings
System role: Editor session configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EditorSettings(BaseSettings):
    """Settings for the embedded document editor."""

    model_config = SettingsConfigDict(
        env_prefix="EDITOR_",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str = Field(default="secret", description="Shared secret for editor tokens")
    jwt_algorithm: str = Field(default="HS256", description="Editor token signing algorithm")
    token_expiry_hours: int = Field(default=24, description="Editor token lifetime")
    server_url: str = Field(
        default="http://localhost:8080",
        description="Document editor server URL",
    )
    backend_url: str = Field(
        default="http://localhost:8000",
        description="Public URL of this API, used for editor callbacks",
    )
