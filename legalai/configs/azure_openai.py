"""
Azure OpenAI configuration settings.

Credentials and request limits for the language-model gateway.
Loaded once per process and injected into the gateway at construction.

Dependencies: pydantic_settings
System role: Language-model gateway configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AzureOpenAISettings(BaseSettings):
    """Settings for the Azure OpenAI chat-completion endpoint."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AZURE_OPENAI_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    endpoint: str = Field(default="", description="Azure OpenAI resource endpoint")
    api_key: str = Field(default="", description="Azure OpenAI API key")
    deployment_name: str = Field(
        default="gpt-4",
        description="Fallback deployment when a run does not name one",
    )
    api_version: str = Field(
        default="2024-02-15-preview",
        description="Azure OpenAI REST API version",
    )
    request_timeout: float = Field(default=120.0, description="Request timeout in seconds")
    analysis_max_tokens: int = Field(default=4000, description="Token cap for document analysis")
    verification_max_tokens: int = Field(default=500, description="Token cap for finding verification")

    @property
    def is_configured(self) -> bool:
        """Whether both endpoint and API key are present."""
        return bool(self.endpoint and self.api_key)
