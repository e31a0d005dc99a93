"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from legalai.configs.azure_openai import AzureOpenAISettings
from legalai.configs.base import BaseSettings
from legalai.configs.blob_storage import BlobStorageSettings
from legalai.configs.database import DatabaseSettings
from legalai.configs.editor import EditorSettings
from legalai.configs.redline import RedlineSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    azure_openai: AzureOpenAISettings = AzureOpenAISettings()
    blob_storage: BlobStorageSettings = BlobStorageSettings()
    editor: EditorSettings = EditorSettings()
    redline: RedlineSettings = RedlineSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from legalai.configs import get_settings
        settings = get_settings()
    """
    return Settings()
