"""
Redline pipeline settings.

Defaults applied when a run request omits profile or model names,
plus bounds used when building verification prompts.

Dependencies: pydantic_settings
System role: Redline run configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedlineSettings(BaseSettings):
    """Defaults for redline analysis runs."""

    model_config = SettingsConfigDict(
        env_prefix="REDLINE_",
        case_sensitive=False,
        extra="ignore",
    )

    default_profile_id: str = Field(default="default", description="Risk profile when none given")
    default_primary_model: str = Field(default="gpt-4", description="Primary analysis deployment")
    default_verifier_model: str = Field(default="gpt-4o", description="Verification deployment")
    verification_excerpt_chars: int = Field(
        default=1000,
        description="Leading document characters included in each verification prompt",
    )
    evidence_max_chars: int = Field(default=200, description="Evidence snippet length cap")
