# ============================================================================
# src/prescription_assistant/config/network_config.py
# ============================================================================
"""
Network Settings
- Per-request and whole-resource timeouts
- Bounded retry policy for capability adapters
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NetworkSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    REQUEST_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for a response from the provider"
    )
    RESOURCE_TIMEOUT: float = Field(
        default=60.0,
        gt=0,
        description="Ceiling in seconds for one whole request"
    )
    MAX_RETRY_ATTEMPTS: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Total attempts per capability call"
    )
    RETRY_DELAY: float = Field(
        default=1.0,
        ge=0,
        description="Fixed delay in seconds between attempts"
    )


network_settings = NetworkSettings()
