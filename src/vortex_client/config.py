"""
Environment-driven settings for applications using the Vortex client.

The client itself never reads the environment; pass these settings to it
explicitly, e.g. ``VortexSettings().create_client()``.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .vortex import DEFAULT_BASE_URL, VortexClient


class VortexSettings(BaseSettings):
    """Reads VORTEX_API_KEY, VORTEX_API_BASE_URL and VORTEX_TIMEOUT."""

    model_config = SettingsConfigDict(env_prefix="VORTEX_", extra="ignore")

    api_key: SecretStr
    api_base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = Field(10.0, gt=0)

    def create_client(self) -> VortexClient:
        return VortexClient(
            self.api_key.get_secret_value(),
            base_url=self.api_base_url,
            timeout=self.timeout,
        )
