# ============================================================================
# src/auto_centile/config/growth_api_config.py
# ============================================================================
"""
Growth Reference API Settings
- Calculation endpoint
- API key (bearer token)
- Timeout
- TLS verification
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from ..constants import DEFAULT_GROWTH_API_URL


class GrowthApiSettings(BaseSettings):
    GROWTH_API_URL: str = Field(
        default=DEFAULT_GROWTH_API_URL,
        description="External growth-reference calculation endpoint"
    )
    GROWTH_API_KEY: Optional[str] = Field(
        default=None,
        description="Optional bearer token sent with every calculation"
    )
    GROWTH_API_TIMEOUT: float = Field(
        default=30,
        description="Per-call timeout (seconds)"
    )
    GROWTH_API_VERIFY_SSL: bool = Field(
        default=True,
        description="Verify the calculator's TLS certificate"
    )

    @field_validator("GROWTH_API_TIMEOUT")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("GROWTH_API_TIMEOUT must be positive")
        return value


growth_api_settings = GrowthApiSettings()
