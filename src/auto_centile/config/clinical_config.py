# ============================================================================
# src/auto_centile/config/clinical_config.py
# ============================================================================
"""
Clinical Coding Settings
- Sex code mapping from the form's radio values
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class ClinicalSettings(BaseSettings):
    SEX_MALE_CODE: str = Field(
        default="1",
        description="Form code recorded for male"
    )
    SEX_FEMALE_CODES: str = Field(
        default="0,2",
        description="Comma-separated form codes recorded for female"
    )
    STRICT_SEX_CODES: bool = Field(
        default=False,
        description="Reject unknown sex codes instead of mapping them to female"
    )

    @property
    def female_codes(self) -> List[str]:
        return [code.strip() for code in self.SEX_FEMALE_CODES.split(",") if code.strip()]


clinical_settings = ClinicalSettings()
