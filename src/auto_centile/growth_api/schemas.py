# ============================================================================
# src/auto_centile/growth_api/schemas.py
# ============================================================================
"""
Typed view of the growth-reference calculator's response.

Decoded once at the API boundary; every value is optional so a missing
key surfaces downstream as None ("unknown"), never as a default number.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class MeasurementCalculatedValues(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    centile: Optional[float] = None
    sds: Optional[float] = None
    centile_band: Optional[str] = None
    chronological_decimal_age_error: Optional[str] = None
    corrected_decimal_age: Optional[float] = None
    clinician_comment: Optional[str] = None


class GrowthCalculationResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    measurement_calculated_values: Optional[MeasurementCalculatedValues] = None
