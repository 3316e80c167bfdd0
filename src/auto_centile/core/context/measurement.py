# ============================================================================
# src/auto_centile/core/context/measurement.py
# ============================================================================
"""
Measurement input and per-metric request
- RawInput: loosely formatted values as posted by the form
- MeasurementRequest: one validated, immutable request per metric
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .enums import Metric, Sex
from ...constants import DEFAULT_GESTATION_WEEKS, DEFAULT_GESTATION_DAYS


class RawInput(BaseModel):
    """Form snapshot for one calculation cycle. Every field is optional text."""

    model_config = ConfigDict(extra="ignore")

    birth_date: Optional[str] = None
    measurement_date: Optional[str] = None
    weight: Optional[str] = None
    height: Optional[str] = None
    ofc: Optional[str] = None
    sex: Optional[str] = None
    gestation_weeks: Optional[str] = None
    gestation_days: Optional[str] = None
    measurement_method: Optional[str] = None
    date_format: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        # JSON clients may send numbers; the builder works on text
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


@dataclass(frozen=True)
class MeasurementRequest:
    metric: Metric
    birth_date: date
    observation_date: date
    value: float
    sex: Sex
    measurement_method: str
    gestation_weeks: int = DEFAULT_GESTATION_WEEKS
    gestation_days: int = DEFAULT_GESTATION_DAYS

    def to_payload(self) -> Dict[str, Any]:
        """Body of the external calculation call"""
        return {
            "birth_date": self.birth_date.isoformat(),
            "observation_date": self.observation_date.isoformat(),
            "observation_value": self.value,
            "measurement_method": self.measurement_method,
            "sex": self.sex.value,
            "gestation_weeks": self.gestation_weeks,
            "gestation_days": self.gestation_days,
        }
