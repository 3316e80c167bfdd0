# ============================================================================
# src/auto_centile/config/form_config.py
# ============================================================================
"""
Form Integration Settings
- Target instrument allow-list
- Field name bindings (blank = conventional default)
- Debounce and initial-load timings
- Where the form posts its snapshots
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from ..constants import DEFAULT_BMI_DISPLAY_FIELD


class FormSettings(BaseSettings):
    TARGET_INSTRUMENTS: str = Field(
        default="",
        description="Comma-separated instruments the calculator attaches to"
    )

    # Input fields
    WEIGHT_FIELD: str = Field(default="", description="Weight (kg) field")
    HEIGHT_FIELD: str = Field(default="", description="Height (cm) field")
    DOB_FIELD: str = Field(default="", description="Date of birth field")
    SEX_FIELD: str = Field(default="", description="Sex radio group")
    MEASUREMENT_DATE_FIELD: str = Field(default="", description="Measurement date field")
    GESTATION_WEEKS_FIELD: str = Field(default="", description="Gestation weeks field")
    GESTATION_DAYS_FIELD: str = Field(default="", description="Gestation days field")

    # Result fields
    WEIGHT_CENTILE_FIELD: str = Field(default="", description="Weight centile result field")
    HEIGHT_CENTILE_FIELD: str = Field(default="", description="Height centile result field")
    BMI_CENTILE_FIELD: str = Field(default="", description="BMI centile result field")
    WEIGHT_SDS_FIELD: str = Field(default="", description="Weight SDS result field")
    HEIGHT_SDS_FIELD: str = Field(default="", description="Height SDS result field")
    BMI_SDS_FIELD: str = Field(default="", description="BMI SDS result field")

    BMI_DISPLAY_FIELD: str = Field(
        default=DEFAULT_BMI_DISPLAY_FIELD,
        description="Field next to which the BMI centile is shown inline"
    )

    DEBOUNCE_SECONDS: float = Field(
        default=1.0,
        description="Quiescence required after the last edit before calculating"
    )
    INITIAL_CALCULATION_DELAY: float = Field(
        default=0.5,
        description="Delay before the automatic pass on form load"
    )
    HEIGHT_MEASUREMENT_METHOD: str = Field(
        default="height",
        description="measurement_method sent for the height value (height or length)"
    )
    DATE_FORMAT_HINT: Optional[str] = Field(
        default=None,
        description="Form date format (dmy, mdy, ymd) when the host exposes it"
    )
    CALCULATE_URL: str = Field(
        default="http://localhost:8000/api/calculate-centiles",
        description="Calculation endpoint the form posts snapshots to"
    )
    CALCULATE_TIMEOUT: float = Field(
        default=30,
        description="Timeout for the form's calculation request (seconds)"
    )

    @property
    def target_instruments(self) -> List[str]:
        """Allow-list entries, trimmed, blanks dropped"""
        return [name.strip() for name in self.TARGET_INSTRUMENTS.split(",") if name.strip()]

    def is_target_instrument(self, instrument: str) -> bool:
        return instrument.strip() in self.target_instruments


form_settings = FormSettings()
