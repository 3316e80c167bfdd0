# ============================================================================
# src/auto_centile/form/bindings.py
# ============================================================================
"""
Field role -> form field name, resolved once per rendered form.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Optional, Tuple

from ..config.form_config import FormSettings, form_settings
from ..constants import DEFAULT_BMI_DISPLAY_FIELD, DEFAULT_FIELD_NAMES, RESULT_FIELD_ROLES


@dataclass(frozen=True)
class FieldBinding:
    weight: str = DEFAULT_FIELD_NAMES["weight"]
    height: str = DEFAULT_FIELD_NAMES["height"]
    dob: str = DEFAULT_FIELD_NAMES["dob"]
    sex: str = DEFAULT_FIELD_NAMES["sex"]
    measurement_date: str = DEFAULT_FIELD_NAMES["measurement_date"]
    gestation_weeks: str = DEFAULT_FIELD_NAMES["gestation_weeks"]
    gestation_days: str = DEFAULT_FIELD_NAMES["gestation_days"]
    weight_centile: str = DEFAULT_FIELD_NAMES["weight_centile"]
    height_centile: str = DEFAULT_FIELD_NAMES["height_centile"]
    bmi_centile: str = DEFAULT_FIELD_NAMES["bmi_centile"]
    weight_sds: str = DEFAULT_FIELD_NAMES["weight_sds"]
    height_sds: str = DEFAULT_FIELD_NAMES["height_sds"]
    bmi_sds: str = DEFAULT_FIELD_NAMES["bmi_sds"]
    bmi_display: str = DEFAULT_BMI_DISPLAY_FIELD

    @classmethod
    def from_settings(cls, settings: Optional[FormSettings] = None) -> "FieldBinding":
        """Blank settings fall back to the conventional field name."""
        settings = settings or form_settings
        names = {
            role: getattr(settings, f"{role.upper()}_FIELD").strip() or default
            for role, default in DEFAULT_FIELD_NAMES.items()
        }
        names["bmi_display"] = settings.BMI_DISPLAY_FIELD.strip() or DEFAULT_BMI_DISPLAY_FIELD
        return cls(**names)

    def watched_fields(self) -> Tuple[str, ...]:
        """Fields whose change or blur schedules a calculation (sex is a radio group)"""
        return (self.weight, self.height, self.measurement_date)

    def result_fields(self, metric: str) -> Tuple[str, str]:
        """(centile field, sds field) for weight, height or bmi"""
        centile_role, sds_role = RESULT_FIELD_ROLES[metric]
        return getattr(self, centile_role), getattr(self, sds_role)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
