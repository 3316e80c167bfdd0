# ============================================================================
# src/auto_centile/core/context/enums.py
# ============================================================================
"""
Calculation Enums
- Measured metrics
- Sex
- Date format hints
- External API failure kinds
"""

from enum import Enum
from typing import Optional


class Metric(str, Enum):
    WEIGHT = "weight"
    HEIGHT = "height"
    BMI = "bmi"
    OFC = "ofc"         # occipito-frontal (head) circumference


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class DateFormatHint(str, Enum):
    DMY = "dmy"
    MDY = "mdy"
    YMD = "ymd"

    @classmethod
    def from_value(cls, value: Optional[str]) -> Optional["DateFormatHint"]:
        """
        Map a hint onto dmy/mdy/ymd.

        Accepts the bare order ("dmy") and the form's validation-type
        spellings ("date_dmy", "datetime_dmy", "datetime_seconds_dmy").
        Anything else means no hint.
        """
        if isinstance(value, cls):
            return value
        if not value:
            return None
        order = value.strip().lower().rsplit("_", 1)[-1]
        try:
            return cls(order)
        except ValueError:
            return None


class ApiErrorKind(str, Enum):
    TRANSPORT = "transport"   # connection error, timeout
    UPSTREAM = "upstream"     # non-200 from the calculator
    MALFORMED = "malformed"   # 200 with an undecodable body
