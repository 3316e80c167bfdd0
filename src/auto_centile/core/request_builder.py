# ============================================================================
# src/auto_centile/core/request_builder.py
# ============================================================================
"""
Measurement Request Builder

Turns one form snapshot into zero or more measurement requests:
- weight  if weight is present and numeric
- height  if height is present and numeric (method overridable, e.g. length)
- bmi     if both are numeric and height > 0 (opportunistic, never an error)
- ofc     if head circumference is present and numeric

Dates are normalized once and shared by every request. Any input
failure aborts the whole build; there are no partial request lists.
"""

import logging
from typing import List, Optional

from .context.enums import Metric, Sex
from .context.measurement import MeasurementRequest, RawInput
from .dates import DateNormalizer
from ..config.clinical_config import ClinicalSettings, clinical_settings
from ..constants import BMI_DECIMALS, DEFAULT_GESTATION_DAYS, DEFAULT_GESTATION_WEEKS
from ..utils.exceptions import (
    InvalidSexCodeError,
    MissingRequiredFieldError,
    NoMeasurementsProvidedError,
)
from ..utils.numbers import parse_numeric, round_half_up

DEFAULT_HEIGHT_METHOD = "height"


def _present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


class MeasurementRequestBuilder:
    """Pure function over a RawInput; holds only its collaborators."""

    REQUIRED_FIELDS = ("birth_date", "measurement_date", "sex")

    def __init__(
        self,
        normalizer: Optional[DateNormalizer] = None,
        settings: Optional[ClinicalSettings] = None
    ):
        self.normalizer = normalizer or DateNormalizer()
        self.settings = settings or clinical_settings
        self.logger = logging.getLogger(__name__)

    def build(self, raw: RawInput) -> List[MeasurementRequest]:
        """
        Raises:
            MissingRequiredFieldError: birth_date, measurement_date or sex absent
            NoMeasurementsProvidedError: no weight, height or ofc to calculate
            EmptyDateError / InvalidDateFormatError: a date cannot be normalized
            InvalidSexCodeError: unknown sex code with STRICT_SEX_CODES
        """
        for field_name in self.REQUIRED_FIELDS:
            if not _present(getattr(raw, field_name)):
                raise MissingRequiredFieldError(field_name)

        if not any(_present(value) for value in (raw.weight, raw.height, raw.ofc)):
            raise NoMeasurementsProvidedError()

        birth_date = self.normalizer.normalize(raw.birth_date, raw.date_format)
        observation_date = self.normalizer.normalize(raw.measurement_date, raw.date_format)

        sex = self.map_sex(raw.sex)
        gestation_weeks = self._gestation(raw.gestation_weeks, DEFAULT_GESTATION_WEEKS)
        gestation_days = self._gestation(raw.gestation_days, DEFAULT_GESTATION_DAYS)

        def request(metric: Metric, value: float, method: str) -> MeasurementRequest:
            return MeasurementRequest(
                metric=metric,
                birth_date=birth_date,
                observation_date=observation_date,
                value=value,
                sex=sex,
                measurement_method=method,
                gestation_weeks=gestation_weeks,
                gestation_days=gestation_days,
            )

        weight = parse_numeric(raw.weight)
        height = parse_numeric(raw.height)
        ofc = parse_numeric(raw.ofc)

        requests: List[MeasurementRequest] = []

        if weight is not None:
            requests.append(request(Metric.WEIGHT, weight, Metric.WEIGHT.value))

        if height is not None:
            method = raw.measurement_method.strip() if _present(raw.measurement_method) else DEFAULT_HEIGHT_METHOD
            requests.append(request(Metric.HEIGHT, height, method))

        if weight is not None and height is not None:
            bmi = self.calculate_bmi(weight, height)
            if bmi is not None:
                requests.append(request(Metric.BMI, bmi, Metric.BMI.value))

        if ofc is not None:
            requests.append(request(Metric.OFC, ofc, Metric.OFC.value))

        if not requests:
            raise NoMeasurementsProvidedError()

        self.logger.debug(f"Built {len(requests)} measurement request(s): "
                          f"{[r.metric.value for r in requests]}")
        return requests

    @staticmethod
    def calculate_bmi(weight_kg: float, height_cm: float) -> Optional[float]:
        """BMI to 2 decimal places, or None when height is not positive."""
        height_m = height_cm / 100
        if height_m <= 0:
            return None
        return float(round_half_up(weight_kg / (height_m * height_m), BMI_DECIMALS))

    def map_sex(self, code: str) -> Sex:
        """
        Map the form's sex code.

        Unknown codes become female unless STRICT_SEX_CODES is set.
        """
        code = code.strip()
        if code == self.settings.SEX_MALE_CODE or code.lower() == Sex.MALE.value:
            return Sex.MALE
        if code in self.settings.female_codes or code.lower() == Sex.FEMALE.value:
            return Sex.FEMALE
        if self.settings.STRICT_SEX_CODES:
            raise InvalidSexCodeError(code)
        self.logger.warning(f"Unrecognized sex code '{code}' mapped to female")
        return Sex.FEMALE

    @staticmethod
    def _gestation(value: Optional[str], default: int) -> int:
        number = parse_numeric(value)
        if number is None:
            return default
        return int(number)
