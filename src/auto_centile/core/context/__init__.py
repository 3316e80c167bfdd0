# ============================================================================
# src/auto_centile/core/context/__init__.py
# ============================================================================

from .enums import Metric, Sex, DateFormatHint, ApiErrorKind
from .measurement import RawInput, MeasurementRequest
from .outcome import (
    CentileOutcome,
    MetricError,
    MeasurementOutcome,
    AggregateResult,
    MetricResult,
    CalculationResponse,
)

__all__ = [
    'Metric',
    'Sex',
    'DateFormatHint',
    'ApiErrorKind',
    'RawInput',
    'MeasurementRequest',
    'CentileOutcome',
    'MetricError',
    'MeasurementOutcome',
    'AggregateResult',
    'MetricResult',
    'CalculationResponse',
]
