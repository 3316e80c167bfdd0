# ============================================================================
# src/auto_centile/core/__init__.py
# ============================================================================
"""
Core components for the auto centile calculator.
"""

from .context import (
    Metric,
    Sex,
    DateFormatHint,
    ApiErrorKind,
    RawInput,
    MeasurementRequest,
    CentileOutcome,
    MetricError,
    MeasurementOutcome,
    AggregateResult,
    MetricResult,
    CalculationResponse,
)
from .dates import DateNormalizer, normalize_date
from .request_builder import MeasurementRequestBuilder
from .orchestrator import CentileOrchestrator

__all__ = [
    # Context
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

    # Pipeline
    'DateNormalizer',
    'normalize_date',
    'MeasurementRequestBuilder',
    'CentileOrchestrator',
]
