# ============================================================================
# src/auto_centile/growth_api/__init__.py
# ============================================================================
"""
External growth-reference calculator integration.
"""

from .client import GrowthAPIClient, ApiCallResult, ApiError
from .schemas import GrowthCalculationResponse, MeasurementCalculatedValues

__all__ = [
    'GrowthAPIClient',
    'ApiCallResult',
    'ApiError',
    'GrowthCalculationResponse',
    'MeasurementCalculatedValues',
]
