# ============================================================================
# src/auto_centile/constants/__init__.py
# ============================================================================
"""
Convenient imports for growth constants
"""

from .growth import (
    DEFAULT_GROWTH_API_URL,
    DEFAULT_GESTATION_WEEKS,
    DEFAULT_GESTATION_DAYS,
    DEFAULT_FIELD_NAMES,
    DEFAULT_BMI_DISPLAY_FIELD,
    RESULT_FIELD_ROLES,
    BMI_DECIMALS,
    CENTILE_DECIMALS,
    SDS_DECIMALS,
)

__all__ = [
    'DEFAULT_GROWTH_API_URL',
    'DEFAULT_GESTATION_WEEKS',
    'DEFAULT_GESTATION_DAYS',
    'DEFAULT_FIELD_NAMES',
    'DEFAULT_BMI_DISPLAY_FIELD',
    'RESULT_FIELD_ROLES',
    'BMI_DECIMALS',
    'CENTILE_DECIMALS',
    'SDS_DECIMALS',
]
