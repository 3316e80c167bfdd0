# ============================================================================
# src/auto_centile/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .growth_api_config import GrowthApiSettings, growth_api_settings
from .form_config import FormSettings, form_settings
from .clinical_config import ClinicalSettings, clinical_settings
from .logging_config import LoggingSettings, logging_settings

__all__ = [
    'GrowthApiSettings',
    'growth_api_settings',
    'FormSettings',
    'form_settings',
    'ClinicalSettings',
    'clinical_settings',
    'LoggingSettings',
    'logging_settings',
]
