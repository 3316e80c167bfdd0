# ============================================================================
# src/auto_centile/utils/__init__.py
# ============================================================================
"""
Utility modules for the auto centile calculator.
"""

from .exceptions import (
    AutoCentileError,
    CentileInputError,
    EmptyDateError,
    InvalidDateFormatError,
    MissingRequiredFieldError,
    NoMeasurementsProvidedError,
    InvalidSexCodeError,
    InvalidRequestError,
    ModuleContextUnavailableError,
    ConfigurationError,
    RemoteCalculationError,
)

from .logging import (
    setup_logging,
    log_performance,
    JsonFormatter,
)

from .numbers import parse_numeric, round_half_up

__all__ = [
    # Exceptions
    'AutoCentileError',
    'CentileInputError',
    'EmptyDateError',
    'InvalidDateFormatError',
    'MissingRequiredFieldError',
    'NoMeasurementsProvidedError',
    'InvalidSexCodeError',
    'InvalidRequestError',
    'ModuleContextUnavailableError',
    'ConfigurationError',
    'RemoteCalculationError',
    # Logging
    'setup_logging',
    'log_performance',
    'JsonFormatter',
    # Numbers
    'parse_numeric',
    'round_half_up',
]
