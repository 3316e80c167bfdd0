# ============================================================================
# src/auto_centile/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the auto centile calculator.
"""

from typing import Optional


class AutoCentileError(Exception):
    """Base exception for all auto centile errors."""
    pass


class CentileInputError(AutoCentileError):
    """Input could not be turned into measurement requests. Aborts the cycle."""
    pass


class EmptyDateError(CentileInputError):
    """Date value is empty after trimming."""

    def __init__(self, message: str = "Date cannot be empty"):
        super().__init__(message)


class InvalidDateFormatError(CentileInputError):
    """No candidate format parses the value as a valid calendar date."""

    def __init__(self, value: str, hint: Optional[str] = None):
        super().__init__(f"Invalid date format: {value} (hint: {hint or ''})")
        self.value = value
        self.hint = hint


class MissingRequiredFieldError(CentileInputError):
    """A field needed by every measurement is absent."""

    def __init__(self, field_name: str):
        super().__init__(f"Missing required field: {field_name}")
        self.field_name = field_name


class NoMeasurementsProvidedError(CentileInputError):
    """Neither weight, height nor OFC yielded a request."""

    def __init__(self, message: str = "No valid measurements provided"):
        super().__init__(message)


class InvalidSexCodeError(CentileInputError):
    """Sex code is not one of the configured codes (strict mode only)."""

    def __init__(self, code: str):
        super().__init__(f"Invalid sex code: {code}")
        self.code = code


class InvalidRequestError(CentileInputError):
    """Inbound request body is missing or not a JSON object."""
    pass


class ModuleContextUnavailableError(AutoCentileError):
    """Calculation entry point has no configured orchestrator."""

    def __init__(self, reason: str = "Module context not available"):
        super().__init__(f"Module initialization failed: {reason}")
        self.reason = reason


class ConfigurationError(AutoCentileError):
    """Invalid configuration."""
    pass


class RemoteCalculationError(AutoCentileError):
    """Client-side call to the calculation endpoint failed as a whole."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
