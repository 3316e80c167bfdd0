# ============================================================================
# src/auto_centile/form/__init__.py
# ============================================================================
"""
Client-side form integration: bindings, status display, scheduler.
"""

from .bindings import FieldBinding
from .fields import FormFields, FieldHandler
from .status import (
    FieldStatus,
    FieldStatusBoard,
    StatusDisplay,
    CALCULATING_TEXT,
    ERROR_TEXT,
    format_centile,
    format_sds,
    describe_result,
)
from .calculator import CentileCalculator, HttpCentileCalculator, LocalCentileCalculator
from .scheduler import ReactiveFieldScheduler, SchedulerState, attach_scheduler

__all__ = [
    'FieldBinding',
    'FormFields',
    'FieldHandler',
    'FieldStatus',
    'FieldStatusBoard',
    'StatusDisplay',
    'CALCULATING_TEXT',
    'ERROR_TEXT',
    'format_centile',
    'format_sds',
    'describe_result',
    'CentileCalculator',
    'HttpCentileCalculator',
    'LocalCentileCalculator',
    'ReactiveFieldScheduler',
    'SchedulerState',
    'attach_scheduler',
]
