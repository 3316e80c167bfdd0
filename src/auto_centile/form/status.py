# ============================================================================
# src/auto_centile/form/status.py
# ============================================================================
"""
Inline calculation status shown next to a source field.

At most one status per field: every redraw replaces the previous one.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

from ..constants import CENTILE_DECIMALS, SDS_DECIMALS
from ..core.context.outcome import MetricResult
from ..utils.numbers import round_half_up

CALCULATING_TEXT = "Calculating..."
ERROR_TEXT = "Error"


@dataclass(frozen=True)
class FieldStatus:
    text: str
    is_error: bool = False


class StatusDisplay(Protocol):
    def show(self, field_name: str, text: str, is_error: bool = False) -> None:
        ...

    def clear(self, field_name: str) -> None:
        ...


class FieldStatusBoard:
    """
    In-memory StatusDisplay.

    The optional render callback receives (field_name, status) on every
    change, status None meaning "remove"; hosts use it to redraw.
    """

    def __init__(self, render: Optional[Callable[[str, Optional[FieldStatus]], None]] = None):
        self._statuses: Dict[str, FieldStatus] = {}
        self._render = render

    def show(self, field_name: str, text: str, is_error: bool = False) -> None:
        status = FieldStatus(text=text, is_error=is_error)
        self._statuses[field_name] = status
        if self._render:
            self._render(field_name, status)

    def clear(self, field_name: str) -> None:
        if self._statuses.pop(field_name, None) is not None and self._render:
            self._render(field_name, None)

    def get(self, field_name: str) -> Optional[FieldStatus]:
        return self._statuses.get(field_name)

    def __len__(self) -> int:
        return len(self._statuses)


def format_centile(value: float) -> str:
    """87.46 -> '87.5'"""
    return str(round_half_up(value, CENTILE_DECIMALS))


def format_sds(value: float) -> str:
    """1.234 -> '1.23'"""
    return str(round_half_up(value, SDS_DECIMALS))


def describe_result(result: MetricResult, label: Optional[str] = None) -> str:
    """'50.0th centile (SDS: 0.00)', prefixed with the label when given."""
    centile = format_centile(result.centile) if result.centile is not None else "unknown"
    sds = format_sds(result.sds) if result.sds is not None else "unknown"
    text = f"{centile}th centile (SDS: {sds})"
    return f"{label}: {text}" if label else text
