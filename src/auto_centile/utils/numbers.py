# ============================================================================
# src/auto_centile/utils/numbers.py
# ============================================================================
"""
Numeric parsing and rounding for form values.
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

# Plain decimal or exponent notation; no inf/nan, no digit separators
NUMERIC_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def parse_numeric(value: Optional[str]) -> Optional[float]:
    """
    Parse a form value as a finite number.

    Returns None for blank, non-numeric, or overflowing values.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text or not NUMERIC_PATTERN.match(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def round_half_up(value: float, digits: int) -> Decimal:
    """Round like a calculator (2.345 -> 2.35), not banker's rounding."""
    quantum = Decimal(1).scaleb(-digits)
    return Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
