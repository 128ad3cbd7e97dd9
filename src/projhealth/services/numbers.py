"""Lenient numeric parsing for user- and LLM-supplied values."""

import math
import re

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+))")


def as_float(value: object) -> float:
    """Coerce a number or numeric string to a finite float, else 0.0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return 0.0
        number = float(match.group(1))
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_leading_int(value: object) -> int:
    """Parse an integer prefix, truncating numbers (``"450 kcal"`` -> 450)."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int | float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def round_half_up(value: float) -> int:
    """Round halves away from zero for positives, like display rounding."""
    return math.floor(value + 0.5)


def non_negative_int(value: float) -> int:
    """Round and clamp a nutrient value for display."""
    return max(0, round_half_up(value))
