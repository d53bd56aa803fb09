"""Numeric coercion and half-up rounding shared by the pricing modules.

Python's built-in ``round`` rounds half to even; quotes round .5 upward.
"""

from __future__ import annotations

import math
from typing import Any


def finite_or_zero(value: Any) -> float:
    """Return ``value`` as a float, or 0.0 when missing, non-numeric, or non-finite."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def round_to_step(value: float, step: float) -> int:
    """Round to the nearest multiple of ``step`` (e.g. nearest $5)."""
    return int(round_half_up(value / step) * step)


def round_to_tenth(value: float) -> float:
    return round_half_up(value * 10) / 10
