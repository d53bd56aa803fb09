"""Vehicle price adjustment — size add-on, class multiplier, age decay.

  effective_size = size_category, else category when it is size-eligible
  price          = (base + size add-on) × class multiplier × age multiplier
  final          = max(0, price rounded to the nearest $5)

Age multiplier by vehicle age (current year − build year):

  ≤ 8 y     1.00
  8–15 y    linear 1.00 → 0.92
  15–25 y   linear 0.92 → 0.85
  > 25 y    0.80
  missing   1.00
"""

from __future__ import annotations

import datetime
import math
from collections.abc import Mapping
from typing import Any

from quote_engine.config.vehicle import (
    AGE_FLOOR_MULTIPLIER,
    AGE_NO_DISCOUNT_YEARS,
    AGE_RAMPS,
    AUTO_SERVICE_BASE_PRICES,
    CLASS_MULTIPLIERS,
    PRICE_ROUNDING_STEP,
    SIZE_ADJUSTMENTS,
    AutoService,
    VehicleDescriptor,
)
from quote_engine.engine.classifier import classify_vehicle
from quote_engine.engine.rounding import finite_or_zero, round_to_step


def _current_year() -> int:
    return datetime.date.today().year


def age_multiplier(vehicle_year: Any = None, current_year: int | None = None) -> float:
    """Age-decay multiplier. 1.0 when the year is missing, zero, or not a finite number."""
    if vehicle_year is None or isinstance(vehicle_year, bool):
        return 1.0
    try:
        year = float(vehicle_year)
    except (TypeError, ValueError):
        return 1.0
    if not math.isfinite(year) or year == 0:
        return 1.0

    now = current_year if current_year is not None else _current_year()
    age = max(0.0, now - year)
    if age <= AGE_NO_DISCOUNT_YEARS:
        return 1.0
    for start, end, m_start, m_end in AGE_RAMPS:
        if age <= end:
            return m_start - ((age - start) / (end - start)) * (m_start - m_end)
    return AGE_FLOOR_MULTIPLIER


def resolve_size_category(category: str | None, size_category: str | None) -> str | None:
    """Explicit size category first, then the primary category if it is size-eligible."""
    if size_category in SIZE_ADJUSTMENTS:
        return size_category
    if category in SIZE_ADJUSTMENTS:
        return category
    return None


def calculate_price(
    base_price: Any,
    category: str | None,
    size_category: str | None = None,
    vehicle_year: Any = None,
    current_year: int | None = None,
) -> int:
    """Final vehicle service price, rounded to the nearest $5 and never negative."""
    base = finite_or_zero(base_price)
    size = resolve_size_category(category, size_category)
    after_size = base + (SIZE_ADJUSTMENTS[size] if size else 0)
    class_multiplier = CLASS_MULTIPLIERS.get(category or "", 1.0)
    adjusted = after_size * class_multiplier * age_multiplier(vehicle_year, current_year)
    return max(0, round_to_step(adjusted, PRICE_ROUNDING_STEP))


def price_vehicle_service(
    service: AutoService,
    vehicle: VehicleDescriptor | Mapping[str, Any],
    vehicle_year: Any = None,
    current_year: int | None = None,
) -> int:
    """Classify a vehicle and price one auto-detailing service for it."""
    if service not in AUTO_SERVICE_BASE_PRICES:
        raise ValueError(
            f"Unknown auto service {service!r}; expected one of {sorted(AUTO_SERVICE_BASE_PRICES)}"
        )
    classification = classify_vehicle(vehicle)
    return calculate_price(
        AUTO_SERVICE_BASE_PRICES[service],
        classification.category,
        classification.size_category,
        vehicle_year,
        current_year,
    )
