"""Labour-time estimates — coverage rate per hour with slow-down factors.

  multiplier     = max(0.3, Π condition / slope / access factors)
  effective_rate = max(1, coverage_per_hour × multiplier)
  hours          = round₀.₁(overhead + size / effective_rate)

Every factor is < 1: it shrinks the effective rate and so lengthens the job.
The 0.3 floor stops many stacked factors from producing runaway estimates.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

from quote_engine.config.timing import (
    COVERAGE_RATES,
    MIN_COVERAGE_MULTIPLIER,
    STEEP_SLOPE_PERCENT,
    TIME_ESTIMATE_MIN_HOURS,
    TIME_OPTION_MODELS,
    CoverageRate,
    GardenTimeOptions,
    GutterTimeOptions,
    HedgeTimeOptions,
    LawnTimeOptions,
    PressureTimeOptions,
)
from quote_engine.config.yard import ServiceKind
from quote_engine.engine.rounding import finite_or_zero, round_half_up, round_to_tenth
from quote_engine.models.results import TimeEstimate


def is_steep_slope(slope_percent: float | None) -> bool:
    return finite_or_zero(slope_percent) >= STEEP_SLOPE_PERCENT


# ═══════════════════════════════════════════════════════════════════════════
# Per-service slow-down factors
# ═══════════════════════════════════════════════════════════════════════════

def _lawn_multiplier(opts: LawnTimeOptions) -> float:
    multiplier = 1.0
    if opts.condition_level == "heavy":
        multiplier *= 0.8
    if is_steep_slope(opts.slope_percent):
        multiplier *= 0.85
    if opts.tight_access:
        multiplier *= 0.9
    return multiplier


def _garden_multiplier(opts: GardenTimeOptions) -> float:
    multiplier = 1.0
    if opts.condition_level == "heavy":
        multiplier *= 0.55
    elif opts.condition_level == "standard":
        multiplier *= 0.7
    if is_steep_slope(opts.slope_percent):
        multiplier *= 0.8
    return multiplier


def _pressure_multiplier(opts: PressureTimeOptions) -> float:
    multiplier = 1.0
    if opts.heavy_grime:
        multiplier *= 0.8
    if opts.slope_or_access:
        multiplier *= 0.85
    return multiplier


def _hedge_multiplier(opts: HedgeTimeOptions) -> float:
    multiplier = 1.0
    if opts.thick_tall:
        multiplier *= 0.75
    if opts.tight_access:
        multiplier *= 0.85
    return multiplier


def _gutter_multiplier(opts: GutterTimeOptions) -> float:
    multiplier = 1.0
    if opts.heavy_debris:
        multiplier *= 0.75
    if opts.two_storey:
        multiplier *= 0.65
    return multiplier


_MULTIPLIERS: dict[str, Callable[[Any], float]] = {
    "lawn": _lawn_multiplier,
    "garden": _garden_multiplier,
    "pressure_wash": _pressure_multiplier,
    "hedge": _hedge_multiplier,
    "gutter": _gutter_multiplier,
}


# ═══════════════════════════════════════════════════════════════════════════
# Estimates
# ═══════════════════════════════════════════════════════════════════════════

def compute_coverage_hours(size: float, coverage: CoverageRate, multiplier: float) -> float:
    """Overhead plus size over the slowed-down coverage rate, rounded to 0.1 h."""
    effective_rate = max(coverage.per_hour * max(multiplier, MIN_COVERAGE_MULTIPLIER), 1.0)
    hours = coverage.overhead_hours + max(0.0, finite_or_zero(size)) / effective_rate
    return round_to_tenth(max(hours, 0.0))


def _as_options(service_kind: str, options: BaseModel | Mapping[str, Any] | None) -> BaseModel:
    model = TIME_OPTION_MODELS[service_kind]
    if options is None:
        return model()
    if isinstance(options, Mapping):
        return model(**options)
    if not isinstance(options, model):
        raise TypeError(
            f"{service_kind!r} expects {model.__name__}, got {type(options).__name__}"
        )
    return options


def estimate_hours(
    size: float,
    service_kind: ServiceKind,
    options: BaseModel | Mapping[str, Any] | None = None,
) -> float:
    """Labour hours for one job of ``size`` m² (or m of edge for hedge / gutter)."""
    if service_kind not in COVERAGE_RATES:
        raise ValueError(
            f"Unknown service kind {service_kind!r}; expected one of {sorted(COVERAGE_RATES)}"
        )
    opts = _as_options(service_kind, options)
    multiplier = _MULTIPLIERS[service_kind](opts)
    return compute_coverage_hours(size, COVERAGE_RATES[service_kind], multiplier)


def estimate_lawn_hours(area_m2: float, opts: LawnTimeOptions | None = None) -> float:
    return estimate_hours(area_m2, "lawn", opts)


def estimate_garden_hours(area_m2: float, opts: GardenTimeOptions | None = None) -> float:
    return estimate_hours(area_m2, "garden", opts)


def estimate_pressure_hours(area_m2: float, opts: PressureTimeOptions | None = None) -> float:
    return estimate_hours(area_m2, "pressure_wash", opts)


def estimate_hedge_hours(perimeter_m: float, opts: HedgeTimeOptions | None = None) -> float:
    return estimate_hours(perimeter_m, "hedge", opts)


def estimate_gutter_hours(perimeter_m: float, opts: GutterTimeOptions | None = None) -> float:
    return estimate_hours(perimeter_m, "gutter", opts)


def hours_to_minutes(hours: float) -> int:
    return round_half_up(max(0.0, finite_or_zero(hours)) * 60)


# ═══════════════════════════════════════════════════════════════════════════
# Customer-facing range
# ═══════════════════════════════════════════════════════════════════════════

def _format_range_value(value: float) -> str:
    return f"{value:.0f}" if float(value).is_integer() else f"{value:.1f}"


def format_time_estimate(estimated_hours: float) -> str:
    """Render hours as a human range, e.g. ``'About 2–3 hours'``.

    Hours are rounded to the nearest half-hour. Anything at or below 1.5 h
    reads "About 1–2 hours". A whole-hour anchor gets a one-hour window; a
    half-hour value gets a half-hour window ("About 2–2.5 hours").
    """
    clamped = max(finite_or_zero(estimated_hours), TIME_ESTIMATE_MIN_HOURS)
    rounded = round_half_up(clamped * 2) / 2
    if rounded <= 1.5:
        return "About 1–2 hours"
    anchor = int(rounded)
    is_half_anchor = abs(rounded - (anchor + 0.5)) < 0.001
    end = anchor + 0.5 if is_half_anchor else anchor + 1
    return f"About {_format_range_value(anchor)}–{_format_range_value(end)} hours"


def estimate_time(
    size: float,
    service_kind: ServiceKind,
    options: BaseModel | Mapping[str, Any] | None = None,
) -> TimeEstimate:
    """Hours, minutes and the customer-facing label for one job."""
    hours = estimate_hours(size, service_kind, options)
    return TimeEstimate(hours=hours, minutes=hours_to_minutes(hours), label=format_time_estimate(hours))
