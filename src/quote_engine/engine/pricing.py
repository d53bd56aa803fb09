"""Yard-service pricing — tiered sub-services and the area-rate model.

Tiered sub-services (lawn, garden, pressure-wash, hedge, gutter):

  rate        = first tier whose limit ≥ size (else the catch-all tier)
  base_price  = size × rate
  priced      = max(base_price, tier_floor)
  before_mult = minimum_charge if priced < minimum_charge else priced
  final_price = round(before_mult × Π active difficulty multipliers)

``tier_floor`` is the largest price reachable in any lower tier, so a job
that crosses into a cheaper per-unit tier never costs less than a smaller job.

Area-rate model (generic residential / commercial yard quotes):

  residential = max(min_charge, round(m² × rate × condition × terrain))
  commercial  = max(min_charge, round(m² × business-kind rate))
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from quote_engine.config.geo import Coordinate
from quote_engine.config.yard import (
    COMMERCIAL_DEFAULT_RATE,
    COMMERCIAL_MIN_CHARGE,
    COMMERCIAL_RATES,
    DIFFICULTY_MULTIPLIERS,
    RESIDENTIAL_CONDITION,
    RESIDENTIAL_MIN_CHARGES,
    RESIDENTIAL_RATES,
    RESIDENTIAL_TERRAIN,
    SERVICE_RATE_CARDS,
    DifficultyFlags,
    PricingTier,
    ServiceKind,
    ServiceRateCard,
    YardPricingOptions,
)
from quote_engine.engine.geometry import compute_area, compute_perimeter
from quote_engine.engine.rounding import finite_or_zero, round_half_up
from quote_engine.models.results import PolygonQuote, PricingResult


FlagsInput = DifficultyFlags | Mapping[str, bool] | None
OptionsInput = YardPricingOptions | Mapping[str, Any] | None


# ═══════════════════════════════════════════════════════════════════════════
# Tiered sub-services
# ═══════════════════════════════════════════════════════════════════════════

def _rate_card(service_kind: str) -> ServiceRateCard:
    try:
        return SERVICE_RATE_CARDS[service_kind]
    except KeyError:
        raise ValueError(
            f"Unknown service kind {service_kind!r}; expected one of {sorted(SERVICE_RATE_CARDS)}"
        ) from None


def _as_flags(flags: FlagsInput) -> DifficultyFlags:
    if flags is None:
        return DifficultyFlags()
    if isinstance(flags, DifficultyFlags):
        return flags
    return DifficultyFlags(**flags)


def pick_tier(size: float, tiers: Sequence[PricingTier]) -> tuple[int, PricingTier]:
    """Index and tier of the single tier that applies to ``size``."""
    for index, tier in enumerate(tiers):
        if tier.limit is None or size <= tier.limit:
            return index, tier
    return len(tiers) - 1, tiers[-1]


def tier_floor(tier_index: int, tiers: Sequence[PricingTier]) -> float:
    """Highest price reachable in the tiers below ``tier_index`` (0 for the first tier)."""
    return max((t.limit * t.rate for t in tiers[:tier_index] if t.limit is not None), default=0.0)


def difficulty_multiplier(flags: FlagsInput = None) -> float:
    """Product of the multipliers of every active flag. 1.0 when none are set."""
    active = _as_flags(flags)
    multiplier = 1.0
    for name, factor in DIFFICULTY_MULTIPLIERS.items():
        if getattr(active, name):
            multiplier *= factor
    return multiplier


def price_service(size: float, service_kind: ServiceKind, flags: FlagsInput = None) -> PricingResult:
    """Price one tiered sub-service job.

    ``size`` is m² for lawn / garden / pressure-wash and metres of edge for
    hedge / gutter. NaN, infinite and negative sizes count as 0 and so
    receive the minimum charge.
    """
    card = _rate_card(service_kind)
    size = max(0.0, finite_or_zero(size))

    index, tier = pick_tier(size, card.tiers)
    base_price = size * tier.rate
    priced = max(base_price, tier_floor(index, card.tiers))

    minimum_applied = priced < card.minimum_charge
    before_multiplier = card.minimum_charge if minimum_applied else priced
    multiplier = difficulty_multiplier(flags)

    return PricingResult(
        size=size,
        rate=tier.rate,
        base_price=base_price,
        priced=priced,
        tier_floor_applied=priced > base_price,
        minimum_applied=minimum_applied,
        difficulty_multiplier=multiplier,
        final_price=round_half_up(before_multiplier * multiplier),
    )


def price_lawn(area_m2: float, flags: FlagsInput = None) -> PricingResult:
    return price_service(area_m2, "lawn", flags)


def price_garden(area_m2: float, flags: FlagsInput = None) -> PricingResult:
    return price_service(area_m2, "garden", flags)


def price_pressure(area_m2: float, flags: FlagsInput = None) -> PricingResult:
    return price_service(area_m2, "pressure_wash", flags)


def price_hedges(perimeter_m: float, flags: FlagsInput = None) -> PricingResult:
    return price_service(perimeter_m, "hedge", flags)


def price_gutters(perimeter_m: float, flags: FlagsInput = None) -> PricingResult:
    return price_service(perimeter_m, "gutter", flags)


# ═══════════════════════════════════════════════════════════════════════════
# Area-rate model
# ═══════════════════════════════════════════════════════════════════════════

def _as_options(options: OptionsInput) -> YardPricingOptions:
    if options is None:
        return YardPricingOptions()
    if isinstance(options, YardPricingOptions):
        return options
    return YardPricingOptions(**options)


def _price_residential(area_m2: float, opts: YardPricingOptions) -> int:
    rate = RESIDENTIAL_RATES[opts.service_profile]
    minimum = RESIDENTIAL_MIN_CHARGES[opts.service_profile]
    price = area_m2 * rate * RESIDENTIAL_CONDITION[opts.condition] * RESIDENTIAL_TERRAIN[opts.terrain]
    return int(max(minimum, round_half_up(price)))


def _price_commercial(area_m2: float, opts: YardPricingOptions) -> int:
    rate = COMMERCIAL_RATES.get(opts.commercial_kind or "", COMMERCIAL_DEFAULT_RATE)
    return int(max(COMMERCIAL_MIN_CHARGE, round_half_up(area_m2 * rate)))


def price_from_area(area: float, options: OptionsInput = None) -> int:
    """Whole-dollar area-rate price for a yard of ``area`` m²."""
    opts = _as_options(options)
    area_m2 = max(0.0, finite_or_zero(area))
    if opts.property_type == "commercial":
        return _price_commercial(area_m2, opts)
    return _price_residential(area_m2, opts)


def area_rate(
    size: float,
    property_type: str = "residential",
    condition_or_kind: str | None = None,
    terrain: str | None = None,
    service_profile: str = "garden",
) -> int:
    """Flat-argument form of ``price_from_area``.

    ``condition_or_kind`` is the yard condition for residential properties and
    the business kind for commercial ones. ``terrain`` is ignored for
    commercial properties.
    """
    if property_type == "commercial":
        opts = YardPricingOptions(property_type="commercial", commercial_kind=condition_or_kind)
    else:
        opts = YardPricingOptions(
            property_type=property_type,
            condition=condition_or_kind or "maintained",
            terrain=terrain or "flat",
            service_profile=service_profile,
        )
    return price_from_area(size, opts)


def estimate_range(area: float, options: OptionsInput = None) -> tuple[int, int]:
    """(low, high) quote band. The area-rate model quotes a single figure."""
    price = price_from_area(area, options)
    return price, price


def _as_coordinate(point: Any) -> Coordinate:
    if isinstance(point, Coordinate):
        return point
    if isinstance(point, Mapping):
        return Coordinate(**point)
    lat, lng = point
    return Coordinate(lat=lat, lng=lng)


def compute_quote(polygon: Sequence[Any], options: OptionsInput = None) -> PolygonQuote:
    """Measure a drawn yard outline and price it with the area-rate model."""
    points = [_as_coordinate(p) for p in polygon]
    raw_area = compute_area(points)
    low, high = estimate_range(raw_area, options)
    return PolygonQuote(
        polygon=points,
        raw_area=raw_area,
        perimeter=compute_perimeter(points),
        estimated_low=low,
        estimated_high=high,
    )
