"""Yard-service pricing inputs and rate tables.

Two pricing models share this module:

* **Tiered sub-service pricing** (lawn, garden, pressure-wash, hedge, gutter).
  Each service owns a ``ServiceRateCard``: ascending size breakpoints with a
  flat per-unit rate, a final limit-less tier, and a minimum charge.
* **Area-rate pricing** for generic residential / commercial yard quotes.
  A flat $/m² rate chosen by property type, scaled by condition and terrain
  (residential) or by business kind (commercial).

All tables are built once at import and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


ServiceKind = Literal["lawn", "garden", "pressure_wash", "hedge", "gutter"]

YardPropertyType = Literal["residential", "commercial"]
YardCommercialKind = Literal[
    "office", "event", "accommodation", "medical", "fitness", "hospitality", "education",
]
YardCondition = Literal["maintained", "overgrown", "heavy_neglected"]
YardTerrain = Literal["flat", "sloped", "steep_obstacles"]
ServiceProfile = Literal["lawn", "garden", "generic"]


# ═══════════════════════════════════════════════════════════════════════════
# Difficulty flags
# ═══════════════════════════════════════════════════════════════════════════

class DifficultyFlags(BaseModel):
    """Named complicating conditions. Each active flag multiplies the price."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    overgrown: bool = Field(default=False, description="Vegetation well past a normal cut (×1.3)")
    steep_slope: bool = Field(default=False, description="Steep ground slows every pass (×1.25)")
    tight_access: bool = Field(default=False, description="Narrow side access, no ride-on (×1.15)")
    urgent: bool = Field(default=False, description="Booked inside the normal lead time (×1.2)")


DIFFICULTY_MULTIPLIERS: MappingProxyType[str, float] = MappingProxyType({
    "overgrown": 1.3,
    "steep_slope": 1.25,
    "tight_access": 1.15,
    "urgent": 1.2,
})


# ═══════════════════════════════════════════════════════════════════════════
# Tier tables
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PricingTier:
    """One (upper-size-limit, rate) pair. ``limit=None`` is the catch-all tier."""

    limit: float | None
    """Inclusive upper size bound for this tier (m² or m)."""

    rate: float
    """Flat price per unit of size inside this tier."""


@dataclass(frozen=True)
class ServiceRateCard:
    """Tier table + minimum charge for one tiered sub-service."""

    tiers: tuple[PricingTier, ...]
    minimum_charge: float
    unit: Literal["m2", "m"]
    """``m2`` for area-priced services, ``m`` for perimeter-priced ones."""

    def __post_init__(self) -> None:
        if not self.tiers:
            raise ValueError("rate card needs at least one tier")
        if self.tiers[-1].limit is not None:
            raise ValueError("final tier must be limit-less")
        limits = [t.limit for t in self.tiers[:-1]]
        if any(lim is None for lim in limits):
            raise ValueError("only the final tier may be limit-less")
        if any(b <= a for a, b in zip(limits, limits[1:])):
            raise ValueError("tier limits must be strictly increasing")


SERVICE_RATE_CARDS: MappingProxyType[str, ServiceRateCard] = MappingProxyType({
    "lawn": ServiceRateCard(
        tiers=(
            PricingTier(300, 0.14),
            PricingTier(800, 0.10),
            PricingTier(2000, 0.07),
            PricingTier(None, 0.05),
        ),
        minimum_charge=60,
        unit="m2",
    ),
    "garden": ServiceRateCard(
        tiers=(
            PricingTier(300, 0.22),
            PricingTier(800, 0.18),
            PricingTier(None, 0.14),
        ),
        minimum_charge=90,
        unit="m2",
    ),
    "pressure_wash": ServiceRateCard(
        tiers=(
            PricingTier(100, 0.35),
            PricingTier(250, 0.28),
            PricingTier(None, 0.22),
        ),
        minimum_charge=120,
        unit="m2",
    ),
    "hedge": ServiceRateCard(
        tiers=(
            PricingTier(40, 4.5),
            PricingTier(120, 3.6),
            PricingTier(None, 3.0),
        ),
        minimum_charge=150,
        unit="m",
    ),
    "gutter": ServiceRateCard(
        tiers=(
            PricingTier(40, 4.0),
            PricingTier(120, 3.2),
            PricingTier(None, 2.6),
        ),
        minimum_charge=140,
        unit="m",
    ),
})


# ═══════════════════════════════════════════════════════════════════════════
# Area-rate model
# ═══════════════════════════════════════════════════════════════════════════

class YardPricingOptions(BaseModel):
    """Selections that drive the generic area-rate yard quote."""

    model_config = ConfigDict(extra="forbid")

    property_type: YardPropertyType = Field(default="residential")
    commercial_kind: YardCommercialKind | None = Field(
        default=None,
        description="Business category. Only read when property_type='commercial'.",
    )
    condition: YardCondition = Field(default="maintained", description="Residential only")
    terrain: YardTerrain = Field(default="flat", description="Residential only")
    service_profile: ServiceProfile = Field(
        default="garden",
        description="'lawn' uses the cheaper mowing rate and minimum; "
                    "'garden' and 'generic' use the garden-reset rate.",
    )


RESIDENTIAL_RATES: MappingProxyType[str, float] = MappingProxyType({
    "lawn": 1.0,
    "garden": 2.0,
    "generic": 2.0,
})
RESIDENTIAL_MIN_CHARGES: MappingProxyType[str, float] = MappingProxyType({
    "lawn": 80.0,
    "garden": 120.0,
    "generic": 120.0,
})
RESIDENTIAL_CONDITION: MappingProxyType[str, float] = MappingProxyType({
    "maintained": 1.0,
    "overgrown": 1.25,
    "heavy_neglected": 1.4,
})
RESIDENTIAL_TERRAIN: MappingProxyType[str, float] = MappingProxyType({
    "flat": 1.0,
    "sloped": 1.15,
    "steep_obstacles": 1.3,
})

COMMERCIAL_DEFAULT_RATE = 2.4
COMMERCIAL_RATES: MappingProxyType[str, float] = MappingProxyType({
    "office": 2.4,
    "event": 2.4,
    "accommodation": 2.4,
    "medical": 2.8,
    "fitness": 2.6,
    "hospitality": 2.8,
    "education": 2.6,
})
COMMERCIAL_MIN_CHARGE = 150.0
