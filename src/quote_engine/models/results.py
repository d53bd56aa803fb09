"""Result types — the contract between the engine and its callers.

Every result is created per call and frozen once returned. Nothing here is
persisted by the engine; storing a finalised quote is the caller's job.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from quote_engine.config.geo import Coordinate
from quote_engine.config.vehicle import CarCategory, VehicleSizeCategory


# ═══════════════════════════════════════════════════════════════════════════
# Yard pricing
# ═══════════════════════════════════════════════════════════════════════════

class PricingResult(BaseModel):
    """Tiered sub-service price, with every intermediate kept for display."""

    model_config = ConfigDict(frozen=True)

    size: float
    """Measured size after coercion (m² or m). Never negative."""

    rate: float
    """Per-unit rate of the single tier that applied."""

    base_price: float
    """size × rate, before the lower-tier floor and the minimum charge."""

    priced: float
    """``base_price`` lifted to the lower-tier floor, before the minimum charge."""

    tier_floor_applied: bool
    """True when the lower-tier floor raised ``base_price``."""

    minimum_applied: bool
    """True when the minimum charge replaced ``priced``."""

    difficulty_multiplier: float
    """Product of all active difficulty flag multipliers (1.0 with none)."""

    final_price: int
    """Minimum-adjusted price × difficulty multiplier, rounded to whole dollars."""


class PolygonQuote(BaseModel):
    """Area-rate quote for a drawn yard outline."""

    model_config = ConfigDict(frozen=True)

    polygon: list[Coordinate]
    raw_area: int
    """Measured area (m²)."""
    perimeter: int
    """Measured boundary length (m)."""
    estimated_low: int
    estimated_high: int


class TimeEstimate(BaseModel):
    """Labour estimate for one job."""

    model_config = ConfigDict(frozen=True)

    hours: float
    """Estimated hours, rounded to 0.1."""
    minutes: int
    label: str
    """Customer-facing range, e.g. 'About 2–3 hours'."""


# ═══════════════════════════════════════════════════════════════════════════
# Vehicles
# ═══════════════════════════════════════════════════════════════════════════

class Classification(BaseModel):
    """Dual classifier output.

    ``category`` answers what kind of car this is for display; ``size_category``
    answers how much to charge for its size. A luxury SUV is
    ``category='luxury'`` and ``size_category='suv'``.
    """

    model_config = ConfigDict(frozen=True)

    category: CarCategory
    size_category: VehicleSizeCategory | None


class VehicleDetails(BaseModel):
    """Descriptor normalised from a registration-lookup payload, plus its classification."""

    model_config = ConfigDict(frozen=True)

    make: str
    model: str
    year: int | None = None
    body_style: str = ""
    doors: int | None = None
    seats: int | None = None
    category: CarCategory = "unknown"
    size_category: VehicleSizeCategory | None = None


# ═══════════════════════════════════════════════════════════════════════════
# Routing
# ═══════════════════════════════════════════════════════════════════════════

class RouteLookupResult(BaseModel):
    """Driving distance and duration between two points."""

    model_config = ConfigDict(frozen=True)

    distance_km: float
    duration_minutes: float
    source: Literal["provider", "fallback"] = "fallback"
    """'provider' when the remote lookup answered, else the great-circle estimate."""


class RouteQuote(BaseModel):
    """A route estimate with its transport price."""

    model_config = ConfigDict(frozen=True)

    route: RouteLookupResult
    route_key: str
    price: float
