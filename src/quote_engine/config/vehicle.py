"""Vehicle inputs, classifier rule table, and vehicle price constants."""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


VehicleCategory = Literal["hatch", "sedan", "suv", "ute", "van", "4wd", "luxury", "muscle"]
VehicleSizeCategory = Literal["hatch", "sedan", "suv", "ute", "van", "4wd"]
CarCategory = Literal["hatch", "sedan", "suv", "ute", "van", "4wd", "luxury", "muscle", "unknown"]

AutoService = Literal["wash", "interior", "full"]


class VehicleDescriptor(BaseModel):
    """Raw vehicle facts from a registration lookup. Any field may be missing.

    ``body_style`` also accepts the camelCase ``bodyStyle`` used by lookup
    clients. Any other unknown key is rejected.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    make: str | None = Field(default=None, description="Manufacturer, e.g. 'Toyota'")
    model: str | None = Field(default=None, description="Model name, e.g. 'HiAce'")
    body_style: str | None = Field(
        default=None,
        validation_alias=AliasChoices("body_style", "bodyStyle"),
        description="Free-text body style, e.g. 'Utility'",
    )
    seats: int | None = Field(default=None, description="Seat count, if the lookup knows it")

    @field_validator("seats", mode="before")
    @classmethod
    def _coerce_seats(cls, value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return int(value) if math.isfinite(value) else None
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None


# ═══════════════════════════════════════════════════════════════════════════
# Keyword knowledge base (normalised: lowercase, alphanumerics only)
# ═══════════════════════════════════════════════════════════════════════════

MUSCLE_MODELS = ("mustang", "camaro", "challenger", "charger")
LUXURY_MAKES = (
    "bmw", "mercedesbenz", "audi", "lexus", "porsche", "jaguar", "landrover", "volvo", "tesla",
)
UTE_MODELS = ("hilux", "ranger", "dmax", "navara", "triton", "ram")
VAN_MODELS = ("carnival", "hiace", "transporter", "multivan", "express", "trafic")
FOUR_WD_MODELS = ("landcruiser", "prado", "patrol", "defender", "landrover")
HATCH_HINTS = ("rio", "yaris", "swift", "fiesta", "mazda2", "polo", "i20", "i30")
SUV_MODELS = (
    "forester", "rav4", "crv", "xtrail", "outlander", "cx5", "sportage", "santafe", "kluger",
)


@dataclass(frozen=True)
class ScoringRule:
    """One signal in the classifier score table.

    Every condition present on the rule must hold for its weight to be added
    to ``category``.
    """

    category: VehicleCategory
    weight: int
    field: Literal["make", "model", "body"] | None = None
    """Normalised descriptor field the keywords are searched in."""

    keywords: tuple[str, ...] = ()
    """Substring matches; any one is enough."""

    min_seats: int | None = None
    body_excludes: tuple[str, ...] = ()
    body_present: bool = False
    """Requires a non-empty body style."""


_GENERIC_BODY = ("suv", "sedan", "hatch")

SCORING_RULES: tuple[ScoringRule, ...] = (
    # Hard overrides
    ScoringRule("muscle", 120, "model", MUSCLE_MODELS),
    ScoringRule("luxury", 90, "make", LUXURY_MAKES),
    # Vans outrank SUVs when ambiguous
    ScoringRule("van", 90, "model", VAN_MODELS),
    ScoringRule("van", 80, "body", ("van",)),
    ScoringRule("van", 75, min_seats=6, body_excludes=("suv",)),
    # Utes
    ScoringRule("ute", 85, "model", UTE_MODELS),
    ScoringRule("ute", 80, "body", ("utility", "pickup", "ute", "cab")),
    # 4WD sits above SUV for 7-seaters and known models
    ScoringRule("4wd", 85, "model", FOUR_WD_MODELS),
    ScoringRule("4wd", 80, "body", ("4wd", "awd")),
    ScoringRule("4wd", 75, "body", ("suv",), min_seats=7),
    ScoringRule("suv", 70, "body", ("suv",)),
    ScoringRule("suv", 70, "model", SUV_MODELS),
    ScoringRule("suv", 40, "body", ("wagon",)),
    # Sedans / hatches are the weakest signals
    ScoringRule("sedan", 35, "body", ("sedan",)),
    ScoringRule("hatch", 35, "body", ("hatch",)),
    ScoringRule("hatch", 25, "model", HATCH_HINTS),
    # Unspecific body text still nudges toward the common shapes
    ScoringRule("sedan", 5, body_excludes=_GENERIC_BODY, body_present=True),
    ScoringRule("hatch", 5, body_excludes=_GENERIC_BODY, body_present=True),
)

CATEGORY_PRIORITY: tuple[VehicleCategory, ...] = (
    "muscle", "luxury", "van", "ute", "4wd", "suv", "sedan", "hatch",
)
SIZE_PRIORITY: tuple[VehicleSizeCategory, ...] = ("van", "ute", "4wd", "suv", "sedan", "hatch")


# ═══════════════════════════════════════════════════════════════════════════
# Price adjustment
# ═══════════════════════════════════════════════════════════════════════════

SIZE_ADJUSTMENTS: MappingProxyType[str, float] = MappingProxyType({
    "hatch": 0,
    "sedan": 0,
    "suv": 20,
    "ute": 25,
    "van": 40,
    "4wd": 30,
})

CLASS_MULTIPLIERS: MappingProxyType[str, float] = MappingProxyType({
    "muscle": 1.2,
    "luxury": 1.15,
})

PRICE_ROUNDING_STEP = 5

# Age decay: (age_from, age_to, multiplier_from, multiplier_to)
AGE_NO_DISCOUNT_YEARS = 8
AGE_RAMPS: tuple[tuple[int, int, float, float], ...] = (
    (8, 15, 1.0, 0.92),
    (15, 25, 0.92, 0.85),
)
AGE_FLOOR_MULTIPLIER = 0.80

AUTO_SERVICE_BASE_PRICES: MappingProxyType[str, float] = MappingProxyType({
    "wash": 160,
    "interior": 170,
    "full": 290,
})
