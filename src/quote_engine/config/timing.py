"""Labour-time inputs — coverage rates and per-service condition options."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


ConditionLevel = Literal["light", "standard", "heavy"]

MIN_COVERAGE_MULTIPLIER = 0.3
"""Floor on the compounded slow-down multiplier."""

STEEP_SLOPE_PERCENT = 35.0
"""Slope (%) at or above which ground counts as steep."""

TIME_ESTIMATE_MIN_HOURS = 0.5
"""Smallest value the customer-facing range formatter will consider."""


@dataclass(frozen=True)
class CoverageRate:
    """How fast a crew covers ground for one service."""

    per_hour: float
    """m² (or m of edge) completed per hour in ideal conditions."""

    overhead_hours: float
    """Fixed set-up / pack-down time per job."""


COVERAGE_RATES: MappingProxyType[str, CoverageRate] = MappingProxyType({
    "lawn": CoverageRate(per_hour=2200, overhead_hours=0.75),
    "garden": CoverageRate(per_hour=30, overhead_hours=0.75),
    "pressure_wash": CoverageRate(per_hour=80, overhead_hours=0.5),
    "hedge": CoverageRate(per_hour=20, overhead_hours=0.5),
    "gutter": CoverageRate(per_hour=30, overhead_hours=0.5),
})


class LawnTimeOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    condition_level: ConditionLevel | None = None
    slope_percent: float | None = Field(default=None, description="Ground slope in percent")
    tight_access: bool = False


class GardenTimeOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    condition_level: ConditionLevel | None = None
    slope_percent: float | None = None


class PressureTimeOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    heavy_grime: bool = False
    slope_or_access: bool = False


class HedgeTimeOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    thick_tall: bool = False
    tight_access: bool = False


class GutterTimeOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    heavy_debris: bool = False
    two_storey: bool = False


TIME_OPTION_MODELS: MappingProxyType[str, type[BaseModel]] = MappingProxyType({
    "lawn": LawnTimeOptions,
    "garden": GardenTimeOptions,
    "pressure_wash": PressureTimeOptions,
    "hedge": HedgeTimeOptions,
    "gutter": GutterTimeOptions,
})
