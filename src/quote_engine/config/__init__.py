"""Configuration models — every input record and constant rate table."""

from quote_engine.config.geo import Coordinate
from quote_engine.config.yard import DifficultyFlags, PricingTier, ServiceRateCard, YardPricingOptions
from quote_engine.config.timing import (
    GardenTimeOptions,
    GutterTimeOptions,
    HedgeTimeOptions,
    LawnTimeOptions,
    PressureTimeOptions,
)
from quote_engine.config.vehicle import ScoringRule, VehicleDescriptor
from quote_engine.config.routing import RouteSettings

__all__ = [
    "Coordinate",
    "DifficultyFlags",
    "PricingTier",
    "ServiceRateCard",
    "YardPricingOptions",
    "LawnTimeOptions",
    "GardenTimeOptions",
    "PressureTimeOptions",
    "HedgeTimeOptions",
    "GutterTimeOptions",
    "ScoringRule",
    "VehicleDescriptor",
    "RouteSettings",
]
