"""Result models — engine output contracts."""

from quote_engine.models.results import (
    Classification,
    PolygonQuote,
    PricingResult,
    RouteLookupResult,
    RouteQuote,
    TimeEstimate,
    VehicleDetails,
)

__all__ = [
    "Classification",
    "PolygonQuote",
    "PricingResult",
    "RouteLookupResult",
    "RouteQuote",
    "TimeEstimate",
    "VehicleDetails",
]
