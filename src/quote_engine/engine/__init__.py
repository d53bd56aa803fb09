"""Engine — measurement, pricing, time estimation, vehicle classification and routing."""

from quote_engine.engine.geometry import compute_area, compute_perimeter, haversine_distance, project_to_mercator
from quote_engine.engine.pricing import (
    area_rate,
    compute_quote,
    estimate_range,
    price_from_area,
    price_garden,
    price_gutters,
    price_hedges,
    price_lawn,
    price_pressure,
    price_service,
)
from quote_engine.engine.timing import estimate_hours, estimate_time, format_time_estimate, hours_to_minutes
from quote_engine.engine.classifier import classify_vehicle, classify_vehicle_category, score_categories
from quote_engine.engine.vehicle_pricing import age_multiplier, calculate_price, price_vehicle_service
from quote_engine.engine.vehicle_lookup import details_from_response, normalize_vehicle_details, pick_vehicle_payload
from quote_engine.engine.envelope import extract_json
from quote_engine.engine.routing import estimate_route, fallback_route, fetch_driving_distance, price_route, quote_route

__all__ = [
    # Geometry
    "compute_area",
    "compute_perimeter",
    "haversine_distance",
    "project_to_mercator",
    # Yard pricing
    "price_service",
    "price_lawn",
    "price_garden",
    "price_pressure",
    "price_hedges",
    "price_gutters",
    "price_from_area",
    "area_rate",
    "estimate_range",
    "compute_quote",
    # Time
    "estimate_hours",
    "estimate_time",
    "format_time_estimate",
    "hours_to_minutes",
    # Vehicles
    "score_categories",
    "classify_vehicle",
    "classify_vehicle_category",
    "age_multiplier",
    "calculate_price",
    "price_vehicle_service",
    "extract_json",
    "pick_vehicle_payload",
    "normalize_vehicle_details",
    "details_from_response",
    # Routing
    "fetch_driving_distance",
    "fallback_route",
    "estimate_route",
    "price_route",
    "quote_route",
]
