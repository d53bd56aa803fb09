"""Route distance estimator — remote driving distance with an offline fallback.

``estimate_route`` makes exactly one provider call with a bounded timeout.
Any failure (network error, timeout, non-2xx status, unparseable body,
non-OK status, missing or non-finite values) falls through to the
great-circle estimate:

  distance_km      = haversine(origin, destination)   # R = 6371 km
  duration_minutes = distance_km / avg_speed_kmh × 60

The fallback is pure, so identical coordinates always give identical results.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

import requests

from quote_engine.config.routing import RouteSettings
from quote_engine.engine.envelope import extract_json
from quote_engine.engine.geometry import as_lat_lng, haversine_distance
from quote_engine.engine.rounding import round_half_up
from quote_engine.errors import RouteLookupError
from quote_engine.models.results import RouteLookupResult, RouteQuote

log = logging.getLogger("quote_engine.routing")

MEAN_EARTH_RADIUS_KM = 6371.0


@lru_cache(maxsize=1)
def get_route_settings() -> RouteSettings:
    """Process-wide settings, read from the environment once."""
    return RouteSettings()


# ═══════════════════════════════════════════════════════════════════════════
# Pure helpers
# ═══════════════════════════════════════════════════════════════════════════

def haversine_distance_km(origin: Any, destination: Any) -> float:
    return haversine_distance(origin, destination, radius=MEAN_EARTH_RADIUS_KM)


def round_to_half_km(value: float) -> float:
    return round_half_up(value * 2) / 2


def format_route_key(origin: Any, destination: Any) -> str:
    """Stable cache key for a pair of coordinates (5 decimal places)."""
    o_lat, o_lng = as_lat_lng(origin)
    d_lat, d_lng = as_lat_lng(destination)
    return f"{o_lat:.5f},{o_lng:.5f}|{d_lat:.5f},{d_lng:.5f}"


def fallback_route(origin: Any, destination: Any, settings: RouteSettings | None = None) -> RouteLookupResult:
    """Great-circle distance and a duration at the assumed average speed."""
    settings = settings or get_route_settings()
    distance_km = haversine_distance_km(origin, destination)
    return RouteLookupResult(
        distance_km=distance_km,
        duration_minutes=distance_km / settings.avg_speed_kmh * 60,
        source="fallback",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Provider
# ═══════════════════════════════════════════════════════════════════════════

def _redact(message: str, secrets: list[str]) -> str:
    for secret in secrets:
        if secret and secret.strip():
            message = message.replace(secret, "***")
    return message


def _finite_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _first_element(payload: Mapping[str, Any]) -> Mapping[str, Any] | None:
    rows = payload.get("rows")
    if not isinstance(rows, list) or not rows or not isinstance(rows[0], Mapping):
        return None
    elements = rows[0].get("elements")
    if not isinstance(elements, list) or not elements or not isinstance(elements[0], Mapping):
        return None
    return elements[0]


def _value_of(element: Mapping[str, Any], key: str) -> Any:
    field = element.get(key)
    return field.get("value") if isinstance(field, Mapping) else None


def parse_distance_matrix(raw_text: str) -> RouteLookupResult:
    """Strictly parse a distance-matrix response body. Raises ``RouteLookupError``."""
    payload = extract_json(raw_text)
    if not isinstance(payload, Mapping):
        raise RouteLookupError("Distance lookup returned an unparseable response")
    if payload.get("status") != "OK":
        raise RouteLookupError(str(payload.get("error_message") or payload.get("status") or "No distance data"))

    element = _first_element(payload)
    if element is None or element.get("status") != "OK":
        raise RouteLookupError(str(element.get("status") if element else "No element data"))

    distance_m = _finite_number(_value_of(element, "distance"))
    duration_s = _finite_number(_value_of(element, "duration"))
    if distance_m is None or duration_s is None:
        raise RouteLookupError("Invalid distance data")

    return RouteLookupResult(
        distance_km=distance_m / 1000,
        duration_minutes=duration_s / 60,
        source="provider",
    )


def fetch_driving_distance(
    origin: Any,
    destination: Any,
    settings: RouteSettings | None = None,
) -> RouteLookupResult:
    """One driving-distance lookup. Raises ``RouteLookupError`` on any failure."""
    settings = settings or get_route_settings()
    api_key = settings.google_maps_api_key
    if not api_key:
        raise RouteLookupError("Google Maps API key is not configured.")

    o_lat, o_lng = as_lat_lng(origin)
    d_lat, d_lng = as_lat_lng(destination)
    params = {
        "origins": f"{o_lat},{o_lng}",
        "destinations": f"{d_lat},{d_lng}",
        "mode": "driving",
        "units": "metric",
        "key": api_key,
    }

    try:
        resp = requests.get(settings.distance_matrix_url, params=params, timeout=settings.timeout_seconds)
    except requests.RequestException as e:
        raise RouteLookupError(f"Distance lookup request failed: {_redact(str(e), [api_key])}") from e

    if not resp.ok:
        snippet = _redact((resp.text or "")[:256], [api_key])
        raise RouteLookupError(f"Distance lookup failed ({resp.status_code}): {snippet}")

    return parse_distance_matrix(resp.text)


def estimate_route(
    origin: Any,
    destination: Any,
    settings: RouteSettings | None = None,
) -> RouteLookupResult:
    """Driving distance / duration between two coordinates. Never raises for provider failures."""
    settings = settings or get_route_settings()
    if not settings.google_maps_api_key:
        log.debug("No distance provider configured; using great-circle estimate")
        return fallback_route(origin, destination, settings)

    try:
        return fetch_driving_distance(origin, destination, settings)
    except RouteLookupError as e:
        log.warning(f"Route provider failed, using great-circle estimate: {e}")
        return fallback_route(origin, destination, settings)


# ═══════════════════════════════════════════════════════════════════════════
# Transport pricing
# ═══════════════════════════════════════════════════════════════════════════

def price_route(route: RouteLookupResult, settings: RouteSettings | None = None) -> float:
    """Base fee + per-km + per-minute, floored at the minimum price, to the cent."""
    settings = settings or get_route_settings()
    price = (
        settings.base_fee
        + route.distance_km * settings.per_km_rate
        + route.duration_minutes * settings.per_minute_rate
    )
    return round_half_up(max(settings.minimum_price, price) * 100) / 100


def quote_route(origin: Any, destination: Any, settings: RouteSettings | None = None) -> RouteQuote:
    settings = settings or get_route_settings()
    route = estimate_route(origin, destination, settings)
    return RouteQuote(
        route=route,
        route_key=format_route_key(origin, destination),
        price=price_route(route, settings),
    )
