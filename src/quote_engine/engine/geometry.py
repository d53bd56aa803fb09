"""Polygon measurement on a spherical Earth.

Area uses the spherical Web-Mercator projection followed by the shoelace
formula. It is an approximation meant for residential and commercial lots up
to a few km across:

  x = R · λ
  y = R · ln tan(π/4 + φ/2)
  area = |Σ (xᵢ·yᵢ₊₁ − xᵢ₊₁·yᵢ)| / 2

Projected area grows with sec²φ away from the equator. The measure keeps
that behaviour because every rate table was calibrated against it.

Perimeter sums haversine great-circle distances over each edge, including
the implicit closing edge from the last point back to the first.

Both measures are total: short or malformed input yields 0.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

from quote_engine.config.geo import Coordinate
from quote_engine.engine.rounding import round_half_up


EARTH_RADIUS_METERS = 6_378_137.0
"""WGS-84 equatorial radius, shared by the projection and the perimeter."""


def as_lat_lng(point: Any) -> tuple[float, float]:
    if isinstance(point, Coordinate):
        return point.lat, point.lng
    if isinstance(point, Mapping):
        return float(point["lat"]), float(point["lng"])
    lat, lng = point
    return float(lat), float(lng)


def _as_radians(points: Sequence[Any]) -> tuple[np.ndarray, np.ndarray] | None:
    """Return (lat, lng) radian arrays, or None when any point is unusable."""
    try:
        pairs = np.array([as_lat_lng(p) for p in points], dtype=float)
    except (KeyError, TypeError, ValueError):
        return None
    if not np.all(np.isfinite(pairs)):
        return None
    rad = np.radians(pairs)
    return rad[:, 0], rad[:, 1]


def _haversine(
    lat1: np.ndarray | float,
    lng1: np.ndarray | float,
    lat2: np.ndarray | float,
    lng2: np.ndarray | float,
    radius: float,
) -> np.ndarray | float:
    """Great-circle distance between radian coordinates (element-wise)."""
    sin_lat = np.sin((lat2 - lat1) / 2)
    sin_lng = np.sin((lng2 - lng1) / 2)
    h = np.clip(sin_lat * sin_lat + sin_lng * sin_lng * np.cos(lat1) * np.cos(lat2), 0.0, 1.0)
    return radius * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def haversine_distance(a: Any, b: Any, radius: float = EARTH_RADIUS_METERS) -> float:
    """Great-circle distance between two points, in the units of ``radius``."""
    lat1, lng1 = as_lat_lng(a)
    lat2, lng2 = as_lat_lng(b)
    return float(_haversine(
        math.radians(lat1), math.radians(lng1),
        math.radians(lat2), math.radians(lng2),
        radius,
    ))


def project_to_mercator(point: Any) -> tuple[float, float]:
    """Project one coordinate to spherical-Mercator metres."""
    lat, lng = as_lat_lng(point)
    x = EARTH_RADIUS_METERS * math.radians(lng)
    y = EARTH_RADIUS_METERS * math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))
    return x, y


def compute_area(points: Sequence[Any]) -> int:
    """Area (m²) enclosed by a lat/lng ring. 0 for fewer than 3 points.

    Points may be ``Coordinate`` models, ``{"lat", "lng"}`` mappings or
    ``(lat, lng)`` pairs. The ring closes implicitly. Self-intersecting rings
    are measured as given, not corrected.
    """
    if points is None or len(points) < 3:
        return 0
    radians = _as_radians(points)
    if radians is None:
        return 0
    lat, lng = radians

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        x = EARTH_RADIUS_METERS * lng
        y = EARTH_RADIUS_METERS * np.log(np.tan(np.pi / 4 + lat / 2))
        cross = x * np.roll(y, -1) - np.roll(x, -1) * y
        area = abs(float(cross.sum())) / 2

    if not math.isfinite(area):
        return 0
    return max(0, round_half_up(area))


def compute_perimeter(points: Sequence[Any]) -> int:
    """Boundary length (m) of a lat/lng ring. 0 for fewer than 2 points."""
    if points is None or len(points) < 2:
        return 0
    radians = _as_radians(points)
    if radians is None:
        return 0
    lat, lng = radians

    edges = _haversine(lat, lng, np.roll(lat, -1), np.roll(lng, -1), EARTH_RADIUS_METERS)
    perimeter = float(np.sum(edges))
    if not math.isfinite(perimeter):
        return 0
    return max(0, round_half_up(perimeter))
