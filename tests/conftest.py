"""Shared test fixtures — sample yards, vehicles and route settings."""

from __future__ import annotations

import math

import pytest

from quote_engine.config import Coordinate, RouteSettings, VehicleDescriptor
from quote_engine.engine.geometry import EARTH_RADIUS_METERS


# 100 m expressed in degrees of arc on the projection sphere
SIDE_100M_DEG = math.degrees(100 / EARTH_RADIUS_METERS)


@pytest.fixture
def equator_square() -> list[Coordinate]:
    """100 m × 100 m square at the equator, where the projection is ~distortion-free."""
    d = SIDE_100M_DEG
    return [
        Coordinate(lat=0.0, lng=0.0),
        Coordinate(lat=0.0, lng=d),
        Coordinate(lat=d, lng=d),
        Coordinate(lat=d, lng=0.0),
    ]


@pytest.fixture
def suburban_yard() -> list[dict[str, float]]:
    """Irregular backyard outline in Sydney, as plain lat/lng mappings."""
    return [
        {"lat": -33.86880, "lng": 151.20930},
        {"lat": -33.86880, "lng": 151.20960},
        {"lat": -33.86900, "lng": 151.20965},
        {"lat": -33.86905, "lng": 151.20935},
    ]


@pytest.fixture
def offline_settings() -> RouteSettings:
    """No API key: every route uses the great-circle estimate."""
    return RouteSettings(google_maps_api_key="", _env_file=None)


@pytest.fixture
def online_settings() -> RouteSettings:
    return RouteSettings(google_maps_api_key="test-key", timeout_seconds=5.0, _env_file=None)


@pytest.fixture
def bmw_x5() -> VehicleDescriptor:
    return VehicleDescriptor(make="BMW", model="X5", body_style="SUV", seats=5)


@pytest.fixture
def hiace() -> VehicleDescriptor:
    return VehicleDescriptor(make="Toyota", model="HiAce", body_style="Van", seats=12)
