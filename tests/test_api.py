"""Tests for the HTTP surface (api/server.py)."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from quote_engine.api import server
from quote_engine.api.server import app


client = TestClient(app)


def _polygon(points):
    return [{"lat": p.lat, "lng": p.lng} for p in points]


class TestMeta:

    def test_health(self):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_root_lists_endpoints(self):
        data = client.get("/").json()
        assert data["name"] == "Quote Engine API"
        assert "POST /route/estimate" in data["endpoints"]


class TestYard:

    def test_measure(self, equator_square):
        resp = client.post("/yard/measure", json={"polygon": _polygon(equator_square)})
        assert resp.status_code == 200
        data = resp.json()
        assert data["area_m2"] == pytest.approx(10_000, rel=0.02)
        assert data["perimeter_m"] == 400

    def test_quote_commercial(self, equator_square):
        body = {
            "polygon": _polygon(equator_square),
            "options": {"property_type": "commercial", "commercial_kind": "medical"},
        }
        data = client.post("/yard/quote", json=body).json()
        # 2.8 $/m²
        assert data["estimated_low"] == pytest.approx(2.8 * data["raw_area"], abs=1)
        assert data["estimated_low"] == data["estimated_high"]

    def test_quote_rejects_unknown_option(self, equator_square):
        body = {"polygon": _polygon(equator_square), "options": {"colour": "green"}}
        assert client.post("/yard/quote", json=body).status_code == 422

    def test_quote_rejects_bad_latitude(self):
        body = {"polygon": [{"lat": 95, "lng": 0}, {"lat": 0, "lng": 0}, {"lat": 0, "lng": 1}]}
        assert client.post("/yard/quote", json=body).status_code == 422


class TestServices:

    def test_price_minimum(self):
        data = client.post("/services/lawn/price", json={"size": 0}).json()
        assert data["final_price"] == 60
        assert data["minimum_applied"] is True

    def test_price_with_flags(self):
        body = {"size": 50, "flags": {"overgrown": True, "urgent": True}}
        assert client.post("/services/hedge/price", json=body).json()["final_price"] == 281

    def test_unknown_kind(self):
        assert client.post("/services/roofing/price", json={"size": 10}).status_code == 422

    def test_unknown_flag(self):
        body = {"size": 10, "flags": {"overgrow": True}}
        assert client.post("/services/lawn/price", json=body).status_code == 422

    def test_time(self):
        data = client.post("/services/garden/time", json={"size": 30}).json()
        assert data == {"hours": 1.8, "minutes": 108, "label": "About 2–3 hours"}

    def test_time_bad_options(self):
        body = {"size": 30, "options": {"two_storey": True}}
        resp = client.post("/services/garden/time", json=body)
        assert resp.status_code == 422
        assert "garden" in resp.json()["detail"]


class TestVehicle:

    def test_classify(self):
        body = {"make": "BMW", "model": "X5", "body_style": "SUV"}
        assert client.post("/vehicle/classify", json=body).json() == {"category": "luxury", "size_category": "suv"}

    def test_classify_camel_case_body_style(self):
        body = {"make": "BMW", "model": "X5", "bodyStyle": "SUV"}
        assert client.post("/vehicle/classify", json=body).json() == {"category": "luxury", "size_category": "suv"}

    def test_classify_rejects_unknown_key(self):
        body = {"make": "BMW", "model": "X5", "colour": "black"}
        assert client.post("/vehicle/classify", json=body).status_code == 422

    def test_price(self):
        body = {"base_price": 100, "category": "van"}
        assert client.post("/vehicle/price", json=body).json() == {"price": 140}

    def test_price_rejects_negative_base(self):
        assert client.post("/vehicle/price", json={"base_price": -1}).status_code == 422

    def test_normalize(self):
        body = {"d": json.dumps({"make": "Toyota", "model": "Hilux", "bodyStyle": "Utility", "year": 2019})}
        resp = client.post("/vehicle/normalize", json=body)
        assert resp.status_code == 200
        data = resp.json()
        assert data["make"] == "Toyota"
        assert data["year"] == 2019
        assert data["category"] == "ute"

    def test_normalize_without_model(self):
        assert client.post("/vehicle/normalize", json={"make": "Toyota"}).status_code == 404


class TestRoute:

    def test_offline_estimate(self, monkeypatch, offline_settings):
        monkeypatch.setattr(server, "route_settings", lambda: offline_settings)
        body = {"origin": {"lat": 0, "lng": 0}, "destination": {"lat": 0, "lng": 1}}
        resp = client.post("/route/estimate", json=body)
        assert resp.status_code == 200
        data = resp.json()
        assert data["route"]["source"] == "fallback"
        assert data["route"]["distance_km"] == pytest.approx(111.19492664455873)
        assert data["route_key"] == "0.00000,0.00000|0.00000,1.00000"
        # 35 + 111.195 × 2.6 + 166.79 × 0.45 ≈ 399.16
        assert data["price"] == pytest.approx(35 + 111.19492664455873 * 2.6 + 166.79238996683810 * 0.45, abs=0.01)

    def test_rejects_missing_destination(self):
        assert client.post("/route/estimate", json={"origin": {"lat": 0, "lng": 0}}).status_code == 422
