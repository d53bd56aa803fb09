"""FastAPI server — HTTP surface for the quote engine.

Run with:
    uvicorn quote_engine.api.server:app --reload --port 8000

Or:
    python -m quote_engine.api.server

Endpoints:
    GET  /health                  — liveness probe
    GET  /                        — name, version and endpoint list
    POST /yard/measure            — polygon → area (m²) and perimeter (m)
    POST /yard/quote              — polygon + yard options → area-rate quote
    POST /services/{kind}/price   — size + difficulty flags → tiered price
    POST /services/{kind}/time    — size + options → labour estimate
    POST /vehicle/classify        — descriptor → category + size category
    POST /vehicle/price           — base price + category + year → final price
    POST /vehicle/normalize       — raw registration-lookup payload → vehicle details
    POST /route/estimate          — origin + destination → distance, duration, price
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from quote_engine.config.geo import Coordinate
from quote_engine.config.routing import RouteSettings
from quote_engine.config.vehicle import CarCategory, VehicleDescriptor, VehicleSizeCategory
from quote_engine.config.yard import DifficultyFlags, ServiceKind, YardPricingOptions
from quote_engine.engine.classifier import classify_vehicle
from quote_engine.engine.geometry import compute_area, compute_perimeter
from quote_engine.engine.pricing import compute_quote, price_service
from quote_engine.engine.routing import get_route_settings, quote_route
from quote_engine.engine.timing import estimate_time
from quote_engine.engine.vehicle_lookup import details_from_response
from quote_engine.engine.vehicle_pricing import calculate_price
from quote_engine.models.results import (
    Classification,
    PolygonQuote,
    PricingResult,
    RouteQuote,
    TimeEstimate,
    VehicleDetails,
)

log = logging.getLogger("quote_engine.api")


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Quote Engine API",
    version="1.0",
    description=(
        "Instant quotes for yard and vehicle services: measure a drawn yard, "
        "price tiered sub-services, estimate labour time, classify vehicles "
        "and estimate travel between two points."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Request models
# ═══════════════════════════════════════════════════════════════════════════

class PolygonRequest(BaseModel):
    """Request body for /yard/measure."""
    polygon: list[Coordinate] = Field(description="Yard outline; the ring closes implicitly")


class YardQuoteRequest(BaseModel):
    """Request body for /yard/quote."""
    polygon: list[Coordinate]
    options: YardPricingOptions = Field(default_factory=YardPricingOptions)


class ServicePriceRequest(BaseModel):
    """Request body for /services/{kind}/price."""
    size: float = Field(description="m² for lawn / garden / pressure_wash, metres for hedge / gutter")
    flags: DifficultyFlags = Field(default_factory=DifficultyFlags)


class ServiceTimeRequest(BaseModel):
    """Request body for /services/{kind}/time. ``options`` must match the service kind."""
    size: float
    options: dict[str, Any] = Field(default_factory=dict)


class VehiclePriceRequest(BaseModel):
    """Request body for /vehicle/price."""
    base_price: float = Field(ge=0)
    category: CarCategory = "unknown"
    size_category: VehicleSizeCategory | None = None
    vehicle_year: int | None = None


class VehiclePriceResponse(BaseModel):
    price: int


class RouteRequest(BaseModel):
    """Request body for /route/estimate."""
    origin: Coordinate
    destination: Coordinate


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def route_settings() -> RouteSettings:
    return get_route_settings()


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/")
def root():
    return {
        "name": "Quote Engine API",
        "version": "1.0",
        "docs": "GET /docs (interactive Swagger UI)",
        "endpoints": [
            "POST /yard/measure",
            "POST /yard/quote",
            "POST /services/{kind}/price",
            "POST /services/{kind}/time",
            "POST /vehicle/classify",
            "POST /vehicle/price",
            "POST /vehicle/normalize",
            "POST /route/estimate",
        ],
    }


@app.post("/yard/measure")
def yard_measure(req: PolygonRequest):
    return {
        "area_m2": compute_area(req.polygon),
        "perimeter_m": compute_perimeter(req.polygon),
    }


@app.post("/yard/quote", response_model=PolygonQuote)
def yard_quote(req: YardQuoteRequest):
    return compute_quote(req.polygon, req.options)


@app.post("/services/{kind}/price", response_model=PricingResult)
def service_price(kind: ServiceKind, req: ServicePriceRequest):
    return price_service(req.size, kind, req.flags)


@app.post("/services/{kind}/time", response_model=TimeEstimate)
def service_time(kind: ServiceKind, req: ServiceTimeRequest):
    try:
        return estimate_time(req.size, kind, req.options)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid options for {kind!r}: {e}") from e


@app.post("/vehicle/classify", response_model=Classification)
def vehicle_classify(req: VehicleDescriptor):
    return classify_vehicle(req)


@app.post("/vehicle/price", response_model=VehiclePriceResponse)
def vehicle_price(req: VehiclePriceRequest):
    price = calculate_price(req.base_price, req.category, req.size_category, req.vehicle_year)
    return VehiclePriceResponse(price=price)


@app.post("/vehicle/normalize", response_model=VehicleDetails)
def vehicle_normalize(payload: dict[str, Any]):
    """Normalise a raw registration-lookup response (any known envelope shape)."""
    details = details_from_response(payload)
    if details is None:
        raise HTTPException(status_code=404, detail="No make and model found in lookup payload")
    return details


@app.post("/route/estimate", response_model=RouteQuote)
def route_estimate(req: RouteRequest):
    return quote_route(req.origin, req.destination, route_settings())


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    settings = route_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log.info("Starting quote engine API (route provider %s)",
             "configured" if settings.google_maps_api_key else "not configured")
    uvicorn.run(
        "quote_engine.api.server:app",
        host="0.0.0.0",
        port=8000,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
