"""Normalise raw registration-lookup payloads into classified vehicle details.

Lookup providers disagree on shape: plain JSON, JSON wrapped in an ASMX
``<string>`` envelope, nested ``d`` / ``result`` / ``vehicleJson`` wrappers,
and a dozen spellings of each field. These helpers peel the envelope, read
the fields by alias, and classify the result. No network I/O happens here.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from quote_engine.config.vehicle import VehicleDescriptor
from quote_engine.engine.classifier import classify_vehicle
from quote_engine.engine.envelope import extract_json
from quote_engine.models.results import VehicleDetails


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

_TEXT_KEYS = (
    "CurrentTextValue", "currentTextValue", "Value", "value", "Text", "text",
    "Name", "name", "Description", "description",
)
_ENVELOPE_KEYS = ("vehicleJson", "VehicleJson", "d", "CheckAustraliaResult")
_INNER_KEYS = ("vehicle", "result", "data")

MAKE_KEYS = ("make", "Make", "manufacturer", "brand", "CarMake", "carMake")
MODEL_KEYS = ("model", "Model", "series", "variant", "CarModel", "carModel")
BODY_KEYS = ("bodyStyle", "BodyStyle", "body_style", "bodyType", "body", "vehicleType")
YEAR_KEYS = (
    "year", "Year", "RegistrationYear", "registrationYear", "yearOfManufacture",
    "manufactureYear", "ManufactureYear", "BuildYear", "buildYear",
)
DOOR_KEYS = ("doors", "Doors", "doorCount", "numDoors", "DoorCount")
SEAT_KEYS = ("seats", "Seats", "seatCount", "numSeats", "SeatCount")


# ═══════════════════════════════════════════════════════════════════════════
# Envelope unwrapping
# ═══════════════════════════════════════════════════════════════════════════

def pick_vehicle_payload(response: Any) -> Any:
    """Unwrap up to four levels of provider envelope around the vehicle record."""
    current = response
    for _ in range(4):
        if not isinstance(current, Mapping):
            return current

        candidate = _first_present(current, _ENVELOPE_KEYS)
        if candidate is None:
            nested = current.get("CheckAustraliaResponse")
            if isinstance(nested, Mapping):
                candidate = nested.get("CheckAustraliaResult")
        if candidate is None:
            candidate = _first_present(current, _INNER_KEYS)
        if candidate is None:
            candidate = current

        if isinstance(candidate, str):
            parsed = extract_json(candidate)
            current = parsed if parsed is not None else candidate
            continue
        if candidate is current:
            return current
        current = candidate
    return current


# ═══════════════════════════════════════════════════════════════════════════
# Field readers
# ═══════════════════════════════════════════════════════════════════════════

def _first_present(obj: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = obj.get(key)
        if value is not None:
            return value
    return None


def _number_text(value: float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def read_text_value(value: Any) -> str | None:
    """Read a text value that may be bare or wrapped in a ``{"Value": ...}``-style object."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _number_text(value) if math.isfinite(value) else None
    if not isinstance(value, Mapping):
        return None
    for key in _TEXT_KEYS:
        candidate = value.get(key)
        if isinstance(candidate, str):
            return candidate
        if isinstance(candidate, (int, float)) and not isinstance(candidate, bool) and math.isfinite(candidate):
            return _number_text(candidate)
    return None


def normalize_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def read_int_value(value: Any) -> int | None:
    text = read_text_value(value)
    if text is not None:
        return normalize_int(text)
    return normalize_int(value)


def _first_text(obj: Mapping[str, Any], keys: Sequence[str]) -> str | None:
    for key in keys:
        text = read_text_value(obj.get(key))
        if text is not None:
            return text
    return None


def normalize_vehicle_details(payload: Any) -> VehicleDetails | None:
    """Build classified ``VehicleDetails`` from one vehicle record.

    Returns None when the record has no make or no model.
    """
    if not isinstance(payload, Mapping):
        return None

    make = (_first_text(payload, MAKE_KEYS) or "").strip()
    model = (_first_text(payload, MODEL_KEYS) or "").strip()
    if not make or not model:
        return None

    body_style = (_first_text(payload, BODY_KEYS) or "").strip()
    seats = read_int_value(_first_present(payload, SEAT_KEYS))

    classification = classify_vehicle(
        VehicleDescriptor(make=make, model=model, body_style=body_style, seats=seats)
    )
    return VehicleDetails(
        make=make,
        model=model,
        year=read_int_value(_first_present(payload, YEAR_KEYS)),
        body_style=body_style,
        doors=read_int_value(_first_present(payload, DOOR_KEYS)),
        seats=seats,
        category=classification.category,
        size_category=classification.size_category,
    )


def details_from_response(response: Any) -> VehicleDetails | None:
    """Unwrap a raw provider response (text or parsed) and normalise it."""
    parsed = extract_json(response) if isinstance(response, (str, bytes)) else response
    return normalize_vehicle_details(pick_vehicle_payload(parsed))
