"""Tests for engine/envelope.py and engine/vehicle_lookup.py — provider payload normalisation."""

from __future__ import annotations

import json

from quote_engine.engine.envelope import extract_json
from quote_engine.engine.vehicle_lookup import (
    details_from_response,
    normalize_int,
    normalize_vehicle_details,
    pick_vehicle_payload,
    read_text_value,
)


ASMX_BODY = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<string xmlns="http://regcheck.org.uk">'
    '{&quot;Description&quot;:&quot;Toyota Hilux&quot;,'
    '&quot;CarMake&quot;:{&quot;CurrentTextValue&quot;:&quot;Toyota&quot;},'
    '&quot;CarModel&quot;:{&quot;CurrentTextValue&quot;:&quot;Hilux&quot;},'
    '&quot;BodyStyle&quot;:{&quot;CurrentTextValue&quot;:&quot;Utility&quot;},'
    '&quot;RegistrationYear&quot;:&quot;2019&quot;}'
    '</string>'
)


class TestExtractJson:

    def test_plain_json(self):
        assert extract_json('{"make": "Ford"}') == {"make": "Ford"}

    def test_bytes_and_bom(self):
        assert extract_json('\ufeff{"a": 1}'.encode("utf-8")) == {"a": 1}

    def test_xml_envelope(self):
        payload = extract_json(ASMX_BODY)
        assert payload["CarMake"] == {"CurrentTextValue": "Toyota"}

    def test_array_inside_text(self):
        assert extract_json("result: [1, 2, 3] done") == [1, 2, 3]

    def test_nothing_parses(self):
        assert extract_json("") is None
        assert extract_json(None) is None
        assert extract_json("Service Unavailable") is None
        assert extract_json("<html><body>{broken</body></html>") is None


class TestFieldReaders:

    def test_text_value_shapes(self):
        assert read_text_value("Ford") == "Ford"
        assert read_text_value({"CurrentTextValue": "Ford"}) == "Ford"
        assert read_text_value({"value": 7}) == "7"
        assert read_text_value(2019.0) == "2019"
        assert read_text_value(True) is None
        assert read_text_value({"other": "x"}) is None

    def test_normalize_int(self):
        assert normalize_int("4 doors") == 4
        assert normalize_int(5.9) == 5
        assert normalize_int("n/a") is None
        assert normalize_int(False) is None


class TestPickPayload:

    def test_unwraps_nested_string_envelope(self):
        response = {"d": json.dumps({"vehicle": {"make": "Ford", "model": "Ranger"}})}
        assert pick_vehicle_payload(response) == {"make": "Ford", "model": "Ranger"}

    def test_check_australia_response(self):
        response = {"CheckAustraliaResponse": {"CheckAustraliaResult": {"vehicleJson": '{"Make": "Kia"}'}}}
        assert pick_vehicle_payload(response) == {"Make": "Kia"}

    def test_flat_record_returned_as_is(self):
        record = {"make": "Mazda", "model": "CX-5"}
        assert pick_vehicle_payload(record) == record


class TestNormalizeVehicleDetails:

    def test_alias_keys(self):
        details = normalize_vehicle_details({
            "Make": {"CurrentTextValue": " Toyota "},
            "Model": "HiAce",
            "bodyType": "Van",
            "buildYear": "2015",
            "DoorCount": "4 doors",
            "numSeats": 12,
        })
        assert details.make == "Toyota"
        assert details.model == "HiAce"
        assert details.body_style == "Van"
        assert details.year == 2015
        assert details.doors == 4
        assert details.seats == 12
        assert details.category == "van"
        assert details.size_category == "van"

    def test_missing_model_is_none(self):
        assert normalize_vehicle_details({"make": "Toyota"}) is None
        assert normalize_vehicle_details({"make": "Toyota", "model": "   "}) is None

    def test_not_a_record(self):
        assert normalize_vehicle_details(["Toyota", "Hilux"]) is None

    def test_from_asmx_text(self):
        details = details_from_response(ASMX_BODY)
        assert details.make == "Toyota"
        assert details.model == "Hilux"
        assert details.year == 2019
        assert details.category == "ute"

    def test_from_unparseable_text(self):
        assert details_from_response("Service Unavailable") is None
