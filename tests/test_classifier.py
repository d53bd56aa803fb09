"""Tests for engine/classifier.py — dual category / size-category resolution."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from quote_engine.config import VehicleDescriptor
from quote_engine.config.vehicle import CATEGORY_PRIORITY, SCORING_RULES
from quote_engine.engine.classifier import (
    classify_vehicle,
    classify_vehicle_category,
    normalize,
    score_categories,
)


class TestNormalize:

    def test_strips_punctuation_and_case(self):
        assert normalize("Mercedes-Benz") == "mercedesbenz"
        assert normalize("CX-5") == "cx5"
        assert normalize(" Land Cruiser ") == "landcruiser"

    def test_missing_is_empty(self):
        assert normalize(None) == ""


class TestClassify:

    @pytest.mark.parametrize("vehicle, category, size_category", [
        # muscle 120; unspecific body nudges sedan/hatch 5 each, sedan wins the tie
        ({"make": "Ford", "model": "Mustang", "body_style": "Coupe", "seats": 4}, "muscle", "sedan"),
        # ute 85 + 80
        ({"make": "Toyota", "model": "Hilux", "body_style": "Utility"}, "ute", "ute"),
        # van 90 + 80 + 75 (12 seats)
        ({"make": "Toyota", "model": "HiAce", "body_style": "Van", "seats": 12}, "van", "van"),
        # 4wd 85 + 75 (SUV with 7 seats) beats suv 70
        ({"make": "Toyota", "model": "LandCruiser", "body_style": "SUV", "seats": 7}, "4wd", "4wd"),
        # van 90 + 75 (8 seats, not an SUV body) beats suv 40 (wagon)
        ({"make": "Kia", "model": "Carnival", "body_style": "Wagon", "seats": 8}, "van", "van"),
        # hatch 35 + 25
        ({"make": "Toyota", "model": "Yaris", "body_style": "Hatchback"}, "hatch", "hatch"),
        ({"make": "Toyota", "model": "Camry", "body_style": "Sedan"}, "sedan", "sedan"),
        # model list alone, no body style
        ({"make": "Mazda", "model": "CX-5"}, "suv", "suv"),
        # suv 70 + 70 beats 4wd 75
        ({"make": "Toyota", "model": "RAV4", "body_style": "SUV", "seats": 7}, "suv", "suv"),
    ])
    def test_known_vehicles(self, vehicle, category, size_category):
        result = classify_vehicle(vehicle)
        assert result.category == category
        assert result.size_category == size_category

    def test_luxury_suv_keeps_size(self, bmw_x5):
        # luxury 90 beats suv 70, but size still resolves to suv
        result = classify_vehicle(bmw_x5)
        assert result.category == "luxury"
        assert result.size_category == "suv"

    def test_hyphenated_luxury_make(self):
        assert classify_vehicle_category({"make": "Mercedes-Benz", "model": "C200"}) == "luxury"

    def test_empty_descriptor_is_unknown(self):
        result = classify_vehicle(VehicleDescriptor())
        assert result.category == "unknown"
        assert result.size_category is None

    def test_blank_strings_are_unknown(self):
        result = classify_vehicle({"make": "", "model": "", "body_style": "", "seats": None})
        assert result.category == "unknown"
        assert result.size_category is None

    def test_luxury_sedan_without_body_has_no_size(self):
        result = classify_vehicle({"make": "Tesla", "model": "Model 3"})
        assert result.category == "luxury"
        assert result.size_category is None

    def test_seat_string_is_coerced(self):
        d = VehicleDescriptor(make="Honda", model="Odyssey", body_style="People Mover", seats="8")
        assert d.seats == 8
        assert classify_vehicle(d).category == "van"

    def test_bad_seat_value_is_ignored(self):
        assert VehicleDescriptor(seats="many").seats is None

    def test_camel_case_body_style(self):
        result = classify_vehicle({"make": "BMW", "model": "X5", "bodyStyle": "SUV", "seats": 5})
        assert result.category == "luxury"
        assert result.size_category == "suv"

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            classify_vehicle({"make": "BMW", "model": "X5", "body_type": "SUV"})


class TestScores:

    def test_all_categories_present_and_non_negative(self, hiace):
        scores = score_categories(hiace)
        assert set(scores) == set(CATEGORY_PRIORITY)
        assert all(v >= 0 for v in scores.values())

    def test_hiace_scores(self, hiace):
        scores = score_categories(hiace)
        # model 90 + body 80 + 12 seats 75
        assert scores["van"] == 245
        assert scores["suv"] == 0

    def test_tie_broken_by_priority(self):
        # Only the two unspecific-body rules fire: sedan 5, hatch 5 → sedan
        scores = score_categories({"body_style": "Coupe"})
        assert scores["sedan"] == scores["hatch"] == 5
        assert classify_vehicle({"body_style": "Coupe"}).category == "sedan"

    def test_custom_rule_table(self):
        scores = score_categories({"make": "Ford", "model": "Mustang"}, rules=SCORING_RULES[:1])
        assert scores["muscle"] == 120
        assert sum(scores.values()) == 120
