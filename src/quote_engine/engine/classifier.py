"""Heuristic vehicle classifier.

Scores a vehicle descriptor against ``SCORING_RULES`` and resolves two
independent answers from the same score table:

* ``category`` — the highest score across all eight categories, ties broken
  by priority (muscle > luxury > van > ute > 4wd > suv > sedan > hatch),
  or ``'unknown'`` when every score is zero.
* ``size_category`` — the same resolution restricted to the size-relevant
  subset (van > ute > 4wd > suv > sedan > hatch), or ``None``.

A BMW X5 therefore classifies as ``luxury`` while still pricing as an SUV.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from quote_engine.config.vehicle import (
    CATEGORY_PRIORITY,
    SCORING_RULES,
    SIZE_PRIORITY,
    CarCategory,
    ScoringRule,
    VehicleCategory,
    VehicleDescriptor,
)
from quote_engine.models.results import Classification


_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize(value: Any) -> str:
    """Lowercase and strip everything but ASCII letters and digits."""
    return _NON_ALNUM.sub("", str(value if value is not None else "").lower())


def _as_descriptor(vehicle: VehicleDescriptor | Mapping[str, Any]) -> VehicleDescriptor:
    if isinstance(vehicle, VehicleDescriptor):
        return vehicle
    return VehicleDescriptor(**vehicle)


def _rule_matches(rule: ScoringRule, fields: Mapping[str, str], seats: int | None) -> bool:
    body = fields["body"]
    if rule.keywords and not any(k in fields[rule.field] for k in rule.keywords):
        return False
    if rule.min_seats is not None and (seats is None or seats < rule.min_seats):
        return False
    if rule.body_excludes and any(k in body for k in rule.body_excludes):
        return False
    if rule.body_present and not body:
        return False
    return True


def score_categories(
    vehicle: VehicleDescriptor | Mapping[str, Any],
    rules: Sequence[ScoringRule] = SCORING_RULES,
) -> dict[VehicleCategory, int]:
    """Accumulated score per category. Scores start at zero and only grow."""
    descriptor = _as_descriptor(vehicle)
    fields = {
        "make": normalize(descriptor.make),
        "model": normalize(descriptor.model),
        "body": normalize(descriptor.body_style),
    }
    scores: dict[VehicleCategory, int] = {category: 0 for category in CATEGORY_PRIORITY}
    for rule in rules:
        if _rule_matches(rule, fields, descriptor.seats):
            scores[rule.category] += rule.weight
    return scores


def _resolve(scores: Mapping[str, int], priority: Sequence[str]) -> str | None:
    """Highest-scoring entry of ``priority``; earlier entries win ties. None if all zero."""
    top = min(priority, key=lambda c: (-scores[c], priority.index(c)))
    return top if scores[top] > 0 else None


def classify_vehicle(vehicle: VehicleDescriptor | Mapping[str, Any]) -> Classification:
    scores = score_categories(vehicle)
    return Classification(
        category=_resolve(scores, CATEGORY_PRIORITY) or "unknown",
        size_category=_resolve(scores, SIZE_PRIORITY),
    )


def classify_vehicle_category(vehicle: VehicleDescriptor | Mapping[str, Any]) -> CarCategory:
    return classify_vehicle(vehicle).category
