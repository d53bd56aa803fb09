"""Exception types raised by the quote engine.

Only the route provider path raises; every pure calculation coerces bad
input to a safe default instead.
"""

from __future__ import annotations


class QuoteEngineError(Exception):
    """Base class for quote engine failures."""


class RouteLookupError(QuoteEngineError):
    """The driving-distance provider could not produce a usable route.

    Raised by ``fetch_driving_distance`` and always caught by
    ``estimate_route``, which falls back to the great-circle estimate.
    """
