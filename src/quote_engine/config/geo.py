"""Coordinate input type shared by geometry and routing."""

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """A (latitude, longitude) pair in decimal degrees. Immutable value type."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0, description="Latitude (decimal degrees)")
    lng: float = Field(ge=-180.0, le=180.0, description="Longitude (decimal degrees)")
