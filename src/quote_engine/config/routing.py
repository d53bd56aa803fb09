"""Route estimator settings, loaded from the environment."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RouteSettings(BaseSettings):
    """Driving-distance provider and fallback settings.

    Read from ``QUOTE_*`` environment variables or a ``.env`` file. The API key
    may also come from a plain ``GOOGLE_MAPS_API_KEY``. With no key configured
    every route is estimated offline.
    """

    model_config = SettingsConfigDict(
        env_prefix="QUOTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    google_maps_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("QUOTE_GOOGLE_MAPS_API_KEY", "GOOGLE_MAPS_API_KEY", "google_maps_api_key"),
    )
    distance_matrix_url: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    timeout_seconds: float = Field(default=8.0, gt=0, le=30.0, description="Single-attempt provider timeout")

    avg_speed_kmh: float = Field(
        default=40.0, gt=0,
        description="Assumed suburban / arterial speed for the offline estimate",
    )

    # Transport pricing
    base_fee: float = Field(default=35.0, ge=0)
    per_km_rate: float = Field(default=2.6, ge=0)
    per_minute_rate: float = Field(default=0.45, ge=0)
    minimum_price: float = Field(default=55.0, ge=0)

    log_level: str = "info"
