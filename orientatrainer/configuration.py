"""Mini README: Centralised configuration models and helpers for OrientaTrainer.

Structure:
    * OrientaTrainerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``ORIENTATRAINER_*`` environment variables
    (or a ``.env`` file). Settings cover where beacons are stored, the
    catchment radius used when generating routes, the default map framing and
    the geocoder endpoint. Validation runs once per process thanks to caching.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OrientaTrainerSettings(BaseSettings):
    """Runtime configuration for OrientaTrainer."""

    model_config = SettingsConfigDict(
        env_prefix="ORIENTATRAINER_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label (development, testing, production) selecting the log level.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted beacon collection.",
    )
    beacon_storage_key: str = Field(
        "orientatrainer-beacons",
        description="Key under which the ordered beacon list is stored.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the web service exposes.",
        ge=1,
        le=65535,
    )
    catchment_radius_m: float = Field(
        5000.0,
        description="Radius around the route origin within which beacons are eligible.",
        gt=0,
    )
    default_center_lat: float = Field(
        40.4168,
        description="Latitude used when no origin can be resolved (Madrid).",
        ge=-90,
        le=90,
    )
    default_center_lng: float = Field(
        -3.7038,
        description="Longitude used when no origin can be resolved (Madrid).",
        ge=-180,
        le=180,
    )
    default_zoom: int = Field(
        14,
        description="Zoom level used when there is nothing to frame.",
        ge=0,
        le=22,
    )
    geocoder_url: str = Field(
        "https://nominatim.openstreetmap.org/search",
        description="Nominatim compatible search endpoint for place lookups.",
    )
    geocoder_timeout_seconds: float = Field(
        5.0,
        description="Upper bound on a single place lookup before falling back.",
        gt=0,
    )
    geocoder_user_agent: str = Field(
        "orientatrainer/0.1",
        description="User-Agent header sent to the geocoder, required by Nominatim.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Union[str, Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache()
def get_settings() -> OrientaTrainerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return OrientaTrainerSettings()
