"""
This module contains configuration settings for the application.
"""
import logging
import os
from dataclasses import dataclass
from typing import Tuple

# ArcGIS map server hosting the City of Houston solid waste layers
MAP_SERVER_URL = os.environ.get(
    "MAP_SERVER_URL",
    "http://mycity.houstontx.gov/cohgis/rest/services/SWD/SolidWaste_wm/MapServer/",
)

# Upstream request settings
REQUEST_TIMEOUT_SECONDS = float(os.environ.get("REQUEST_TIMEOUT_SECONDS", 15))
ARCGIS_MAX_RETRIES = int(os.environ.get("ARCGIS_MAX_RETRIES", 2))
ARCGIS_RETRY_DELAY = float(os.environ.get("ARCGIS_RETRY_DELAY", 1))

# Calendar window
DEFAULT_NUMBER_OF_DAYS = int(os.environ.get("DEFAULT_NUMBER_OF_DAYS", 60))
MAX_NUMBER_OF_DAYS = int(os.environ.get("MAX_NUMBER_OF_DAYS", 366))

# Holiday table source (python-holidays country and subdivision)
HOLIDAY_COUNTRY = os.environ.get("HOLIDAY_COUNTRY", "US")
HOLIDAY_SUBDIVISION = os.environ.get("HOLIDAY_SUBDIVISION", "TX")

# HTTP API
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", 8080))

# Logging level
LOG_LEVEL = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)


@dataclass(frozen=True)
class LayerConfig:
    """One map server layer and the attribute field holding its schedule."""

    category: str
    layer: int
    field: str


# The city uses a different out field for each layer.
WASTE_LAYER = LayerConfig(category="waste", layer=6, field="DAY")
HEAVY_LAYER = LayerConfig(category="heavy", layer=5, field="SERVICE_DA")
RECYCLING_LAYER = LayerConfig(category="recycling", layer=4, field="SERVICE_DAY")


@dataclass(frozen=True)
class Settings:
    """Immutable settings handed to the services at construction time."""

    map_server_url: str = MAP_SERVER_URL
    layers: Tuple[LayerConfig, LayerConfig, LayerConfig] = (
        WASTE_LAYER,
        HEAVY_LAYER,
        RECYCLING_LAYER,
    )
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    max_retries: int = ARCGIS_MAX_RETRIES
    retry_delay: float = ARCGIS_RETRY_DELAY
    default_number_of_days: int = DEFAULT_NUMBER_OF_DAYS
    max_number_of_days: int = MAX_NUMBER_OF_DAYS
    holiday_country: str = HOLIDAY_COUNTRY
    holiday_subdivision: str = HOLIDAY_SUBDIVISION

    @property
    def field_names(self) -> Tuple[str, str, str]:
        """Attribute field names in waste, heavy, recycling order."""
        return tuple(layer.field for layer in self.layers)


def load_settings() -> Settings:
    """Returns the settings built from the current environment."""
    return Settings()
