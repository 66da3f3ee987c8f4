"""
This module defines the ArcGISService for fetching raw schedule records.
"""
import concurrent.futures
import json
import logging
import math
import time
from typing import Any, Dict, Optional, Tuple

import requests

from ..config import LayerConfig, Settings
from ..exceptions import DownloadError

# Get a logger instance for this module
logger = logging.getLogger(__name__)

ScheduleRecords = Tuple[Optional[dict], Optional[dict], Optional[dict]]


def validate_coordinates(latitude: Any, longitude: Any) -> Tuple[float, float]:
    """
    Converts and checks a latitude/longitude pair.

    Raises:
        ValueError: If either value is not a finite number within range.
    """
    lat = float(latitude)
    lon = float(longitude)
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise ValueError(f"Coordinates must be finite numbers: {latitude}, {longitude}")
    if not -90 <= lat <= 90 or not -180 <= lon <= 180:
        raise ValueError(f"Coordinates out of range: {lat}, {lon}")
    return lat, lon


class ArcGISService:
    """Handles querying the city's map server layers for a location."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def build_query_params(self, latitude: float, longitude: float, field: str) -> Dict[str, str]:
        """Builds the point-intersection query for one layer."""
        esri_pos = {"y": latitude, "x": longitude, "spatialReference": {"wkid": 4326}}
        return {
            "geometry": json.dumps(esri_pos),
            "geometryType": "esriGeometryPoint",
            "spatialRel": "esriSpatialRelIntersects",
            "returnGeometry": "false",
            "outSR": "102100",
            "f": "json",
            "outFields": field,
        }

    def layer_url(self, layer: LayerConfig) -> str:
        return f"{self.settings.map_server_url.rstrip('/')}/{layer.layer}/query"

    def fetch_records(self, latitude: Any, longitude: Any) -> ScheduleRecords:
        """
        Fetches the waste, heavy and recycling records for a location concurrently.

        Args:
            latitude: The latitude of the location.
            longitude: The longitude of the location.

        Returns:
            The three records in waste, heavy, recycling order. A layer that
            could not be loaded is returned as None.

        Raises:
            ValueError: If the coordinates are invalid.
            DownloadError: If none of the layers could be loaded.
        """
        lat, lon = validate_coordinates(latitude, longitude)
        layers = self.settings.layers

        with concurrent.futures.ThreadPoolExecutor(max_workers=len(layers)) as executor:
            futures = [executor.submit(self._fetch_layer_safely, layer, lat, lon) for layer in layers]
            records = tuple(future.result() for future in futures)

        if all(record is None for record in records):
            raise DownloadError(f"Could not load any schedule layer for location ({lat}, {lon}).")
        return records

    def _fetch_layer_safely(self, layer: LayerConfig, latitude: float, longitude: float) -> Optional[dict]:
        """Fetches one layer, returning None instead of raising."""
        try:
            return self.fetch_layer(layer, latitude, longitude)
        except DownloadError as e:
            logger.error(f"{layer.category} layer unavailable: {e}")
            return None

    def fetch_layer(self, layer: LayerConfig, latitude: float, longitude: float) -> Optional[dict]:
        """
        Fetches one layer with retries.

        Returns:
            The decoded JSON record, or None if the body is not a JSON object.

        Raises:
            DownloadError: If the request fails after all retries.
        """
        for attempt in range(self.settings.max_retries):
            try:
                return self._download_record(layer, latitude, longitude)
            except DownloadError as e:
                logger.warning(f"Attempt {attempt + 1} failed for {layer.category} layer {layer.layer}. Error: {e}")
                if attempt + 1 == self.settings.max_retries:
                    logger.error(
                        f"All {self.settings.max_retries} attempts failed for {layer.category} layer {layer.layer}."
                    )
                    raise
                time.sleep(self.settings.retry_delay)
        return None

    def _download_record(self, layer: LayerConfig, latitude: float, longitude: float) -> Optional[dict]:
        """Downloads and decodes a single layer query."""
        params = self.build_query_params(latitude, longitude, layer.field)
        try:
            response = requests.get(
                self.layer_url(layer), params=params, timeout=self.settings.request_timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise DownloadError(f"Error querying {layer.category} layer {layer.layer}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"{layer.category} layer {layer.layer} returned a non-JSON body.")
            return None

        if not isinstance(data, dict):
            logger.warning(f"{layer.category} layer {layer.layer} returned unexpected JSON.")
            return None
        if "error" in data:
            logger.warning(f"{layer.category} layer {layer.layer} returned an error: {data['error']}")
            return None

        logger.info(f"Successfully loaded {layer.category} layer {layer.layer}.")
        return data
