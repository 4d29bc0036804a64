"""HTTP client for the Open-Meteo forecast, archive and climate APIs."""

import logging
from datetime import date
from typing import Any, Dict, Optional

import httpx

from weather_trader.config import (
    OPEN_METEO_FORECAST_URL, OPEN_METEO_ARCHIVE_URL, OPEN_METEO_CLIMATE_URL,
    CLIMATE_MODEL, CLIMATE_START_DATE, CLIMATE_END_DATE,
    USER_AGENT, WEATHER_TIMEOUT_SECONDS
)

logger = logging.getLogger(__name__)

FORECAST_CURRENT_FIELDS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,is_day,precipitation,rain,showers,"
    "snowfall,weather_code,cloud_cover,pressure_msl,surface_pressure,wind_speed_10m,"
    "wind_direction_10m,wind_gusts_10m"
)
FORECAST_HOURLY_FIELDS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,precipitation_probability,"
    "precipitation,weather_code,wind_speed_10m,wind_direction_10m,is_day"
)
FORECAST_DAILY_FIELDS = (
    "weather_code,temperature_2m_max,temperature_2m_min,apparent_temperature_max,"
    "apparent_temperature_min,sunrise,sunset,precipitation_sum,precipitation_probability_max,"
    "wind_speed_10m_max"
)
EXTENDED_CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,precipitation,weather_code,cloud_cover,wind_speed_10m"
EXTENDED_DAILY_FIELDS = (
    "weather_code,temperature_2m_max,temperature_2m_min,precipitation_sum,"
    "precipitation_probability_max,wind_speed_10m_max,sunshine_duration"
)
ARCHIVE_DAILY_FIELDS = (
    "weather_code,temperature_2m_max,temperature_2m_min,precipitation_sum,"
    "wind_speed_10m_max,sunshine_duration"
)
CLIMATE_DAILY_FIELDS = "temperature_2m_max,temperature_2m_min,precipitation_sum,wind_speed_10m_max"


class WeatherProviderError(Exception):
    """Raised when a weather provider request fails or returns malformed data."""


def validate_coordinates(lat: float, lon: float) -> None:
    """Raise ValueError for coordinates outside the valid range."""
    if not (-90 <= lat <= 90) or not (-180 <= lon <= 180):
        raise ValueError(f"Invalid coordinates: lat={lat}, lon={lon}")


class OpenMeteoClient:
    """Async client for fetching Open-Meteo documents."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        forecast_url: str = OPEN_METEO_FORECAST_URL,
        archive_url: str = OPEN_METEO_ARCHIVE_URL,
        climate_url: str = OPEN_METEO_CLIMATE_URL,
    ):
        """Initialize the weather client.

        Args:
            client: HTTP client (creates default if None)
            forecast_url: Forecast API endpoint
            archive_url: Historical archive API endpoint
            climate_url: Climate normals API endpoint
        """
        self.forecast_url = forecast_url
        self.archive_url = archive_url
        self.climate_url = climate_url
        self.client = client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=WEATHER_TIMEOUT_SECONDS
        )

    async def _get_json(self, url: str, params: Dict[str, Any], context: str) -> Dict[str, Any]:
        """GET a JSON document, translating transport failures.

        Raises:
            WeatherProviderError: If the request fails or the body is not a JSON object
        """
        logger.info(f"Fetching {context} for lat={params.get('latitude')}, lon={params.get('longitude')}")
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from Open-Meteo {context}: {e.response.status_code} - {e.response.text}")
            raise WeatherProviderError(f"{context} failed with status {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error(f"Request error to Open-Meteo {context}: {e}")
            raise WeatherProviderError(f"{context} request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Invalid JSON from Open-Meteo {context}: {e}")
            raise WeatherProviderError(f"{context} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise WeatherProviderError(f"{context} returned an unexpected payload")
        return data

    async def get_forecast(self, lat: float, lon: float) -> Dict[str, Any]:
        """Fetch the 7-day forecast with current and hourly conditions.

        Temperatures in Fahrenheit, wind in mph, precipitation in inches.

        Raises:
            ValueError: If coordinates are invalid
            WeatherProviderError: If the API request fails
        """
        validate_coordinates(lat, lon)
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": FORECAST_CURRENT_FIELDS,
            "hourly": FORECAST_HOURLY_FIELDS,
            "daily": FORECAST_DAILY_FIELDS,
            "timezone": "auto",
            "forecast_days": 7,
            "temperature_unit": "fahrenheit",
            "wind_speed_unit": "mph",
            "precipitation_unit": "inch",
        }
        return await self._get_json(self.forecast_url, params, "forecast")

    async def get_extended_forecast(self, lat: float, lon: float) -> Dict[str, Any]:
        """Fetch the 16-day forecast used for trading analysis (Fahrenheit)."""
        validate_coordinates(lat, lon)
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": EXTENDED_CURRENT_FIELDS,
            "daily": EXTENDED_DAILY_FIELDS,
            "timezone": "auto",
            "forecast_days": 16,
            "temperature_unit": "fahrenheit",
        }
        return await self._get_json(self.forecast_url, params, "extended forecast")

    async def get_historical(self, lat: float, lon: float, start: date, end: date) -> Dict[str, Any]:
        """Fetch the daily archive between two dates (Celsius)."""
        validate_coordinates(lat, lon)
        params = {
            "latitude": lat,
            "longitude": lon,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "daily": ARCHIVE_DAILY_FIELDS,
            "timezone": "auto",
        }
        return await self._get_json(self.archive_url, params, "historical archive")

    async def get_climate(self, lat: float, lon: float) -> Dict[str, Any]:
        """Fetch modelled climate normals (Celsius)."""
        validate_coordinates(lat, lon)
        params = {
            "latitude": lat,
            "longitude": lon,
            "start_date": CLIMATE_START_DATE,
            "end_date": CLIMATE_END_DATE,
            "daily": CLIMATE_DAILY_FIELDS,
            "models": CLIMATE_MODEL,
        }
        return await self._get_json(self.climate_url, params, "climate normals")

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
