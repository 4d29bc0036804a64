"""Weather service combining geocoding and Open-Meteo lookups."""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from weather_trader.weather.client import OpenMeteoClient
from weather_trader.weather.geocoding import GeocodingService
from weather_trader.weather.models import Location

logger = logging.getLogger(__name__)


def one_year_before(day: date) -> date:
    """Same calendar day one year earlier (Feb 29 maps to Feb 28)."""
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return day.replace(year=day.year - 1, day=day.day - 1)


class WeatherService:
    """Service for location search and weather document retrieval."""

    def __init__(
        self,
        client: Optional[OpenMeteoClient] = None,
        geocoding_service: Optional[GeocodingService] = None
    ):
        """Initialize the weather service.

        Args:
            client: Weather client instance (creates default if None)
            geocoding_service: Geocoding service instance (creates default if None)
        """
        self.client = client or OpenMeteoClient()
        self.geocoding_service = geocoding_service or GeocodingService()

    async def search_locations(self, query: str) -> List[Location]:
        """Find candidate locations for a free-text query.

        Raises:
            GeocodingError: If the geocoding provider fails
        """
        # geopy is blocking
        return await asyncio.to_thread(self.geocoding_service.search, query)

    async def get_forecast(self, lat: float, lon: float) -> Dict[str, Any]:
        """Get the 7-day forecast document for coordinates.

        Raises:
            ValueError: If coordinates are invalid
            WeatherProviderError: If the API request fails
        """
        return await self.client.get_forecast(lat, lon)

    async def get_extended_weather(
        self,
        lat: float,
        lon: float,
        today: Optional[date] = None
    ) -> Dict[str, Dict[str, Any]]:
        """Get forecast, past-year archive and climate normals for trading analysis.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees
            today: End date of the archive window (defaults to today)

        Returns:
            Dictionary with ``forecast``, ``historical`` and ``climate`` documents

        Raises:
            ValueError: If coordinates are invalid
            WeatherProviderError: If any API request fails
        """
        today = today or date.today()
        start = one_year_before(today)
        logger.info(f"Getting extended weather for lat={lat}, lon={lon}, archive {start} to {today}")

        forecast, historical, climate = await asyncio.gather(
            self.client.get_extended_forecast(lat, lon),
            self.client.get_historical(lat, lon, start, today),
            self.client.get_climate(lat, lon),
        )
        return {"forecast": forecast, "historical": historical, "climate": climate}

    async def aclose(self):
        """Close the weather client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing weather client: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
