"""Geocoding service for location search."""

import logging
from functools import lru_cache
from typing import Any, List, Optional, Tuple

from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable
from geopy.geocoders import Nominatim
from timezonefinder import TimezoneFinder

from weather_trader.config import GEOCODING_USER_AGENT, GEOCODING_RESULT_LIMIT
from weather_trader.weather.models import Location

logger = logging.getLogger(__name__)

PLACE_NAME_KEYS = ("city", "town", "village", "municipality", "hamlet", "county")


class GeocodingError(Exception):
    """Raised when geocoding fails."""
    pass


class GeocodingService:
    """Service for free-text location search and timezone detection."""

    def __init__(self, geolocator: Optional[Any] = None, timezone_finder: Optional[Any] = None):
        """Initialize the geocoding service.

        Args:
            geolocator: geopy geocoder (Nominatim if None)
            timezone_finder: TimezoneFinder instance (created if None)
        """
        self.tf = timezone_finder or TimezoneFinder(in_memory=True)
        self.geolocator = geolocator or Nominatim(user_agent=GEOCODING_USER_AGENT)
        logger.info("GeocodingService initialized with timezonefinder and geopy")

    def search(self, query: str, limit: int = GEOCODING_RESULT_LIMIT) -> List[Location]:
        """Find candidate locations for a free-text query.

        Args:
            query: Place name to search for
            limit: Maximum number of candidates

        Returns:
            Candidate locations, best match first (empty if nothing matched)

        Raises:
            GeocodingError: If the geocoding provider fails
        """
        return list(self._search(query.strip(), limit))

    @lru_cache(maxsize=1000)
    def _search(self, query: str, limit: int) -> Tuple[Location, ...]:
        try:
            logger.info(f"Searching locations for '{query}'")
            matches = self.geolocator.geocode(
                query,
                exactly_one=False,
                limit=limit,
                addressdetails=True,
                language="en",
            )
        except (GeocoderUnavailable, GeocoderTimedOut) as e:
            logger.error(f"Geocoding service unavailable for '{query}': {e}")
            raise GeocodingError("Geocoding service temporarily unavailable")
        except GeocoderServiceError as e:
            logger.error(f"Geocoding service error for '{query}': {e}")
            raise GeocodingError(f"Failed to geocode location: {e}")

        locations = tuple(self._to_location(match) for match in matches or [])
        logger.info(f"Found {len(locations)} locations for '{query}'")
        return locations

    def _to_location(self, match: Any) -> Location:
        raw = match.raw or {}
        address = raw.get("address") or {}
        name = raw.get("name") or next(
            (address[key] for key in PLACE_NAME_KEYS if address.get(key)),
            match.address.split(",")[0],
        )
        place_id = raw.get("place_id")
        return Location(
            id=int(place_id) if place_id is not None else None,
            name=name,
            latitude=match.latitude,
            longitude=match.longitude,
            country=address.get("country"),
            admin1=address.get("state") or address.get("region"),
            timezone=self.get_timezone(match.latitude, match.longitude),
        )

    def get_timezone(self, lat: float, lon: float) -> str:
        """Get timezone for coordinates.

        Args:
            lat: Latitude
            lon: Longitude

        Returns:
            Timezone string (e.g., "Europe/Belgrade") or "UTC" if not found
        """
        timezone = self.tf.timezone_at(lng=lon, lat=lat)
        if timezone:
            return timezone
        logger.warning(f"No timezone found for ({lat}, {lon}), defaulting to UTC")
        return "UTC"
