"""API endpoints for location search and weather documents."""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi_cache.decorator import cache

from weather_trader.config import CACHE_EXPIRE_SECONDS, LLM_PROVIDER
from weather_trader.weather.client import WeatherProviderError
from weather_trader.weather.geocoding import GeocodingError
from weather_trader.weather.service import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["weather"])


def get_weather_service(request: Request) -> WeatherService:
    """Dependency returning the application's shared weather service."""
    return request.app.state.weather_service


def request_key_builder(
    func: Callable[..., Any],
    namespace: str = "",
    *,
    request: Optional[Request] = None,
    response: Optional[Response] = None,
    args: Tuple[Any, ...] = (),
    kwargs: Optional[Dict[str, Any]] = None,
) -> str:
    """Cache key from the endpoint and its sorted query string.

    Injected dependencies are left out of the key so a cached document
    survives service restarts.
    """
    query = sorted(request.query_params.multi_items()) if request is not None else []
    params = "&".join(f"{k}={v}" for k, v in query)
    return f"{namespace}:{func.__module__}:{func.__name__}:{params}"


def require_coordinates(lat: Optional[float], lon: Optional[float]) -> Tuple[float, float]:
    """Raise 400 unless both coordinates were supplied."""
    if lat is None or lon is None:
        raise HTTPException(status_code=400, detail="Latitude and longitude are required")
    return lat, lon


@router.get("/geocode")
@cache(expire=CACHE_EXPIRE_SECONDS, key_builder=request_key_builder)
async def geocode(
    query: Optional[str] = Query(None, description="Free-text place name"),
    weather_service: WeatherService = Depends(get_weather_service),
) -> dict:
    """Search candidate locations for a place name.

    Returns:
        ``{"results": [...]}`` with up to five locations, best match first
    """
    if not query or not query.strip():
        raise HTTPException(status_code=400, detail="Query parameter is required")

    try:
        locations = await weather_service.search_locations(query)
    except GeocodingError as e:
        logger.error(f"Geocoding error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch location data")

    return {"results": [location.model_dump() for location in locations]}


@router.get("/weather")
@cache(expire=CACHE_EXPIRE_SECONDS, key_builder=request_key_builder)
async def get_weather(
    lat: Optional[float] = Query(None, ge=-90, le=90, description="Latitude in decimal degrees"),
    lon: Optional[float] = Query(None, ge=-180, le=180, description="Longitude in decimal degrees"),
    weather_service: WeatherService = Depends(get_weather_service),
) -> dict:
    """Get the 7-day forecast document with current and hourly conditions."""
    lat, lon = require_coordinates(lat, lon)

    try:
        return await weather_service.get_forecast(lat, lon)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except WeatherProviderError as e:
        logger.error(f"Weather API error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch weather data")


@router.get("/weather/extended")
@cache(expire=CACHE_EXPIRE_SECONDS, key_builder=request_key_builder)
async def get_extended_weather(
    lat: Optional[float] = Query(None, ge=-90, le=90, description="Latitude in decimal degrees"),
    lon: Optional[float] = Query(None, ge=-180, le=180, description="Longitude in decimal degrees"),
    weather_service: WeatherService = Depends(get_weather_service),
) -> dict:
    """Get the forecast, archive and climate documents used by trading analysis.

    Returns:
        ``{"forecast": ..., "historical": ..., "climate": ...}``
    """
    lat, lon = require_coordinates(lat, lon)

    try:
        return await weather_service.get_extended_weather(lat, lon)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except WeatherProviderError as e:
        logger.error(f"Extended weather API error: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch extended weather data")


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "service": "weather-trader"}


@router.get("/info")
async def get_service_info() -> dict:
    """Get service information.

    Returns:
        Service name, version, features and data sources
    """
    return {
        "service": "Weather Trade Analyzer",
        "version": "0.1.0",
        "features": [
            "Location search",
            "7-day and 16-day forecasts",
            "Historical and climate comparison",
            "Weather-driven trade recommendations",
            "Narrative analysis via LLM provider",
            "Favorite locations",
        ],
        "narrative_provider": LLM_PROVIDER,
        "data_sources": ["Open-Meteo", "OpenStreetMap Nominatim"],
    }
