"""Data models for weather provider documents and locations."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Location(BaseModel):
    """Geocoded location candidate."""
    id: Optional[int] = Field(None, description="Provider place identifier")
    name: str = Field(..., description="Place name")
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: Optional[float] = Field(None, ge=-180, le=180, description="Longitude in decimal degrees")
    country: Optional[str] = Field(None, description="Country name")
    admin1: Optional[str] = Field(None, description="First-level administrative area")
    timezone: Optional[str] = Field(None, description="IANA timezone identifier")


class CurrentConditions(BaseModel):
    """Optional ``current`` block of an Open-Meteo document."""
    time: Optional[str] = None
    temperature_2m: Optional[float] = None
    relative_humidity_2m: Optional[float] = None
    wind_speed_10m: Optional[float] = None
    precipitation: Optional[float] = None
    weather_code: Optional[int] = None
    cloud_cover: Optional[float] = None


class DailySeries(BaseModel):
    """Parallel daily arrays; index i of every field refers to the same date."""
    time: List[str] = Field(default_factory=list)
    temperature_2m_max: List[Optional[float]] = Field(default_factory=list)
    temperature_2m_min: List[Optional[float]] = Field(default_factory=list)
    precipitation_sum: List[Optional[float]] = Field(default_factory=list)
    precipitation_probability_max: List[Optional[float]] = Field(default_factory=list)
    wind_speed_10m_max: List[Optional[float]] = Field(default_factory=list)
    sunshine_duration: List[Optional[float]] = Field(default_factory=list)
    weather_code: List[Optional[int]] = Field(default_factory=list)


class WeatherSeries(BaseModel):
    """One forecast, archive or climate document."""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    current: Optional[CurrentConditions] = None
    daily: DailySeries = Field(default_factory=DailySeries)


class RawWeatherBundle(BaseModel):
    """Forecast (Fahrenheit) plus historical and climate (Celsius) series."""
    forecast: WeatherSeries = Field(default_factory=WeatherSeries)
    historical: WeatherSeries = Field(default_factory=WeatherSeries)
    climate: WeatherSeries = Field(default_factory=WeatherSeries)


class FavoriteCreate(BaseModel):
    """Request body for adding a favorite location."""
    name: Optional[str] = Field(None, description="Location name")
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    country: Optional[str] = None


class FavoriteLocation(BaseModel):
    """Stored favorite location."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(..., description="Sequential favorite identifier")
    name: str
    latitude: float
    longitude: float
    country: Optional[str] = None
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    details: Optional[str] = Field(None, description="Additional error details")
