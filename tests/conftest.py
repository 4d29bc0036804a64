"""Shared fixtures for the weather trade analyzer tests."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

import pytest

from weather_trader.analysis.models import RegionProfile, WeatherStatistics
from weather_trader.weather.models import RawWeatherBundle


def _stats_defaults() -> dict[str, Any]:
    return {
        "current_temp": 60.0,
        "avg_hist_temp": 60.0,
        "avg_hist_temp_max": 68.0,
        "avg_hist_temp_min": 52.0,
        "temp_anomaly": 0.0,
        "temp_anomaly_significance": 0.0,
        "temp_std_dev": 5.0,
        "avg_hist_precip": 2.0,
        "precip_ratio": 1.0,
        "precip_std_dev": 1.0,
        "precip_outlook": "Near Normal",
        "next_7_days_precip": 14.0,
        "avg_weekly_precip": 14.0,
        "recent_temp_trend": 0.0,
        "recent_precip_trend": 0.0,
        "season": "fall",
        "is_northern_hemisphere": True,
        "latitude": 40.0,
        "avg_humidity": 50,
        "avg_wind_speed": 10,
        "avg_hist_wind": 12.0,
        "temp_volatility": 5.0,
        "is_high_volatility": False,
        "forecast_has_extreme_heat": False,
        "forecast_has_extreme_cold": False,
        "is_wet_period": False,
        "is_dry_period": False,
        "forecast_days": 16,
    }


@pytest.fixture
def make_stats() -> Callable[..., WeatherStatistics]:
    """Factory for a near-normal statistics snapshot with overrides."""

    def _make(**overrides: Any) -> WeatherStatistics:
        values = _stats_defaults()
        values.update(overrides)
        return WeatherStatistics(**values)

    return _make


@pytest.fixture
def us_region() -> RegionProfile:
    return RegionProfile(
        region="North America",
        market="US",
        currency="USD",
        commodity_relevance=("corn", "soybeans", "wheat", "natural_gas", "oil"),
        country="United States",
    )


@pytest.fixture
def make_bundle() -> Callable[..., RawWeatherBundle]:
    """Factory for a weather bundle from flat daily lists."""

    def _make(
        *,
        current_temp: Optional[float] = None,
        forecast_max: Optional[List[Optional[float]]] = None,
        forecast_min: Optional[List[Optional[float]]] = None,
        forecast_precip: Optional[List[Optional[float]]] = None,
        hist_max_c: Optional[List[Optional[float]]] = None,
        hist_min_c: Optional[List[Optional[float]]] = None,
        hist_precip: Optional[List[Optional[float]]] = None,
        latitude: Optional[float] = 40.0,
        humidity: Optional[float] = None,
        wind: Optional[float] = None,
    ) -> RawWeatherBundle:
        current = None
        if current_temp is not None or humidity is not None or wind is not None:
            current = {
                "temperature_2m": current_temp,
                "relative_humidity_2m": humidity,
                "wind_speed_10m": wind,
            }
        return RawWeatherBundle.model_validate({
            "forecast": {
                "latitude": latitude,
                "current": current,
                "daily": {
                    "temperature_2m_max": forecast_max or [],
                    "temperature_2m_min": forecast_min or [],
                    "precipitation_sum": forecast_precip or [],
                },
            },
            "historical": {
                "daily": {
                    "temperature_2m_max": hist_max_c or [],
                    "temperature_2m_min": hist_min_c or [],
                    "precipitation_sum": hist_precip or [],
                },
            },
            "climate": {},
        })

    return _make
