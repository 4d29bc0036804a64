"""Weather statistics computed from forecast, historical and climate series.

Every derived value degrades to a safe default (0, 1 or a neutral category)
when its inputs are missing, so callers always receive a complete snapshot.
"""

import logging
from datetime import datetime
from typing import List, Tuple

from weather_trader.analysis.models import Season, WeatherStatistics
from weather_trader.analysis.stats import average, celsius_to_fahrenheit, std_dev
from weather_trader.weather.models import RawWeatherBundle

logger = logging.getLogger(__name__)

FALLBACK_CURRENT_TEMP_F = 68
FALLBACK_HUMIDITY = 50
FALLBACK_WIND_SPEED = 10
DEFAULT_LATITUDE = 45
HIGH_VOLATILITY_STD_DEV_F = 14
WET_PERIOD_RATIO = 1.3
DRY_PERIOD_RATIO = 0.7

# Northern hemisphere seasons indexed by month - 1
_NORTHERN_SEASONS: Tuple[Season, ...] = (
    "winter", "winter",
    "spring", "spring", "spring",
    "summer", "summer", "summer",
    "fall", "fall", "fall",
    "winter",
)
_OPPOSITE_SEASON = {"spring": "fall", "summer": "winter", "fall": "spring", "winter": "summer"}


def get_season(date: datetime, is_northern: bool) -> Season:
    """Meteorological season for a date in the given hemisphere."""
    season = _NORTHERN_SEASONS[date.month - 1]
    return season if is_northern else _OPPOSITE_SEASON[season]


def get_season_sequence(current_season: Season, days: int, is_northern: bool) -> List[Season]:
    """Seasons spanned by a window of ``days`` starting in ``current_season``."""
    seasons: List[Season] = (
        ["winter", "spring", "summer", "fall"]
        if is_northern
        else ["summer", "fall", "winter", "spring"]
    )
    start = seasons.index(current_season)
    count = min(-(-days // 90), 4)
    return [seasons[(start + i) % 4] for i in range(count)]


def classify_precip_outlook(ratio: float) -> str:
    """Map a precipitation ratio onto an outlook category."""
    if ratio > 1.5:
        return "Much Above Normal"
    if ratio > 1.2:
        return "Above Normal"
    if ratio < 0.5:
        return "Much Below Normal"
    if ratio < 0.8:
        return "Below Normal"
    return "Near Normal"


def compute_weather_statistics(bundle: RawWeatherBundle, now: datetime) -> WeatherStatistics:
    """Derive the statistics snapshot for one analysis request.

    Args:
        bundle: Forecast (Fahrenheit) and historical (Celsius) series
        now: Wall-clock time used for the season classification

    Returns:
        Immutable WeatherStatistics snapshot
    """
    forecast = bundle.forecast
    historical = bundle.historical

    hist_max = [t for t in map(celsius_to_fahrenheit, historical.daily.temperature_2m_max) if t is not None]
    hist_min = [t for t in map(celsius_to_fahrenheit, historical.daily.temperature_2m_min) if t is not None]
    hist_precip = historical.daily.precipitation_sum
    hist_wind = historical.daily.wind_speed_10m_max

    forecast_max = [t for t in forecast.daily.temperature_2m_max if t is not None]
    forecast_min = [t for t in forecast.daily.temperature_2m_min if t is not None]
    forecast_precip = forecast.daily.precipitation_sum

    current = forecast.current
    current_temp = current.temperature_2m if current else None
    if current_temp is None:
        current_temp = forecast_max[0] if forecast_max else FALLBACK_CURRENT_TEMP_F
    current_humidity = (current.relative_humidity_2m if current else None) or FALLBACK_HUMIDITY
    current_wind = (current.wind_speed_10m if current else None) or FALLBACK_WIND_SPEED

    avg_hist_temp_max = average(hist_max)
    avg_hist_temp_min = average(hist_min)
    avg_hist_temp = (avg_hist_temp_max + avg_hist_temp_min) / 2
    avg_hist_precip = average(hist_precip)
    avg_hist_wind = average(hist_wind)

    temp_std_dev = std_dev(hist_max)
    precip_std_dev = std_dev(hist_precip)

    temp_anomaly = current_temp - avg_hist_temp
    significance = abs(temp_anomaly) / temp_std_dev if temp_std_dev > 0 else 0

    next_7_days_precip = sum(p or 0 for p in forecast_precip[:7])
    avg_weekly_precip = avg_hist_precip * 7
    precip_ratio = next_7_days_precip / avg_weekly_precip if avg_weekly_precip > 0 else 1

    recent_temp_trend = average(hist_max[-30:]) - average(hist_max[-90:])
    recent_precip_trend = average(hist_precip[-30:]) - average(hist_precip[-90:])

    latitude = forecast.latitude if forecast.latitude is not None else DEFAULT_LATITUDE
    is_northern = latitude >= 0
    season = get_season(now, is_northern)

    heat_threshold = avg_hist_temp_max + 2 * temp_std_dev
    cold_threshold = avg_hist_temp_min - 2 * temp_std_dev

    if not hist_max:
        logger.warning("No historical temperature data; statistics fall back to defaults")

    return WeatherStatistics(
        current_temp=current_temp,
        avg_hist_temp=avg_hist_temp,
        avg_hist_temp_max=avg_hist_temp_max,
        avg_hist_temp_min=avg_hist_temp_min,
        temp_anomaly=temp_anomaly,
        temp_anomaly_significance=significance,
        temp_std_dev=temp_std_dev,
        avg_hist_precip=avg_hist_precip,
        precip_ratio=precip_ratio,
        precip_std_dev=precip_std_dev,
        precip_outlook=classify_precip_outlook(precip_ratio),
        next_7_days_precip=next_7_days_precip,
        avg_weekly_precip=avg_weekly_precip,
        recent_temp_trend=recent_temp_trend,
        recent_precip_trend=recent_precip_trend,
        season=season,
        is_northern_hemisphere=is_northern,
        latitude=latitude,
        avg_humidity=round(current_humidity),
        avg_wind_speed=round(current_wind),
        avg_hist_wind=avg_hist_wind,
        temp_volatility=temp_std_dev,
        is_high_volatility=temp_std_dev > HIGH_VOLATILITY_STD_DEV_F,
        forecast_has_extreme_heat=any(t > heat_threshold for t in forecast_max),
        forecast_has_extreme_cold=any(t < cold_threshold for t in forecast_min),
        is_wet_period=precip_ratio > WET_PERIOD_RATIO,
        is_dry_period=precip_ratio < DRY_PERIOD_RATIO,
        forecast_days=len(forecast_max),
    )
