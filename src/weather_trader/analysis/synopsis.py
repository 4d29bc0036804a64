"""Period outlooks derived from the weather statistics snapshot."""

from datetime import datetime, timedelta
from typing import Dict

from weather_trader.analysis.models import RegionProfile, Synopsis, SynopsisDataPoints, WeatherStatistics
from weather_trader.analysis.statistics import get_season, get_season_sequence

HORIZONS = (30, 60, 90, 180, 360)
SEASON_TRANSITION_LOOKAHEAD = timedelta(days=45)


def describe_temperature(stats: WeatherStatistics) -> str:
    """Phrase the temperature anomaly, graded by its significance.

    Args:
        stats: Weather statistics snapshot

    Returns:
        Short description such as "warmer than normal"
    """
    anomaly = stats.temp_anomaly
    if stats.temp_anomaly_significance > 2:
        return "significantly warmer than normal" if anomaly > 0 else "significantly cooler than normal"
    if stats.temp_anomaly_significance > 1:
        return "warmer than normal" if anomaly > 0 else "cooler than normal"
    if abs(anomaly) > 1:
        return "slightly above normal temperatures" if anomaly > 0 else "slightly below normal temperatures"
    return "near normal temperatures"


def describe_precipitation(ratio: float) -> str:
    """Phrase the precipitation ratio (observed over normal)."""
    if ratio > 2:
        return "exceptionally wet conditions expected"
    if ratio > 1.5:
        return "above average precipitation likely"
    if ratio > 1.2:
        return "slightly wetter than normal"
    if ratio < 0.3:
        return "very dry conditions persisting"
    if ratio < 0.5:
        return "below average precipitation expected"
    if ratio < 0.8:
        return "slightly drier than normal"
    return "near normal precipitation"


def describe_climate_zone(latitude: float) -> str:
    """One sentence on seasonal variation for the latitude band."""
    lat = abs(latitude)
    if lat > 55:
        return "High latitude location experiences significant seasonal variation."
    if lat < 23.5:
        return "Tropical location with minimal seasonal temperature variation."
    if lat < 35:
        return "Subtropical climate with moderate seasonal changes."
    return "Mid-latitude location with distinct seasonal patterns."


def horizon_confidence(days: int) -> str:
    """Fixed confidence step function by horizon length."""
    if days <= 14:
        return "High"
    if days <= 30:
        return "Moderate-High"
    if days <= 60:
        return "Moderate"
    if days <= 90:
        return "Low-Moderate"
    return "Seasonal Average"


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _details(
    days: int,
    stats: WeatherStatistics,
    region: RegionProfile,
    now: datetime,
    temp_description: str,
    precip_description: str,
) -> str:
    if stats.recent_temp_trend > 1:
        trend = "warming trend observed"
    elif stats.recent_temp_trend < -1:
        trend = "cooling trend observed"
    else:
        trend = "stable temperature pattern"

    if stats.forecast_has_extreme_heat:
        extreme = " Extreme heat events possible in the near term."
    elif stats.forecast_has_extreme_cold:
        extreme = " Extreme cold events possible in the near term."
    else:
        extreme = ""

    volatility = " High temperature variability may create challenging conditions." if stats.is_high_volatility else ""
    climate = describe_climate_zone(stats.latitude)

    if days <= 30:
        if stats.next_7_days_precip > 0:
            weekly = (
                f"Next 7 days: {stats.next_7_days_precip:.1f}mm precipitation expected "
                f"(avg: {stats.avg_weekly_precip:.1f}mm)."
            )
        else:
            weekly = "Minimal precipitation expected in the near term."
        return (
            f"Current temperature {stats.current_temp:.1f}°F vs historical average "
            f"{stats.avg_hist_temp:.1f}°F. {weekly} {trend}.{extreme}{volatility}"
        )

    if days <= 60:
        upcoming = get_season(now + SEASON_TRANSITION_LOOKAHEAD, stats.is_northern_hemisphere)
        if upcoming != stats.season:
            transition = f"Seasonal transition toward {upcoming} expected."
        else:
            transition = f"{_capitalize(stats.season)} conditions to continue."
        return f"{trend}. {transition} {precip_description}.{volatility}"

    if days <= 90:
        return (
            f"{climate} Based on historical patterns, expect {temp_description} to moderate "
            f"toward seasonal norms. {precip_description} as seasonal patterns evolve."
        )

    if days <= 180:
        seasons = get_season_sequence(stats.season, days, stats.is_northern_hemisphere)
        variability = "significant" if stats.is_high_volatility else "moderate"
        return (
            f"Extended outlook spans {' → '.join(seasons)}. Historical data suggests "
            f"{stats.precip_outlook.lower()} precipitation tendency. Temperature patterns typically "
            f"follow climatological norms with {variability} variability."
        )

    return (
        f"Full annual cycle analysis. {climate} Region experiences {stats.season} currently, "
        f"cycling through all seasons. Long-term patterns based on historical climatology for "
        f"{region.country or region.region}."
    )


def generate_synopsis(
    days: int,
    stats: WeatherStatistics,
    region: RegionProfile,
    now: datetime,
) -> Synopsis:
    """Build the outlook for one horizon.

    Args:
        days: Horizon length in days
        stats: Weather statistics snapshot
        region: Region profile of the location
        now: Reference time for the season-transition check

    Returns:
        Synopsis for the horizon
    """
    temp_description = describe_temperature(stats)
    precip_description = describe_precipitation(stats.precip_ratio)

    anomaly = stats.temp_anomaly
    if anomaly > 2:
        temperature_outlook = "Above Normal"
    elif anomaly < -2:
        temperature_outlook = "Below Normal"
    else:
        temperature_outlook = "Near Normal"

    return Synopsis(
        period=f"{days}-Day Outlook",
        summary=f"{_capitalize(temp_description)} with {precip_description}.",
        details=_details(days, stats, region, now, temp_description, precip_description),
        confidence=horizon_confidence(days),
        temperature_outlook=temperature_outlook,
        precipitation_outlook=stats.precip_outlook,
        data_points=SynopsisDataPoints(
            current_temp=f"{stats.current_temp:.1f}",
            historical_avg=f"{stats.avg_hist_temp:.1f}",
            anomaly=f"{'+' if anomaly > 0 else ''}{anomaly:.1f}",
            precip_ratio=f"{stats.precip_ratio * 100:.0f}% of normal",
        ),
    )


def generate_all_synopses(
    stats: WeatherStatistics,
    region: RegionProfile,
    now: datetime,
) -> Dict[str, Synopsis]:
    """Outlooks for every fixed horizon, keyed ``days30`` through ``days360``."""
    return {f"days{days}": generate_synopsis(days, stats, region, now) for days in HORIZONS}
