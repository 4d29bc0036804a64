"""Assembles the full trading analysis document for a location."""

import logging
from datetime import datetime, timezone
from typing import Optional

from weather_trader.analysis.models import CurrentConditionsSummary, TradingAnalysis
from weather_trader.analysis.regions import classify_region
from weather_trader.analysis.statistics import compute_weather_statistics
from weather_trader.analysis.synopsis import generate_all_synopses
from weather_trader.analysis.trades import generate_trade_recommendations
from weather_trader.weather.models import Location, RawWeatherBundle

logger = logging.getLogger(__name__)

ANALYSIS_DISCLAIMER = (
    "This analysis is for educational purposes only and should not be considered financial advice. "
    "Weather-based trading involves significant risk. Past weather patterns do not guarantee future "
    "market performance."
)


def generate_trading_analysis(
    location: Location,
    bundle: RawWeatherBundle,
    now: Optional[datetime] = None,
) -> TradingAnalysis:
    """Compute statistics, region, synopses and trades for one request.

    Args:
        location: Location being analyzed
        bundle: Forecast, historical and climate series for the location
        now: Reference time (defaults to the current UTC time)

    Returns:
        TradingAnalysis document
    """
    now = now or datetime.now(timezone.utc)

    stats = compute_weather_statistics(bundle, now)
    region = classify_region(location)
    logger.info(f"Analyzing {location.name}: region={region.region}, market={region.market}, season={stats.season}")

    return TradingAnalysis(
        location=location.name,
        country=location.country,
        region=region.region,
        generated_at=now,
        current_conditions=CurrentConditionsSummary(
            temperature=stats.current_temp,
            temp_anomaly=f"{stats.temp_anomaly:.1f}",
            precipitation_outlook=stats.precip_outlook,
            season=stats.season.capitalize(),
            humidity=stats.avg_humidity,
            wind_speed=stats.avg_wind_speed,
        ),
        synopsis=generate_all_synopses(stats, region, now),
        trades=generate_trade_recommendations(stats, region),
        disclaimer=ANALYSIS_DISCLAIMER,
    )
