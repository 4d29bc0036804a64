"""Prompt construction and rule-based fallback advice for narrative analysis."""

from datetime import datetime
from typing import List, Optional

from weather_trader.analysis.models import WeatherStatistics
from weather_trader.weather.models import Location, WeatherSeries

FORECAST_PROMPT_DAYS = 14


def _anomaly_context(anomaly: float) -> str:
    if abs(anomaly) > 10:
        return "SIGNIFICANT DEVIATION"
    if abs(anomaly) > 5:
        return "Notable deviation"
    return "Within normal range"


def _at(values: List[Optional[float]], i: int) -> Optional[float]:
    return values[i] if i < len(values) else None


def _temp(value: Optional[float]) -> str:
    return "?" if value is None else f"{value:.0f}"


def _forecast_lines(forecast: WeatherSeries) -> str:
    daily = forecast.daily
    lines = []
    for i, date in enumerate(daily.time[:FORECAST_PROMPT_DAYS]):
        high = _at(daily.temperature_2m_max, i)
        low = _at(daily.temperature_2m_min, i)
        precip = _at(daily.precipitation_sum, i)
        line = f"{date}: H:{_temp(high)}°F L:{_temp(low)}°F"
        if precip is not None and precip > 0.1:
            line += f' rain {precip:.1f}"'
        lines.append(line)
    return "\n".join(lines) or "Forecast unavailable"


def build_trading_prompt(
    location: Location,
    forecast: WeatherSeries,
    stats: WeatherStatistics,
    now: datetime,
) -> str:
    """Format the statistics snapshot into a structured analysis prompt.

    Args:
        location: Location being analyzed
        forecast: Forecast series (Fahrenheit) for the day-by-day table
        stats: Weather statistics snapshot
        now: Reference date quoted in the prompt

    Returns:
        Prompt text for the narrative generator
    """
    name = location.name
    if stats.is_wet_period:
        abnormal = "UNUSUALLY WET"
    elif stats.is_dry_period:
        abnormal = "UNUSUALLY DRY"
    else:
        abnormal = "Normal"

    alerts = []
    if stats.forecast_has_extreme_heat:
        alerts.append("**EXTREME HEAT WARNING** - Heat wave conditions expected")
    if stats.forecast_has_extreme_cold:
        alerts.append("**EXTREME COLD WARNING** - Arctic conditions expected")
    if stats.is_high_volatility:
        alerts.append("**HIGH VOLATILITY** - Rapid temperature swings expected")
    alerts_text = "\n".join(alerts) or "None"

    return f"""You are a weather-commodities trading analyst. Provide SPECIFIC, ACTIONABLE trade ideas with exact ticker symbols, grounded in the weather data below.

## Requirements
1. Give a specific ticker symbol for every trade (e.g. UNG, XLE, ED, CORN).
2. Include entry, target and stop-loss levels.
3. Consider current events that intersect with the weather impacts.
4. Consider companies headquartered in or heavily exposed to {name}.
5. Consider second-order effects on supply chains, consumer behavior and earnings.

## Current Date
{now.strftime('%A, %B %d, %Y')}

## Location: {name}, {location.country or ''}

### Regional Context to Consider
- What major companies are headquartered here or have significant operations?
- What is the local energy infrastructure (utilities, pipelines, power plants)?
- What agricultural products are grown in this region?
- What ports, airports or logistics hubs could be affected?
- What seasonal retail patterns exist here?
- Are there current news events or earnings seasons to consider?

## WEATHER DATA

### Current Conditions
| Metric | Value | Context |
|--------|-------|---------|
| Temperature | {stats.current_temp:.1f}°F | vs {stats.avg_hist_temp:.1f}°F historical average |
| Anomaly | {stats.temp_anomaly:.1f}°F | {_anomaly_context(stats.temp_anomaly)} |
| Season | {stats.season} | |
| Humidity | {stats.avg_humidity}% | |

### Precipitation
| Metric | Value |
|--------|-------|
| Outlook | {stats.precip_outlook} |
| vs Normal | {stats.precip_ratio * 100:.0f}% of typical |
| Next 7 Days | {stats.next_7_days_precip:.2f} inches |
| Abnormal? | {abnormal} |

### Forecast Alerts
{alerts_text}

### {FORECAST_PROMPT_DAYS}-Day Forecast
{_forecast_lines(forecast)}

---

## YOUR ANALYSIS (Required Format)

### Executive Summary
[2-3 sentences: the key weather-driven trade right now for {name}.]

### Trade Recommendations

Provide EXACTLY 5 specific trades, each in this format:

---
**Trade 1: [Name]**
- **Ticker:** [Exact symbol like UNG, XLE, ED, CORN]
- **Action:** [BUY / SELL / SHORT]
- **Entry:** [Specific price, "at market open" or "on dip to $X"]
- **Target:** [+X% or specific price]
- **Stop Loss:** [-X% or specific price]
- **Timeframe:** [X days/weeks]
- **Confidence:** [High/Medium/Low]
- **Why:** [2-3 sentences linking the weather to the trade]
- **Risk:** [What could go wrong]
---

[Repeat for Trades 2-5]

### Sector Analysis for {name}

**Energy & Utilities**
- Local utilities and how this weather affects them
- Heating/cooling demand outlook

**Regional Companies**
- 3-5 companies headquartered in or heavily exposed to {name}, and the effect on their operations

**Agriculture & Commodities**
- Relevant crops for this region and commodity plays (CORN, WEAT, SOYB, DBA)

**Retail & Consumer**
- Weather-sensitive retailers with exposure and the consumer behavior impact

**Transportation & Logistics**
- Airports, ports, rail and trucking affected, with disruption risks and plays

### News & Catalysts to Watch
1. Upcoming earnings, reports and weather events
2. Government reports to monitor (EIA storage, USDA crops)

### Contrarian View
One paragraph on why the obvious trade might fail and what positioning works if the consensus is wrong.

---
Provide real ticker symbols and be specific.
"""


def generate_fallback_advice(location: Optional[Location], stats: Optional[WeatherStatistics]) -> List[str]:
    """Rule-based tips used when no narrative generator is available."""
    tips = []

    if stats is not None:
        if stats.temp_anomaly > 5:
            tips.append(
                f"Significant heat anomaly (+{stats.temp_anomaly:.1f}°F) detected. "
                f"Consider energy sector exposure for increased cooling demand."
            )
        elif stats.temp_anomaly < -5:
            tips.append(
                f"Significant cold anomaly ({stats.temp_anomaly:.1f}°F) detected. "
                f"Natural gas and heating-related investments may benefit."
            )

        if stats.is_dry_period and stats.season in ("spring", "summer"):
            tips.append(
                "Drought conditions during growing season may impact agricultural commodity prices. "
                "Monitor crop reports."
            )

        if stats.is_wet_period:
            tips.append(
                "Above-normal precipitation may affect planting/harvest schedules and flood-sensitive industries."
            )

    if not tips:
        name = location.name if location else "this location"
        tips.append(
            f"Weather conditions are near normal for {name}. "
            f"Limited weather-driven trading opportunities at this time."
        )

    tips.append(
        "For detailed AI-powered analysis, configure an LLM API key (set LLM_API_KEY environment variable)."
    )
    return tips
