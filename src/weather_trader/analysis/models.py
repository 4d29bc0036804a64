"""Data models produced by the trading analysis pipeline."""

from datetime import datetime
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Season = Literal["spring", "summer", "fall", "winter"]
Action = Literal["BUY", "SELL", "SHORT", "ACCUMULATE", "HOLD", "WATCH"]
Confidence = Literal["High", "Medium", "Low"]
RiskLevel = Literal["High", "Medium", "Low"]


class CamelModel(BaseModel):
    """Base model serializing to camelCase JSON keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WeatherStatistics(CamelModel):
    """Snapshot of derived weather statistics for one analysis request."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    current_temp: float = Field(..., description="Current temperature (F)")
    avg_hist_temp: float = Field(..., description="Historical mean of daily max/min (F)")
    avg_hist_temp_max: float
    avg_hist_temp_min: float
    temp_anomaly: float = Field(..., description="Current minus historical average (F)")
    temp_anomaly_significance: float = Field(..., description="Anomaly in std-dev units")
    temp_std_dev: float
    avg_hist_precip: float
    precip_ratio: float = Field(..., description="Next-7-day precipitation over historical weekly mean")
    precip_std_dev: float
    precip_outlook: str
    next_7_days_precip: float
    avg_weekly_precip: float
    recent_temp_trend: float
    recent_precip_trend: float
    season: Season
    is_northern_hemisphere: bool
    latitude: float
    avg_humidity: int
    avg_wind_speed: int
    avg_hist_wind: float
    temp_volatility: float
    is_high_volatility: bool
    forecast_has_extreme_heat: bool
    forecast_has_extreme_cold: bool
    is_wet_period: bool
    is_dry_period: bool
    forecast_days: int


class RegionProfile(CamelModel):
    """Market context a location is classified into."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    region: str
    market: str
    currency: str
    commodity_relevance: Tuple[str, ...]
    country: Optional[str] = None


class SynopsisDataPoints(CamelModel):
    current_temp: str
    historical_avg: str
    anomaly: str
    precip_ratio: str


class Synopsis(CamelModel):
    """Qualitative outlook for one horizon."""
    period: str
    summary: str
    details: str
    confidence: str
    temperature_outlook: str
    precipitation_outlook: str
    data_points: SynopsisDataPoints


class TradeRecommendation(CamelModel):
    """Synthetic trade idea bound to a regional instrument."""
    id: int = Field(..., description="Sequence number in rule evaluation order")
    sector: str
    ticker: str
    instrument_name: str
    exchange: str
    instrument_type: str
    action: Action
    confidence: Confidence
    timeframe: str
    rationale: str
    catalyst: str
    risk_level: RiskLevel
    expected_return: str
    region: str


class CurrentConditionsSummary(CamelModel):
    temperature: float
    temp_anomaly: str
    precipitation_outlook: str
    season: str
    humidity: int
    wind_speed: int


class TradingAnalysis(CamelModel):
    """Complete analysis document returned to presentation code."""
    location: str
    country: Optional[str] = None
    region: str
    generated_at: datetime
    current_conditions: CurrentConditionsSummary
    synopsis: Dict[str, Synopsis]
    trades: List[TradeRecommendation]
    disclaimer: str
