"""Rule-based trade recommendations derived from weather statistics.

Rules run in a fixed order and each may emit trade ideas. Ideas are bound to
the first regional instrument for their sector and numbered in emission order,
then stably sorted by confidence and action.
"""

import logging
import math
from typing import Callable, List, NamedTuple, Tuple

from weather_trader.analysis.instruments import InstrumentTable, MARKET_INSTRUMENTS, get_instrument
from weather_trader.analysis.models import RegionProfile, TradeRecommendation, WeatherStatistics

logger = logging.getLogger(__name__)

CONFIDENCE_RANK = {"High": 0, "Medium": 1, "Low": 2}
ACTION_RANK = {"BUY": 0, "ACCUMULATE": 1, "HOLD": 2, "WATCH": 3, "SELL": 4, "SHORT": 5}
GROWING_SEASONS = ("spring", "summer")


class TradeIdea(NamedTuple):
    sector: str
    sector_display: str
    action: str
    confidence: str
    timeframe: str
    rationale: str
    catalyst: str
    risk_level: str
    expected_return: str


Rule = Callable[[WeatherStatistics, RegionProfile], List[TradeIdea]]


def _return_range(low_base: float, low_scale: float, low_cap: int,
                  high_base: float, high_scale: float, high_cap: int, x: float) -> str:
    low = min(low_base + math.floor(x * low_scale), low_cap)
    high = min(high_base + math.floor(x * high_scale), high_cap)
    return f"+{low}% to +{high}%"


def heat_rule(stats: WeatherStatistics, region: RegionProfile) -> List[TradeIdea]:
    """Energy BUY on forecast extreme heat or a warm anomaly above 7°F in hot weather.

    Args:
        stats: Weather statistics snapshot
        region: Region profile of the location

    Returns:
        Zero or one trade idea
    """
    anomalous = stats.temp_anomaly > 7 and (stats.season == "summer" or stats.current_temp > 77)
    if not (stats.forecast_has_extreme_heat or anomalous):
        return []
    sig = stats.temp_anomaly_significance
    intensity = "Exceptional" if sig > 2 else "Significant"
    return [TradeIdea(
        sector="energy",
        sector_display="Energy",
        action="BUY",
        confidence="High" if sig > 2 else "Medium",
        timeframe="2-6 weeks",
        rationale=(
            f"{intensity} heat anomaly (+{stats.temp_anomaly:.1f}°F above normal) driving elevated "
            f"cooling demand in {region.region}. Increased electricity consumption supports energy sector."
        ),
        catalyst=f"Temperature {stats.temp_anomaly:.1f}°F above historical average",
        risk_level="Medium",
        expected_return=_return_range(5, 3, 15, 8, 4, 20, sig),
    )]


def cold_rule(stats: WeatherStatistics, region: RegionProfile) -> List[TradeIdea]:
    """Natural gas BUY on forecast extreme cold or a cold anomaly below -7°F."""
    anomalous = stats.temp_anomaly < -7 and (stats.season == "winter" or stats.current_temp < 41)
    if not (stats.forecast_has_extreme_cold or anomalous):
        return []
    sig = stats.temp_anomaly_significance
    intensity = "Exceptional" if sig > 2 else "Significant"
    return [TradeIdea(
        sector="naturalGas",
        sector_display="Natural Gas",
        action="BUY",
        confidence="High" if sig > 2 else "Medium",
        timeframe="2-8 weeks",
        rationale=(
            f"{intensity} cold anomaly ({stats.temp_anomaly:.1f}°F below normal) increasing heating "
            f"demand. Natural gas inventories draw down faster in cold snaps."
        ),
        catalyst=f"Temperature {abs(stats.temp_anomaly):.1f}°F below historical average",
        risk_level="High",
        expected_return=_return_range(8, 5, 30, 15, 6, 40, sig),
    )]


def utilities_rule(stats: WeatherStatistics, region: RegionProfile) -> List[TradeIdea]:
    """Utilities BUY above a 5°F anomaly, ACCUMULATE above 3°F or on any extreme."""
    magnitude = abs(stats.temp_anomaly)
    if not (magnitude > 3 or stats.forecast_has_extreme_heat or stats.forecast_has_extreme_cold):
        return []
    warm = stats.temp_anomaly > 0
    return [TradeIdea(
        sector="utilities",
        sector_display="Utilities",
        action="BUY" if magnitude > 5 else "ACCUMULATE",
        confidence="High" if magnitude > 5 else "Medium",
        timeframe="4-12 weeks",
        rationale=(
            f"Temperature {magnitude:.1f}°F {'above' if warm else 'below'} normal increases "
            f"{'cooling' if warm else 'heating'} load on utilities. High demand periods support "
            f"utility revenues in {region.region}."
        ),
        catalyst="Temperature-driven demand surge",
        risk_level="Low",
        expected_return=_return_range(2, 1, 10, 4, 1.5, 15, magnitude),
    )]


def drought_rule(stats: WeatherStatistics, region: RegionProfile) -> List[TradeIdea]:
    """Crop BUYs for a dry growing season, one per relevant commodity.

    Args:
        stats: Weather statistics snapshot
        region: Region profile whose commodities select the crops

    Returns:
        Ideas in corn, soybeans, wheat, coffee order
    """
    if not (stats.is_dry_period and stats.season in GROWING_SEASONS):
        return []

    ratio = stats.precip_ratio
    deficit = 1 - ratio
    percent = f"{ratio * 100:.0f}"
    commodities = region.commodity_relevance
    ideas = []

    if "corn" in commodities or "grains" in commodities:
        ideas.append(TradeIdea(
            sector="corn",
            sector_display="Grains - Corn",
            action="BUY",
            confidence="High" if ratio < 0.4 else "Medium",
            timeframe="6-12 weeks",
            rationale=(
                f"Precipitation at {percent}% of normal threatens corn yields in {region.region}. "
                f"Crop stress during {stats.season} growing season historically correlates with price increases."
            ),
            catalyst="Drought-induced supply concerns",
            risk_level="Medium",
            expected_return=_return_range(6, 20, 25, 10, 25, 35, deficit),
        ))

    if "soybeans" in commodities:
        ideas.append(TradeIdea(
            sector="soybeans",
            sector_display="Grains - Soybeans",
            action="BUY",
            confidence="High" if ratio < 0.4 else "Medium",
            timeframe="6-14 weeks",
            rationale=(
                f"Soybean crops highly sensitive to moisture stress. {percent}% of normal precipitation "
                f"in {region.region} during critical {stats.season} development stages threatens yields."
            ),
            catalyst="Crop condition deterioration",
            risk_level="Medium",
            expected_return=_return_range(5, 18, 22, 9, 22, 30, deficit),
        ))

    if "wheat" in commodities:
        ideas.append(TradeIdea(
            sector="wheat",
            sector_display="Grains - Wheat",
            action="BUY",
            confidence="Medium" if ratio < 0.5 else "Low",
            timeframe="4-10 weeks",
            rationale=(
                f"Dry conditions ({percent}% of normal) affecting wheat development in {region.region}. "
                f"Supply concerns may support prices."
            ),
            catalyst="Export and production forecasts",
            risk_level="Medium",
            expected_return=_return_range(4, 15, 18, 8, 18, 25, deficit),
        ))

    if "coffee" in commodities and stats.current_temp > 68 and ratio < 0.6:
        ideas.append(TradeIdea(
            sector="coffee",
            sector_display="Soft Commodities - Coffee",
            action="BUY",
            confidence="High" if ratio < 0.4 else "Medium",
            timeframe="8-16 weeks",
            rationale=(
                f"Coffee-growing region experiencing {percent}% of normal rainfall with temperatures at "
                f"{stats.current_temp:.1f}°F. Drought stress during flowering/fruit development severely "
                f"impacts yields."
            ),
            catalyst=f"Crop damage assessments from {region.country or region.region}",
            risk_level="High",
            expected_return="+12% to +35%",
        ))

    return ideas


def wet_spring_rule(stats: WeatherStatistics, region: RegionProfile) -> List[TradeIdea]:
    """Wheat BUY when spring rainfall delays planting in a grain region."""
    if not (stats.is_wet_period and stats.season == "spring"):
        return []
    if "wheat" not in region.commodity_relevance and "grains" not in region.commodity_relevance:
        return []
    ratio = stats.precip_ratio
    return [TradeIdea(
        sector="wheat",
        sector_display="Grains - Wheat",
        action="BUY",
        confidence="High" if ratio > 1.8 else "Medium",
        timeframe="4-8 weeks",
        rationale=(
            f"Excessive rainfall ({ratio * 100:.0f}% of normal) in {region.region} delaying spring planting. "
            f"Reduced planted acreage and waterlogged fields threaten production."
        ),
        catalyst="Planting progress delays",
        risk_level="Medium",
        expected_return=_return_range(4, 10, 18, 7, 12, 25, ratio - 1),
    )]


def volatility_rule(stats: WeatherStatistics, region: RegionProfile) -> List[TradeIdea]:
    """Defensive utilities ACCUMULATE under high temperature volatility."""
    if not stats.is_high_volatility:
        return []
    return [TradeIdea(
        sector="utilities",
        sector_display="Utilities (Defensive)",
        action="ACCUMULATE",
        confidence="Medium",
        timeframe="8-16 weeks",
        rationale=(
            f"High weather volatility (σ={stats.temp_volatility:.1f}°F) in {region.region} creates demand "
            f"uncertainty. Utilities offer defensive positioning with potential upside from extreme demand events."
        ),
        catalyst="Weather volatility persistence",
        risk_level="Low",
        expected_return="+3% to +8%",
    )]


def near_normal_ideas(stats: WeatherStatistics, region: RegionProfile) -> List[TradeIdea]:
    """Broad market HOLD and agriculture WATCH used when no rule fires."""
    sign = "+" if stats.temp_anomaly > 0 else ""
    return [
        TradeIdea(
            sector="broadMarket",
            sector_display="Broad Market",
            action="HOLD",
            confidence="Low",
            timeframe="12-52 weeks",
            rationale=(
                f"Weather conditions near historical norms for {region.region} (temp anomaly: "
                f"{sign}{stats.temp_anomaly:.1f}°F, precip: {stats.precip_ratio * 100:.0f}% of normal). "
                f"Limited weather-driven alpha opportunities. Focus on fundamental analysis."
            ),
            catalyst="Monitor for pattern changes",
            risk_level="Low",
            expected_return="Market rate (+6-10% annually)",
        ),
        TradeIdea(
            sector="agriculture",
            sector_display="Agriculture (Diversified)",
            action="WATCH",
            confidence="Low",
            timeframe="8-24 weeks",
            rationale=(
                f"Near-normal weather patterns in {region.region} suggest stable agricultural production "
                f"outlook. Maintain watchlist position for potential pattern shifts."
            ),
            catalyst="Weather pattern deviation",
            risk_level="Medium",
            expected_return="Conditional on weather shifts",
        ),
    ]


def regional_market_idea(region: RegionProfile) -> TradeIdea:
    """Regional broad market HOLD that tops the list up to two trades."""
    return TradeIdea(
        sector="broadMarket",
        sector_display=f"{region.region} Market",
        action="HOLD",
        confidence="Medium",
        timeframe="26-52 weeks",
        rationale=(
            f"Current weather patterns suggest monitoring {region.region} markets for weather-sensitive "
            f"sectors. Broad market exposure provides diversification while awaiting clearer signals."
        ),
        catalyst="Seasonal patterns",
        risk_level="Low",
        expected_return="Index returns (varies by market)",
    )


TRADE_RULES: Tuple[Rule, ...] = (
    heat_rule,
    cold_rule,
    utilities_rule,
    drought_rule,
    wet_spring_rule,
    volatility_rule,
)


class _TradeBook:
    """Binds ideas to instruments and numbers them in insertion order."""

    def __init__(self, region: RegionProfile, table: InstrumentTable):
        self.region = region
        self.table = table
        self.trades: List[TradeRecommendation] = []
        self._next_id = 1

    def add(self, idea: TradeIdea) -> None:
        instrument = get_instrument(self.region.market, idea.sector, self.table)
        if instrument is None:
            logger.debug(f"No instrument for sector '{idea.sector}' in market {self.region.market}")
            return
        self.trades.append(TradeRecommendation(
            id=self._next_id,
            sector=idea.sector_display,
            ticker=instrument.ticker,
            instrument_name=instrument.name,
            exchange=instrument.exchange or "Primary",
            instrument_type=instrument.type,
            action=idea.action,
            confidence=idea.confidence,
            timeframe=idea.timeframe,
            rationale=idea.rationale,
            catalyst=idea.catalyst,
            risk_level=idea.risk_level,
            expected_return=idea.expected_return,
            region=self.region.region,
        ))
        self._next_id += 1


def rank_trades(trades: List[TradeRecommendation]) -> List[TradeRecommendation]:
    """Stable sort by confidence, then action."""
    return sorted(trades, key=lambda t: (CONFIDENCE_RANK[t.confidence], ACTION_RANK[t.action]))


def generate_trade_recommendations(
    stats: WeatherStatistics,
    region: RegionProfile,
    table: InstrumentTable = MARKET_INSTRUMENTS,
) -> List[TradeRecommendation]:
    """Run the rule set and return ranked recommendations.

    Args:
        stats: Weather statistics snapshot
        region: Region profile of the location
        table: Instrument table to bind ideas against

    Returns:
        Recommendations ordered by confidence, action and emission order
    """
    book = _TradeBook(region, table)

    for rule in TRADE_RULES:
        for idea in rule(stats, region):
            book.add(idea)

    if not book.trades:
        for idea in near_normal_ideas(stats, region):
            book.add(idea)

    if len(book.trades) < 2:
        book.add(regional_market_idea(region))

    logger.info(f"Generated {len(book.trades)} trade recommendations for {region.market}")
    return rank_trades(book.trades)
