"""Tests for the trade recommendation engine."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from weather_trader.analysis.instruments import MARKET_INSTRUMENTS, Instrument, get_instrument
from weather_trader.analysis.models import RegionProfile, TradeRecommendation
from weather_trader.analysis.trades import generate_trade_recommendations, rank_trades


def _region(market: str, region: str, commodities: tuple[str, ...], country: str | None = None) -> RegionProfile:
    return RegionProfile(region=region, market=market, currency="USD",
                         commodity_relevance=commodities, country=country)


def test_extreme_heat_puts_energy_buy_first(make_stats, us_region) -> None:
    stats = make_stats(forecast_has_extreme_heat=True, season="summer", current_temp=95,
                       temp_anomaly=15, temp_anomaly_significance=3)

    trades = generate_trade_recommendations(stats, us_region)

    first = trades[0]
    assert first.action == "BUY"
    assert first.sector == "Energy"
    assert first.ticker == "XLE"
    assert first.confidence == "High"
    assert first.exchange == "Primary"
    assert first.region == "North America"
    assert [t.sector for t in trades] == ["Energy", "Utilities"]


def test_moderate_heat_is_medium_confidence(make_stats, us_region) -> None:
    stats = make_stats(forecast_has_extreme_heat=True, season="summer", current_temp=80,
                       temp_anomaly=4, temp_anomaly_significance=1.5)

    energy = generate_trade_recommendations(stats, us_region)[0]

    assert energy.sector == "Energy"
    assert energy.confidence == "Medium"
    assert energy.expected_return == "+9% to +14%"


def test_near_normal_conditions_yield_exactly_two_defaults(make_stats, us_region) -> None:
    trades = generate_trade_recommendations(make_stats(), us_region)

    assert [(t.sector, t.action, t.ticker) for t in trades] == [
        ("Broad Market", "HOLD", "SPY"),
        ("Agriculture (Diversified)", "WATCH", "DBA"),
    ]
    assert [t.id for t in trades] == [1, 2]


def test_engine_is_deterministic(make_stats, us_region) -> None:
    stats = make_stats(is_dry_period=True, precip_ratio=0.35, season="spring",
                       temp_anomaly=6, temp_anomaly_significance=1.1, is_high_volatility=True)

    first = generate_trade_recommendations(stats, us_region)
    second = generate_trade_recommendations(stats, us_region)

    assert first == second
    assert len(first) > 2


def test_drought_emits_grain_trades_in_rule_order(make_stats, us_region) -> None:
    stats = make_stats(is_dry_period=True, precip_ratio=0.25, season="spring")

    trades = generate_trade_recommendations(stats, us_region)

    assert [(t.ticker, t.confidence) for t in trades] == [
        ("CORN", "High"),
        ("SOYB", "High"),
        ("WEAT", "Medium"),
    ]
    assert trades[0].expected_return == "+21% to +28%"
    assert "25% of normal" in trades[0].rationale


def test_drought_outside_growing_season_is_ignored(make_stats, us_region) -> None:
    stats = make_stats(is_dry_period=True, precip_ratio=0.25, season="winter")

    sectors = [t.sector for t in generate_trade_recommendations(stats, us_region)]

    assert sectors == ["Broad Market", "Agriculture (Diversified)"]


def test_coffee_drought_needs_heat_and_deep_deficit(make_stats) -> None:
    brazil = _region("Brazil", "Latin America", ("coffee", "soybeans", "sugar"), "Brazil")

    dry = generate_trade_recommendations(
        make_stats(is_dry_period=True, precip_ratio=0.5, season="summer", current_temp=80), brazil
    )
    assert [t.ticker for t in dry] == ["SOJA3.SA", "KC"]
    assert dry[1].catalyst == "Crop damage assessments from Brazil"

    milder = generate_trade_recommendations(
        make_stats(is_dry_period=True, precip_ratio=0.65, season="summer", current_temp=80), brazil
    )
    assert [t.ticker for t in milder] == ["SOJA3.SA", "EWZ"]
    assert milder[1].sector == "Latin America Market"


def test_missing_instrument_omits_trade_without_consuming_id(make_stats) -> None:
    global_region = _region("Global", "Global", ("oil", "gold", "grains"))
    stats = make_stats(forecast_has_extreme_cold=True, season="winter",
                       temp_anomaly=-10, temp_anomaly_significance=2.5)

    trades = generate_trade_recommendations(stats, global_region)

    # Natural gas has no Global instrument
    assert [(t.id, t.ticker) for t in trades] == [(1, "JXI"), (2, "VT")]
    assert trades[1].action == "HOLD"
    assert trades[1].confidence == "Medium"


def test_market_without_sector_falls_back_to_global_table(make_stats) -> None:
    latam = _region("LatAm", "Latin America", ("coffee", "sugar", "grains", "copper"))

    assert get_instrument("LatAm", "energy") == MARKET_INSTRUMENTS["Global"]["energy"][0]
    assert get_instrument("LatAm", "naturalGas") is None

    stats = make_stats(forecast_has_extreme_heat=True, season="summer", current_temp=90,
                       temp_anomaly=10, temp_anomaly_significance=2.2)
    assert generate_trade_recommendations(stats, latam)[0].ticker == "IXC"


def test_custom_instrument_table(make_stats, us_region) -> None:
    table = MappingProxyType({
        "US": MappingProxyType({"broadMarket": (Instrument("QQQ", "Invesco QQQ", "ETF", "NASDAQ"),)}),
    })

    trades = generate_trade_recommendations(make_stats(), us_region, table)

    # Agriculture is missing, so the regional idea tops the list up
    assert [(t.id, t.sector) for t in trades] == [(2, "North America Market"), (1, "Broad Market")]
    assert {(t.ticker, t.exchange) for t in trades} == {("QQQ", "NASDAQ")}


def _trade(id: int, action: str, confidence: str) -> TradeRecommendation:
    return TradeRecommendation(
        id=id, sector="Test", ticker="T", instrument_name="Test", exchange="X", instrument_type="ETF",
        action=action, confidence=confidence, timeframe="1 week", rationale="", catalyst="",
        risk_level="Low", expected_return="", region="Global",
    )


def test_rank_trades_orders_by_confidence_then_action_stably() -> None:
    trades = [
        _trade(1, "SHORT", "High"),
        _trade(2, "WATCH", "Low"),
        _trade(3, "SELL", "High"),
        _trade(4, "BUY", "Medium"),
        _trade(5, "ACCUMULATE", "High"),
        _trade(6, "ACCUMULATE", "High"),
    ]

    assert [t.id for t in rank_trades(trades)] == [5, 6, 3, 1, 4, 2]


def test_wet_spring_buys_wheat(make_stats, us_region) -> None:
    stats = make_stats(is_wet_period=True, precip_ratio=2.0, season="spring")

    trades = generate_trade_recommendations(stats, us_region)

    wheat = trades[0]
    assert (wheat.sector, wheat.ticker, wheat.action) == ("Grains - Wheat", "WEAT", "BUY")
    assert wheat.confidence == "High"
    assert wheat.expected_return == "+14% to +19%"
    assert "200% of normal" in wheat.rationale
    assert [t.sector for t in trades] == ["Grains - Wheat", "North America Market"]


def test_moderately_wet_spring_is_medium_confidence(make_stats, us_region) -> None:
    stats = make_stats(is_wet_period=True, precip_ratio=1.5, season="spring")

    wheat = generate_trade_recommendations(stats, us_region)[0]

    assert wheat.confidence == "Medium"
    assert wheat.expected_return == "+9% to +13%"


def test_high_volatility_adds_defensive_utilities(make_stats, us_region) -> None:
    stats = make_stats(is_high_volatility=True, temp_volatility=9.5)

    trades = generate_trade_recommendations(stats, us_region)

    defensive = trades[0]
    assert defensive.sector == "Utilities (Defensive)"
    assert (defensive.ticker, defensive.action, defensive.confidence) == ("XLU", "ACCUMULATE", "Medium")
    assert defensive.expected_return == "+3% to +8%"
    assert "σ=9.5°F" in defensive.rationale
    assert [t.action for t in trades] == ["ACCUMULATE", "HOLD"]


@pytest.mark.parametrize(
    ("significance", "confidence", "expected_return"),
    [(6.0, "High", "+30% to +40%"), (1.5, "Medium", "+15% to +24%")],
)
def test_extreme_cold_buys_natural_gas(make_stats, us_region, significance, confidence, expected_return) -> None:
    stats = make_stats(forecast_has_extreme_cold=True, season="winter", current_temp=20,
                       temp_anomaly=-12, temp_anomaly_significance=significance)

    trades = generate_trade_recommendations(stats, us_region)

    gas = next(t for t in trades if t.sector == "Natural Gas")
    assert gas.ticker == "UNG"
    assert gas.confidence == confidence
    assert gas.risk_level == "High"
    assert gas.expected_return == expected_return
    assert "12.0°F below historical average" in gas.catalyst


@pytest.mark.parametrize(
    ("anomaly", "direction", "load"),
    [(4.0, "above", "cooling"), (-4.5, "below", "heating")],
)
def test_moderate_anomaly_accumulates_utilities(make_stats, us_region, anomaly, direction, load) -> None:
    stats = make_stats(temp_anomaly=anomaly, temp_anomaly_significance=0.8)

    trades = generate_trade_recommendations(stats, us_region)

    utilities = trades[0]
    assert (utilities.sector, utilities.ticker) == ("Utilities", "XLU")
    assert (utilities.action, utilities.confidence) == ("ACCUMULATE", "Medium")
    assert utilities.expected_return == "+6% to +10%"
    assert f"{abs(anomaly):.1f}°F {direction} normal increases {load} load" in utilities.rationale
