"""Tests for the weather statistics snapshot."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from weather_trader.analysis.statistics import (
    classify_precip_outlook, compute_weather_statistics, get_season, get_season_sequence
)

DECEMBER = datetime(2025, 12, 15, tzinfo=timezone.utc)
JULY = datetime(2025, 7, 1, tzinfo=timezone.utc)


def _to_celsius(*fahrenheit: float) -> list[float]:
    return [(f - 32) * 5 / 9 for f in fahrenheit]


def test_anomaly_and_significance_from_historical_series(make_bundle) -> None:
    bundle = make_bundle(
        current_temp=75,
        hist_max_c=_to_celsius(60, 70),
        hist_min_c=_to_celsius(50, 60),
    )

    stats = compute_weather_statistics(bundle, JULY)

    assert stats.avg_hist_temp == pytest.approx(60)
    assert stats.temp_anomaly == pytest.approx(15)
    assert stats.temp_std_dev == pytest.approx(5)
    assert stats.temp_anomaly_significance == pytest.approx(3)


def test_precip_ratio_is_one_without_historical_precipitation(make_bundle) -> None:
    bundle = make_bundle(forecast_precip=[12.0, 8.0, 30.0], hist_precip=[0, 0, 0])

    stats = compute_weather_statistics(bundle, JULY)

    assert stats.precip_ratio == 1
    assert stats.precip_outlook == "Near Normal"
    assert not stats.is_wet_period
    assert not stats.is_dry_period


def test_precip_ratio_compares_next_week_to_weekly_mean(make_bundle) -> None:
    bundle = make_bundle(
        forecast_precip=[1.0] * 7 + [50.0] * 9,
        hist_precip=[2.0] * 30,
    )

    stats = compute_weather_statistics(bundle, JULY)

    assert stats.next_7_days_precip == pytest.approx(7)
    assert stats.avg_weekly_precip == pytest.approx(14)
    assert stats.precip_ratio == pytest.approx(0.5)
    assert stats.is_dry_period
    assert stats.precip_outlook == "Below Normal"


def test_empty_bundle_falls_back_to_defaults(make_bundle) -> None:
    bundle = make_bundle(latitude=None)

    stats = compute_weather_statistics(bundle, JULY)

    assert stats.current_temp == 68
    assert stats.avg_humidity == 50
    assert stats.avg_wind_speed == 10
    assert stats.latitude == 45
    assert stats.is_northern_hemisphere
    assert stats.precip_ratio == 1
    assert stats.forecast_days == 0
    assert stats.temp_anomaly_significance == 0
    assert not stats.forecast_has_extreme_heat


def test_current_temp_falls_back_to_first_forecast_max(make_bundle) -> None:
    bundle = make_bundle(forecast_max=[None, 81.0, 83.0])

    stats = compute_weather_statistics(bundle, JULY)

    assert stats.current_temp == 81.0
    assert stats.forecast_days == 2


def test_current_conditions_are_rounded(make_bundle) -> None:
    bundle = make_bundle(current_temp=70, humidity=64.6, wind=7.2)

    stats = compute_weather_statistics(bundle, JULY)

    assert stats.avg_humidity == 65
    assert stats.avg_wind_speed == 7


def test_extreme_forecast_flags_use_two_sigma_bands(make_bundle) -> None:
    bundle = make_bundle(
        current_temp=70,
        hist_max_c=_to_celsius(60, 70),
        hist_min_c=_to_celsius(50, 60),
        forecast_max=[74.0, 76.0],
        forecast_min=[46.0, 44.0],
    )

    stats = compute_weather_statistics(bundle, JULY)

    # max band 65 + 2*5, min band 55 - 2*5
    assert stats.forecast_has_extreme_heat
    assert stats.forecast_has_extreme_cold


def test_recent_trend_compares_last_30_to_last_90_days(make_bundle) -> None:
    hist = _to_celsius(*([50.0] * 60 + [80.0] * 30))
    bundle = make_bundle(current_temp=70, hist_max_c=hist, hist_min_c=hist)

    stats = compute_weather_statistics(bundle, JULY)

    assert stats.recent_temp_trend == pytest.approx(80 - 60)


def test_high_volatility_threshold(make_bundle) -> None:
    bundle = make_bundle(
        current_temp=70,
        hist_max_c=_to_celsius(40, 80),
        hist_min_c=_to_celsius(30, 60),
    )

    stats = compute_weather_statistics(bundle, JULY)

    assert stats.temp_volatility == pytest.approx(20)
    assert stats.is_high_volatility


def test_december_season_by_hemisphere(make_bundle) -> None:
    assert get_season(DECEMBER, True) == "winter"
    assert get_season(DECEMBER, False) == "summer"

    southern = compute_weather_statistics(make_bundle(latitude=-33.9), DECEMBER)
    assert southern.season == "summer"
    assert not southern.is_northern_hemisphere


@pytest.mark.parametrize(
    ("days", "expected"),
    [
        (30, ["winter"]),
        (180, ["winter", "spring"]),
        (360, ["winter", "spring", "summer", "fall"]),
        (1000, ["winter", "spring", "summer", "fall"]),
    ],
)
def test_season_sequence_northern(days, expected) -> None:
    assert get_season_sequence("winter", days, True) == expected


def test_season_sequence_southern_wraps() -> None:
    assert get_season_sequence("spring", 180, False) == ["spring", "summer"]


@pytest.mark.parametrize(
    ("ratio", "outlook"),
    [
        (1.6, "Much Above Normal"),
        (1.3, "Above Normal"),
        (1.0, "Near Normal"),
        (0.7, "Below Normal"),
        (0.3, "Much Below Normal"),
    ],
)
def test_classify_precip_outlook(ratio, outlook) -> None:
    assert classify_precip_outlook(ratio) == outlook
