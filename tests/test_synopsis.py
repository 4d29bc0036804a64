"""Tests for the horizon outlooks."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from weather_trader.analysis.synopsis import (
    describe_climate_zone, describe_precipitation, describe_temperature,
    generate_all_synopses, generate_synopsis, horizon_confidence
)

NOW = datetime(2025, 10, 1, tzinfo=timezone.utc)


def test_all_horizons_are_produced(make_stats, us_region) -> None:
    synopses = generate_all_synopses(make_stats(), us_region, NOW)

    assert list(synopses) == ["days30", "days60", "days90", "days180", "days360"]
    assert synopses["days90"].period == "90-Day Outlook"
    assert [s.confidence for s in synopses.values()] == [
        "Moderate-High", "Moderate", "Low-Moderate", "Seasonal Average", "Seasonal Average",
    ]


@pytest.mark.parametrize(
    ("days", "confidence"),
    [(14, "High"), (30, "Moderate-High"), (45, "Moderate"), (90, "Low-Moderate"), (91, "Seasonal Average")],
)
def test_horizon_confidence(days, confidence) -> None:
    assert horizon_confidence(days) == confidence


def test_temperature_description_uses_significance_first(make_stats) -> None:
    assert describe_temperature(make_stats(temp_anomaly=12, temp_anomaly_significance=2.4)) == (
        "significantly warmer than normal"
    )
    assert describe_temperature(make_stats(temp_anomaly=-6, temp_anomaly_significance=1.2)) == "cooler than normal"
    assert describe_temperature(make_stats(temp_anomaly=1.5, temp_anomaly_significance=0.3)) == (
        "slightly above normal temperatures"
    )
    assert describe_temperature(make_stats(temp_anomaly=0.5)) == "near normal temperatures"


def test_precipitation_and_climate_descriptions() -> None:
    assert describe_precipitation(2.5) == "exceptionally wet conditions expected"
    assert describe_precipitation(0.2) == "very dry conditions persisting"
    assert describe_precipitation(1.0) == "near normal precipitation"
    assert describe_climate_zone(-60).startswith("High latitude")
    assert describe_climate_zone(10).startswith("Tropical")
    assert describe_climate_zone(30).startswith("Subtropical")
    assert describe_climate_zone(45).startswith("Mid-latitude")


def test_short_horizon_details_and_data_points(make_stats, us_region) -> None:
    stats = make_stats(current_temp=75, avg_hist_temp=60, temp_anomaly=15, temp_anomaly_significance=3,
                       precip_ratio=0.45, next_7_days_precip=0)

    synopsis = generate_synopsis(30, stats, us_region, NOW)

    assert synopsis.summary == "Significantly warmer than normal with below average precipitation expected."
    assert synopsis.temperature_outlook == "Above Normal"
    assert "Minimal precipitation expected in the near term." in synopsis.details
    assert synopsis.data_points.anomaly == "+15.0"
    assert synopsis.data_points.current_temp == "75.0"
    assert synopsis.data_points.precip_ratio == "45% of normal"


def test_sixty_day_details_mention_season_transition(make_stats, us_region) -> None:
    # 45 days after October 1 is still fall
    synopsis = generate_synopsis(60, make_stats(season="fall"), us_region, NOW)
    assert "Fall conditions to continue." in synopsis.details

    late_november = datetime(2025, 11, 20, tzinfo=timezone.utc)
    synopsis = generate_synopsis(60, make_stats(season="fall"), us_region, late_november)
    assert "Seasonal transition toward winter expected." in synopsis.details


def test_long_horizon_details(make_stats, us_region) -> None:
    synopses = generate_all_synopses(make_stats(season="fall"), us_region, NOW)

    assert "fall → winter" in synopses["days180"].details
    assert "United States" in synopses["days360"].details


def test_synopsis_serializes_with_camel_case_keys(make_stats, us_region) -> None:
    payload = generate_synopsis(30, make_stats(), us_region, NOW).model_dump(by_alias=True)

    assert {"temperatureOutlook", "precipitationOutlook", "dataPoints"} <= set(payload)
    assert "historicalAvg" in payload["dataPoints"]
