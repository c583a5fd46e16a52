"""Tests for live market benchmarks and the static fallback."""

import logging
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jobtrends.benchmarks import STATIC_MARKET_BENCHMARKS
from jobtrends.market import (
    calculate_live_success_probability,
    determine_market_condition,
    determine_trend,
    get_live_market_benchmarks,
    market_adjusted_conversion_benchmarks,
    market_adjusted_response_times,
)
from jobtrends.models import LaborMarketResult, LaborMarketSnapshot, SuccessProbabilityFactors


def _snapshot(**overrides) -> LaborMarketSnapshot:
    values = dict(
        national_unemployment_rate=4.5,
        job_openings=7200,
        labor_force_participation_rate=62.5,
        unemployment_rate_change=0.1,
        monthly_job_change=150000,
        inflation=2.9,
        quits_rate=2.1,
        period="2025-12",
    )
    values.update(overrides)
    return LaborMarketSnapshot(**values)


def _source(snapshot: LaborMarketSnapshot) -> Mock:
    return Mock(return_value=LaborMarketResult(success=True, data=snapshot))


def _factors() -> SuccessProbabilityFactors:
    return SuccessProbabilityFactors(
        application_volume=20,
        application_rate=5,
        interview_rate=0.10,
        response_rate=0.25,
        has_referrals=False,
        weeks_active=4,
    )


@pytest.mark.parametrize(
    "unemployment, openings, rate, expected",
    [
        (3.5, 9000, 4.5, "hot"),
        (3.5, 9000, 3.0, "warm"),
        (6.5, 9000, 4.5, "cold"),
        (4.5, 4800, 4.5, "cold"),
        (5.5, 7000, 4.5, "cool"),
        (4.5, 5500, 4.5, "cool"),
        (4.5, 7000, 4.5, "warm"),
    ],
)
def test_determine_market_condition_thresholds(unemployment, openings, rate, expected):
    """Verify hot, cold, cool and warm classification thresholds."""
    assert determine_market_condition(unemployment, openings, rate) == expected


def test_determine_trend_uses_point_two_threshold():
    """Verify small or missing changes are stable and larger ones directional."""
    assert determine_trend(None) == "stable"
    assert determine_trend(0.1) == "stable"
    assert determine_trend(-0.19) == "stable"
    assert determine_trend(0.3) == "up"
    assert determine_trend(-150000) == "down"


def test_get_live_market_benchmarks_raising_source_returns_static_object(caplog):
    """Verify a failed lookup returns the static benchmarks object and logs a warning."""
    source = Mock(side_effect=ConnectionError("network down"))

    with caplog.at_level(logging.WARNING, logger="jobtrends.market"):
        benchmarks = get_live_market_benchmarks(source)

    assert benchmarks is STATIC_MARKET_BENCHMARKS
    assert benchmarks.is_live is False
    assert "static fallback" in caplog.text


def test_get_live_market_benchmarks_unsuccessful_result_returns_static_object():
    """Verify an unsuccessful lookup result falls back to static benchmarks."""
    source = Mock(return_value=LaborMarketResult(success=False, error="rate limited"))

    assert get_live_market_benchmarks(source) is STATIC_MARKET_BENCHMARKS


def test_get_live_market_benchmarks_malformed_payload_returns_static_object():
    """Verify a malformed snapshot payload falls back instead of raising."""
    source = Mock(return_value=LaborMarketResult(success=True, data="not-a-snapshot"))

    assert get_live_market_benchmarks(source) is STATIC_MARKET_BENCHMARKS


def test_get_live_market_benchmarks_success_builds_live_benchmarks():
    """Verify live data is mapped into benchmarks with static gaps filled in."""
    source = _source(
        _snapshot(
            national_unemployment_rate=3.6,
            job_openings=8500,
            unemployment_rate_change=-0.3,
            inflation=None,
        )
    )

    benchmarks = get_live_market_benchmarks(source)

    assert benchmarks.is_live is True
    assert benchmarks.market_condition == "hot"
    assert benchmarks.unemployment_rate == pytest.approx(3.6)
    assert benchmarks.unemployment_trend == "down"
    assert benchmarks.openings_trend == "up"
    assert benchmarks.inflation_rate == STATIC_MARKET_BENCHMARKS.inflation_rate
    assert benchmarks.hiring_rate == STATIC_MARKET_BENCHMARKS.hiring_rate
    assert benchmarks.quits_rate == pytest.approx(2.1)
    source.assert_called_once_with()


def test_calculate_live_success_probability_applies_market_offset():
    """Verify the market condition offset is added to the base probability."""
    hot = calculate_live_success_probability(
        _factors(), _source(_snapshot(national_unemployment_rate=3.6, job_openings=8500))
    )
    cold = calculate_live_success_probability(
        _factors(), _source(_snapshot(national_unemployment_rate=6.5))
    )

    assert hot.market_condition == "hot"
    assert hot.market_adjustment == pytest.approx(0.15)
    assert hot.probability == pytest.approx(0.61)
    assert cold.market_condition == "cold"
    assert cold.probability == pytest.approx(0.26)


def test_calculate_live_success_probability_clamps_to_zero():
    """Verify a negative adjustment never pushes the probability below zero."""
    factors = SuccessProbabilityFactors(
        application_volume=0,
        application_rate=0,
        interview_rate=0,
        response_rate=0,
        has_referrals=False,
        weeks_active=1,
    )

    result = calculate_live_success_probability(
        factors, _source(_snapshot(national_unemployment_rate=7.0))
    )

    assert result.probability == 0.0
    assert result.market_adjustment == pytest.approx(-0.2)


def test_calculate_live_success_probability_fallback_has_no_adjustment():
    """Verify a failed lookup leaves the base probability unchanged."""
    result = calculate_live_success_probability(_factors(), Mock(side_effect=RuntimeError("boom")))

    assert result.market_condition == "warm"
    assert result.market_adjustment == 0.0
    assert result.probability == pytest.approx(0.46)


def test_market_adjusted_conversion_benchmarks_scale_both_ranges():
    """Verify conversion ranges scale with the market multiplier."""
    hot = market_adjusted_conversion_benchmarks("hot")
    cold = market_adjusted_conversion_benchmarks("cold")

    assert hot.application_to_interview.min == pytest.approx(0.036)
    assert hot.interview_to_offer.max == pytest.approx(0.432)
    assert cold.application_to_interview.max == pytest.approx(0.056)
    assert cold.offer_acceptance == pytest.approx(0.73)


def test_market_adjusted_response_times_round_day_counts():
    """Verify response-time benchmarks scale and round to whole days."""
    cold = market_adjusted_response_times("cold")
    hot = market_adjusted_response_times("hot")

    assert cold.referral == 44
    assert cold.job_board.min == 59
    assert cold.by_industry["engineering"] == 93
    assert cold.overall_average.max == pytest.approx(71.25)
    assert hot.career_page == 28
