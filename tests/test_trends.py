"""Tests for combined trend computation and predictive insights."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jobtrends.models import ApplicationRecord, LaborMarketResult, LaborMarketSnapshot, StatusChange
from jobtrends.trends import compute_predictive_insights, compute_success_factors, compute_trends

NOW = datetime(2026, 1, 14, 12, 0, 0, tzinfo=timezone.utc)


def _make_application(
    app_id: str,
    created_at: datetime,
    status: str = "applied",
    is_referral: bool = False,
) -> ApplicationRecord:
    return ApplicationRecord(
        id=app_id,
        company_name="Acme",
        role_name="Engineer",
        status=status,
        created_at=created_at,
        last_activity_at=created_at,
        applied_at=created_at,
        status_history=[
            StatusChange(status="applied", timestamp=created_at),
            StatusChange(status=status, timestamp=created_at + timedelta(days=3)),
        ],
        is_referral=is_referral,
    )


def _four_week_search() -> list:
    """20 applications, five per week over four weeks, two reaching interviews."""
    records = []
    for index in range(20):
        created_at = NOW - timedelta(days=28) + timedelta(days=index * 7 // 5, hours=1)
        status = "interviewing" if index in (3, 11) else "applied"
        records.append(_make_application(f"app-{index}", created_at, status=status))
    return records


def test_compute_success_factors_derives_rates_and_weeks_active():
    """Verify interview rate, response rate, referrals and weeks active."""
    records = _four_week_search()
    records[0].status = "rejected"

    factors = compute_success_factors(records, applications_per_week=5, now=NOW)

    assert factors.application_volume == 20
    assert factors.application_rate == 5
    assert factors.interview_rate == pytest.approx(0.10)
    assert factors.response_rate == pytest.approx(0.15)
    assert factors.has_referrals is False
    assert factors.weeks_active == 3


def test_compute_success_factors_empty_input_is_neutral():
    """Verify empty input yields zero rates and at least one active week."""
    factors = compute_success_factors([], applications_per_week=0, now=NOW)

    assert factors.interview_rate == 0.0
    assert factors.response_rate == 0.0
    assert factors.weeks_active == 1


def test_compute_success_factors_detects_referrals():
    """Verify any referral-sourced application sets has_referrals."""
    records = [_make_application("r", NOW - timedelta(days=3), is_referral=True)]

    assert compute_success_factors(records, 1, now=NOW).has_referrals is True


def test_compute_predictive_insights_static_model():
    """Verify the static path matches the reference 0.46 scenario."""
    insights = compute_predictive_insights(_four_week_search(), 5, now=NOW)

    assert insights.success_probability == pytest.approx(0.46)
    assert insights.market_condition is None
    assert insights.market_adjustment == 0.0
    assert insights.weeks_to_offer == 4
    assert insights.seasonal.score == 8
    assert insights.progress_to_target == pytest.approx(20.0)


def test_compute_predictive_insights_live_model_uses_source():
    """Verify the live path applies the market offset from the supplied source."""
    snapshot = LaborMarketSnapshot(
        national_unemployment_rate=6.4,
        job_openings=7000,
        labor_force_participation_rate=62.0,
        unemployment_rate_change=0.4,
        monthly_job_change=-20000,
    )
    source = Mock(return_value=LaborMarketResult(success=True, data=snapshot))

    insights = compute_predictive_insights(_four_week_search(), 5, now=NOW, live=True, source=source)

    source.assert_called_once_with()
    assert insights.market_condition == "cold"
    assert insights.success_probability == pytest.approx(0.26)


def test_compute_trends_combines_all_views():
    """Verify the combined computation reports every view and the totals."""
    records = _four_week_search()

    trends = compute_trends(records, "30d", now=NOW)

    assert trends.total_applications == 20
    assert trends.has_data is True
    assert sum(point.count for point in trends.time_series) == 20
    assert trends.velocity.weekly_data
    assert trends.response_times.overall.average == 3


def test_compute_trends_empty_input_has_no_data():
    """Verify empty input produces empty views rather than errors."""
    trends = compute_trends([], "7d", now=NOW)

    assert trends.has_data is False
    assert trends.total_applications == 0
    assert len(trends.time_series) == 7
    assert trends.response_times.overall.median is None
