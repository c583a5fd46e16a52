"""Tests for response-time extraction and aggregation."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jobtrends.models import ApplicationRecord, StatusChange
from jobtrends.response_times import compute_response_times, response_time_days

APPLIED_AT = datetime(2026, 1, 1, 9, 0, 0, tzinfo=timezone.utc)


def _make_application(
    app_id: str = "app-1",
    status: str = "screening",
    response_after: timedelta | None = timedelta(days=5),
    company: str = "Acme",
    applied_at: datetime | None = APPLIED_AT,
) -> ApplicationRecord:
    history = [StatusChange(status="saved", timestamp=APPLIED_AT - timedelta(days=2))]
    if applied_at is not None:
        history.append(StatusChange(status="applied", timestamp=applied_at))
    if response_after is not None:
        history.append(StatusChange(status=status, timestamp=APPLIED_AT + response_after))

    return ApplicationRecord(
        id=app_id,
        company_name=company,
        role_name="Engineer",
        status=status,
        created_at=APPLIED_AT - timedelta(days=2),
        last_activity_at=APPLIED_AT,
        applied_at=applied_at,
        status_history=history,
    )


def test_response_time_days_applied_to_screening_after_five_days():
    """Verify a response five days after applying contributes five days."""
    assert response_time_days(_make_application()) == 5


def test_response_time_days_floors_partial_days():
    """Verify elapsed time is floored to whole days."""
    record = _make_application(response_after=timedelta(days=5, hours=23))

    assert response_time_days(record) == 5


def test_response_time_days_ineligible_statuses_return_none():
    """Verify saved, applied and withdrawn applications have no response time."""
    for status in ("saved", "applied", "withdrawn"):
        assert response_time_days(_make_application(status=status)) is None


def test_response_time_days_missing_applied_at_returns_none():
    """Verify applications without an applied timestamp are not eligible."""
    record = _make_application()
    record.applied_at = None

    assert response_time_days(record) is None


def test_response_time_days_applied_as_last_history_entry_returns_none():
    """Verify a history ending at applied has no first response."""
    record = _make_application(status="rejected", response_after=None)

    assert response_time_days(record) is None


def test_response_time_days_no_applied_entry_returns_none():
    """Verify a history without an applied entry is skipped."""
    record = _make_application()
    record.status_history = [
        StatusChange(status="saved", timestamp=APPLIED_AT),
        StatusChange(status="screening", timestamp=APPLIED_AT + timedelta(days=3)),
    ]

    assert response_time_days(record) is None


def test_response_time_days_negative_duration_returns_none():
    """Verify out-of-order history producing a negative duration is skipped."""
    record = _make_application(response_after=timedelta(days=-2))

    assert response_time_days(record) is None


def test_compute_response_times_applied_without_response_contributes_nothing():
    """Verify an application still at applied adds nothing to the statistics."""
    record = _make_application(status="applied", response_after=None)

    analytics = compute_response_times([record])

    assert analytics.overall.average is None
    assert analytics.by_company == []
    assert sum(bucket.count for bucket in analytics.distribution) == 0


def test_compute_response_times_single_response_lands_in_first_bucket():
    """Verify a five-day response is counted in the 0-7 days bucket."""
    analytics = compute_response_times([_make_application()])

    first_bucket = analytics.distribution[0]
    assert first_bucket.range == "0-7 days"
    assert first_bucket.count == 1
    assert first_bucket.percentage == pytest.approx(100.0)
    assert analytics.overall.average == 5


def test_compute_response_times_overall_statistics_and_distribution():
    """Verify average, median, extremes and bucket percentages."""
    records = [
        _make_application("a", response_after=timedelta(days=2)),
        _make_application("b", response_after=timedelta(days=5)),
        _make_application("c", response_after=timedelta(days=10)),
        _make_application("d", response_after=timedelta(days=40)),
    ]

    analytics = compute_response_times(records)

    assert analytics.overall.average == 14
    assert analytics.overall.median == 8
    assert analytics.overall.fastest == 2
    assert analytics.overall.slowest == 40
    assert [(bucket.range, bucket.count) for bucket in analytics.distribution] == [
        ("0-7 days", 2),
        ("8-14 days", 1),
        ("15-30 days", 0),
        ("31-60 days", 1),
        ("60+ days", 0),
    ]
    assert [bucket.percentage for bucket in analytics.distribution] == pytest.approx(
        [50.0, 25.0, 0.0, 25.0, 0.0]
    )


def test_compute_response_times_distribution_bucket_edges():
    """Verify 60 days falls in 31-60 and 61 days in the open-ended bucket."""
    records = [
        _make_application("a", response_after=timedelta(days=60)),
        _make_application("b", response_after=timedelta(days=61)),
    ]

    analytics = compute_response_times(records)

    counts = {bucket.range: bucket.count for bucket in analytics.distribution}
    assert counts["31-60 days"] == 1
    assert counts["60+ days"] == 1


def test_compute_response_times_by_company_sorted_by_volume_and_limited():
    """Verify per-company averages are ordered by sample count and capped at ten."""
    records = [
        _make_application("g1", company="Globex", response_after=timedelta(days=3)),
        _make_application("g2", company="Globex", response_after=timedelta(days=4)),
        _make_application("u1", company="", response_after=timedelta(days=9)),
    ]
    records.extend(
        _make_application(f"c{index}", company=f"Company {index}") for index in range(12)
    )

    analytics = compute_response_times(records)

    assert len(analytics.by_company) == 10
    assert analytics.by_company[0].company == "Globex"
    assert analytics.by_company[0].count == 2
    assert analytics.by_company[0].average == 4
    assert analytics.by_company[1].company == "Unknown"
    assert analytics.by_company[1].average == 9


def test_compute_response_times_empty_input_returns_nulls_and_zero_percentages():
    """Verify empty input yields None statistics and zero percentages."""
    analytics = compute_response_times([])

    assert analytics.overall.average is None
    assert analytics.overall.median is None
    assert analytics.overall.fastest is None
    assert analytics.overall.slowest is None
    assert all(bucket.count == 0 and bucket.percentage == 0 for bucket in analytics.distribution)
