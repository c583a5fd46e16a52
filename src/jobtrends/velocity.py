"""Weekly application velocity and trend classification."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from .benchmarks import APPLICATION_BENCHMARKS
from .models import ApplicationRecord, TimeSeriesDataPoint, VelocityMetrics, VelocityStatus
from .timebuckets import (
    GRANULARITY_WEEK,
    align_timezone,
    date_range_for_selector,
    end_of_day,
    format_bucket_label,
    generate_buckets,
    resolve_now,
)

logger = logging.getLogger(__name__)

TREND_UP = "up"
TREND_DOWN = "down"
TREND_STABLE = "stable"

_UP_THRESHOLD = 1.1
_DOWN_THRESHOLD = 0.9


def classify_trend(current_week: int, previous_week: int) -> str:
    """Classify week-over-week movement.

    ``up`` when the current week exceeds the previous one by more than 10%,
    ``down`` when it falls more than 10% short, ``stable`` otherwise. Values
    exactly on a threshold are ``stable``.
    """
    if current_week > previous_week * _UP_THRESHOLD:
        return TREND_UP
    if current_week < previous_week * _DOWN_THRESHOLD:
        return TREND_DOWN
    return TREND_STABLE


def compute_velocity(
    records: Sequence[ApplicationRecord],
    time_range: str,
    now: Optional[datetime] = None,
) -> VelocityMetrics:
    """Compute weekly application velocity for a range selector.

    Velocity is always expressed per week, so weekly buckets are generated over
    the resolved window whatever its natural granularity. A week spans
    ``[week_start, week_start + 6 days]`` through the end of its last day.
    """
    current = resolve_now(now)
    date_range = date_range_for_selector(time_range, records, current)
    week_starts = generate_buckets(date_range.start, date_range.end, GRANULARITY_WEEK)

    created = [(record, align_timezone(record.created_at, current.tzinfo)) for record in records]

    weekly_data: List[TimeSeriesDataPoint] = []
    for week_start in week_starts:
        week_end = end_of_day(week_start + timedelta(days=6))
        in_week = [record for record, created_at in created if week_start <= created_at <= week_end]
        weekly_data.append(
            TimeSeriesDataPoint(
                date=week_start,
                count=len(in_week),
                applications=in_week,
                label=format_bucket_label(week_start, GRANULARITY_WEEK),
            )
        )

    total_weeks = len(weekly_data) or 1
    total_applications = sum(week.count for week in weekly_data)
    applications_per_week = total_applications / total_weeks

    current_week = weekly_data[-1].count if weekly_data else 0
    previous_week = weekly_data[-2].count if len(weekly_data) > 1 else 0
    trend = classify_trend(current_week, previous_week)

    logger.info(
        "Computed application velocity",
        extra={
            "time_range": time_range,
            "weeks": len(weekly_data),
            "applications_per_week": applications_per_week,
            "current_week": current_week,
            "previous_week": previous_week,
            "trend": trend,
        },
    )

    return VelocityMetrics(
        applications_per_week=applications_per_week,
        current_week=current_week,
        previous_week=previous_week,
        trend=trend,
        weekly_data=weekly_data,
    )


def velocity_status(applications_per_week: float) -> VelocityStatus:
    """Compare a weekly rate against the optimal application range."""
    optimal = APPLICATION_BENCHMARKS.optimal_weekly_applications

    if applications_per_week < optimal.min:
        return VelocityStatus(
            status="low",
            message="Below optimal velocity. Consider increasing application rate.",
        )
    if applications_per_week <= optimal.max:
        return VelocityStatus(
            status="optimal",
            message="Great velocity! You're in the optimal range.",
        )
    return VelocityStatus(
        status="high",
        message="High velocity. Ensure quality isn't sacrificed for quantity.",
    )
