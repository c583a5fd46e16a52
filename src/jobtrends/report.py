"""Text and JSON rendering of computed trend views."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List

from .models import PredictiveInsights, TimeSeriesDataPoint, TrendsData
from .stats import format_days
from .velocity import velocity_status


def _series_to_dict(points: List[TimeSeriesDataPoint]) -> List[Dict[str, Any]]:
    return [
        {
            "date": point.date,
            "label": point.label,
            "count": point.count,
            "applicationIds": [application.id for application in point.applications],
        }
        for point in points
    ]


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_json(trends: TrendsData, insights: PredictiveInsights, time_range: str) -> str:
    """Render trends and insights as a JSON document with ISO8601 timestamps.

    Bucket members are reduced to their application IDs.
    """
    velocity = trends.velocity
    document = {
        "timeRange": time_range,
        "totalApplications": trends.total_applications,
        "hasData": trends.has_data,
        "timeSeries": _series_to_dict(trends.time_series),
        "velocity": {
            "applicationsPerWeek": velocity.applications_per_week,
            "currentWeek": velocity.current_week,
            "previousWeek": velocity.previous_week,
            "trend": velocity.trend,
            "weeklyData": _series_to_dict(velocity.weekly_data),
        },
        "responseTimes": asdict(trends.response_times),
        "distribution": asdict(trends.distribution),
        "insights": asdict(insights),
    }
    return json.dumps(document, default=_json_default, indent=2)


def generate_report(trends: TrendsData, insights: PredictiveInsights, time_range: str) -> str:
    """Generate a human-readable trends report.

    The report covers application volume per bucket, weekly velocity,
    response times and predictive insights.
    """
    velocity = trends.velocity
    status = velocity_status(velocity.applications_per_week)
    overall = trends.response_times.overall

    lines = [
        f"Job Search Trends ({time_range})",
        f"Total applications: {trends.total_applications}",
        "",
        "1) Applications Over Time",
    ]
    lines.extend(f"   {point.label}: {point.count}" for point in trends.time_series)

    lines.extend(
        [
            "",
            "2) Application Velocity",
            f"   Per week: {velocity.applications_per_week:.1f} ({status.status})",
            f"   This week: {velocity.current_week}",
            f"   Last week: {velocity.previous_week}",
            f"   Trend: {velocity.trend}",
            f"   {status.message}",
            "",
            "3) Response Times",
            f"   Average: {format_days(overall.average)}",
            f"   Median: {format_days(overall.median)}",
            f"   Fastest: {format_days(overall.fastest)}",
            f"   Slowest: {format_days(overall.slowest)}",
        ]
    )
    lines.extend(
        f"   {bucket.range}: {bucket.count} ({bucket.percentage:.0f}%)"
        for bucket in trends.response_times.distribution
    )

    weeks_to_offer = (
        f"{insights.weeks_to_offer} weeks" if insights.weeks_to_offer is not None else "n/a"
    )
    lines.extend(
        [
            "",
            "4) Predictive Insights",
            f"   Success probability: {insights.success_probability * 100:.0f}%",
        ]
    )
    if insights.market_condition is not None:
        lines.append(
            f"   Market: {insights.market_condition} ({insights.market_adjustment * 100:+.0f}%)"
        )
    lines.extend(
        [
            f"   Estimated time to offer: {weeks_to_offer}",
            f"   Progress to 100 applications: {insights.progress_to_target:.0f}%",
            f"   Season: {insights.seasonal.score}/10 - {insights.seasonal.message}",
            f"   Suggested: {insights.seasonal.action}",
        ]
    )

    return "\n".join(lines)
