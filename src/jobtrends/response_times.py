"""Response-time analytics for job applications.

This module derives days-to-first-response per application from its status
history and aggregates them into:
- overall average, median, fastest and slowest response times
- per-company averages for the ten companies with the most responses
- a fixed five-bucket distribution histogram
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .models import (
    STATUS_APPLIED,
    STATUS_SAVED,
    STATUS_WITHDRAWN,
    ApplicationRecord,
    CompanyResponseTime,
    DistributionBucket,
    ResponseTimeAnalytics,
    ResponseTimeSummary,
)
from .stats import calculate_mean, calculate_median, calculate_percentage, round_half_up

logger = logging.getLogger(__name__)

UNKNOWN_COMPANY = "Unknown"
TOP_COMPANY_LIMIT = 10

_SECONDS_PER_DAY = 86400

_NON_RESPONSE_STATUSES = frozenset({STATUS_SAVED, STATUS_APPLIED, STATUS_WITHDRAWN})

DISTRIBUTION_BUCKETS: Tuple[Tuple[str, int, Optional[int]], ...] = (
    ("0-7 days", 0, 7),
    ("8-14 days", 8, 14),
    ("15-30 days", 15, 30),
    ("31-60 days", 31, 60),
    ("60+ days", 61, None),
)


def has_response(record: ApplicationRecord) -> bool:
    """Return whether an applied-for application has moved past ``applied``."""
    return record.applied_at is not None and record.status not in _NON_RESPONSE_STATUSES


def response_time_days(record: ApplicationRecord) -> Optional[int]:
    """Compute whole days from application to first response.

    Business logic:
    - Only applications with ``applied_at`` set and a status other than
      ``saved``, ``applied`` or ``withdrawn`` are eligible.
    - The first response is the history entry immediately following the first
      ``applied`` entry.
    - Elapsed time is floored to whole days.

    Returns ``None`` when the application is not eligible, the history has no
    ``applied`` entry or nothing after it, or the duration is negative.
    """
    if not has_response(record):
        return None

    history = record.status_history
    applied_index = next(
        (index for index, change in enumerate(history) if change.status == STATUS_APPLIED),
        None,
    )

    if applied_index is None or applied_index == len(history) - 1:
        logger.debug(
            "Skipping response time due to missing response in status history",
            extra={"application_id": record.id},
        )
        return None

    first_response = history[applied_index + 1]

    try:
        elapsed_seconds = (first_response.timestamp - record.applied_at).total_seconds()
    except TypeError:
        logger.debug(
            "Skipping response time due to incompatible datetime types",
            extra={"application_id": record.id},
        )
        return None

    days = math.floor(elapsed_seconds / _SECONDS_PER_DAY)
    if days < 0:
        logger.debug(
            "Skipping response time due to negative duration",
            extra={"application_id": record.id, "days": days},
        )
        return None

    return days


def _build_distribution(response_times: List[int]) -> List[DistributionBucket]:
    distribution: List[DistributionBucket] = []
    total = len(response_times)

    for label, lower, upper in DISTRIBUTION_BUCKETS:
        count = sum(
            1
            for days in response_times
            if days >= lower and (upper is None or days <= upper)
        )
        distribution.append(
            DistributionBucket(
                range=label,
                count=count,
                percentage=calculate_percentage(count, total),
            )
        )

    return distribution


def compute_response_times(records: Sequence[ApplicationRecord]) -> ResponseTimeAnalytics:
    """Aggregate response-time statistics across applications.

    Applications without a usable response time are skipped individually so a
    single malformed history never affects the rest of the statistics.
    """
    response_times: List[int] = []
    by_company: Dict[str, List[int]] = {}

    for record in records:
        days = response_time_days(record)
        if days is None:
            continue

        response_times.append(days)
        company = record.company_name or UNKNOWN_COMPANY
        by_company.setdefault(company, []).append(days)

    mean = calculate_mean(response_times)
    overall = ResponseTimeSummary(
        average=round_half_up(mean) if mean is not None else None,
        median=calculate_median(response_times),
        fastest=min(response_times) if response_times else None,
        slowest=max(response_times) if response_times else None,
    )

    company_stats = sorted(
        (
            CompanyResponseTime(
                company=company,
                average=round_half_up(sum(times) / len(times)),
                count=len(times),
            )
            for company, times in by_company.items()
        ),
        key=lambda entry: entry.count,
        reverse=True,
    )[:TOP_COMPANY_LIMIT]

    logger.info(
        "Collected response time samples",
        extra={
            "records_total": len(records),
            "response_samples": len(response_times),
            "companies": len(by_company),
        },
    )

    return ResponseTimeAnalytics(
        overall=overall,
        by_company=company_stats,
        distribution=_build_distribution(response_times),
    )
