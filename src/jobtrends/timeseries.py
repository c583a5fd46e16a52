"""Time-series aggregation and distribution breakdowns for applications."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from .models import (
    LOCATION_TYPES,
    ApplicationRecord,
    DistributionData,
    ShareEntry,
    TimeSeriesDataPoint,
)
from .stats import calculate_percentage
from .timebuckets import (
    align_timezone,
    bucket_start_for,
    date_range_for_selector,
    format_bucket_label,
    generate_buckets,
    resolve_now,
)

logger = logging.getLogger(__name__)

UNKNOWN_COMPANY = "Unknown"
UNSPECIFIED_LOCATION = "unspecified"
TOP_COMPANY_LIMIT = 10


def compute_time_series(
    records: Sequence[ApplicationRecord],
    time_range: str,
    now: Optional[datetime] = None,
) -> List[TimeSeriesDataPoint]:
    """Count applications per bucket for a range selector.

    Business logic:
    - Resolve the window and granularity for ``time_range``.
    - Generate every bucket in the window, including empty ones.
    - Assign each application created inside ``[start, end]`` to the bucket
      containing its ``created_at``. Applications outside the window are
      left out.

    Returns one data point per bucket, in chronological order.
    """
    current = resolve_now(now)
    date_range = date_range_for_selector(time_range, records, current)
    buckets = generate_buckets(date_range.start, date_range.end, date_range.granularity)

    members: Dict[datetime, List[ApplicationRecord]] = {bucket: [] for bucket in buckets}
    out_of_range = 0

    for record in records:
        created_at = align_timezone(record.created_at, current.tzinfo)
        if not date_range.start <= created_at <= date_range.end:
            out_of_range += 1
            continue

        bucket = bucket_start_for(created_at, date_range.granularity)
        if bucket in members:
            members[bucket].append(record)

    logger.info(
        "Computed application time series",
        extra={
            "time_range": time_range,
            "granularity": date_range.granularity,
            "buckets": len(buckets),
            "records_total": len(records),
            "records_out_of_range": out_of_range,
        },
    )

    return [
        TimeSeriesDataPoint(
            date=bucket,
            count=len(members[bucket]),
            applications=members[bucket],
            label=format_bucket_label(bucket, date_range.granularity),
        )
        for bucket in buckets
    ]


def compute_distribution(records: Sequence[ApplicationRecord]) -> DistributionData:
    """Break applications down by company, location type and status.

    Percentages are relative to the total number of applications. Companies
    are limited to the ten with the most applications; location types are
    always reported in the fixed order remote, hybrid, onsite, unspecified;
    statuses appear in the order they are first seen.
    """
    total = len(records) or 1

    company_counts: Dict[str, int] = {}
    location_counts: Dict[str, int] = {}
    status_counts: Dict[str, int] = {}

    for record in records:
        company = record.company_name or UNKNOWN_COMPANY
        company_counts[company] = company_counts.get(company, 0) + 1

        location = record.location_type or UNSPECIFIED_LOCATION
        location_counts[location] = location_counts.get(location, 0) + 1

        status_counts[record.status] = status_counts.get(record.status, 0) + 1

    by_company = sorted(
        (
            ShareEntry(key=company, count=count, percentage=calculate_percentage(count, total))
            for company, count in company_counts.items()
        ),
        key=lambda entry: entry.count,
        reverse=True,
    )[:TOP_COMPANY_LIMIT]

    by_location = [
        ShareEntry(
            key=location,
            count=location_counts.get(location, 0),
            percentage=calculate_percentage(location_counts.get(location, 0), total),
        )
        for location in LOCATION_TYPES + (UNSPECIFIED_LOCATION,)
    ]

    by_status = [
        ShareEntry(key=status, count=count, percentage=calculate_percentage(count, total))
        for status, count in status_counts.items()
    ]

    return DistributionData(by_company=by_company, by_location=by_location, by_status=by_status)
