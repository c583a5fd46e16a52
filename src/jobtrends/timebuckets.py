"""Calendar bucketing for trend time series.

Buckets are range-driven: a resolved date range always yields its full bucket
sequence, whether or not any record falls into it. Weeks start on Sunday.

All datetimes are compared in the timezone of the reference ``now``. Naive
record timestamps are interpreted in that timezone; aware ones are converted.
"""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Iterable, List, Optional

from dateutil.relativedelta import relativedelta
from dateutil.tz import tzlocal

from .errors import ConfigurationError
from .models import ApplicationRecord, DateRange

GRANULARITY_DAY = "day"
GRANULARITY_WEEK = "week"
GRANULARITY_MONTH = "month"

RANGE_7D = "7d"
RANGE_30D = "30d"
RANGE_90D = "90d"
RANGE_ALL = "all"

TIME_RANGES = (RANGE_7D, RANGE_30D, RANGE_90D, RANGE_ALL)

_DEFAULT_ALL_RANGE_MONTHS = 6

_MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return ``now`` as an aware datetime, defaulting to the current local time.

    Naive values and the default carry the local zone (``tzlocal``), not a
    fixed UTC offset, so the offset follows DST for every converted timestamp.
    """
    if now is None:
        return datetime.now(tz=tzlocal())
    if now.tzinfo is None:
        return now.replace(tzinfo=tzlocal())
    return now


def align_timezone(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """Express ``value`` in ``tz``, treating naive values as already local to it."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(value: datetime) -> datetime:
    return value.replace(hour=23, minute=59, second=59, microsecond=999999)


def start_of_week(value: datetime) -> datetime:
    """Return the start of the Sunday-based week containing ``value``."""
    days_since_sunday = (value.weekday() + 1) % 7
    return start_of_day(value - timedelta(days=days_since_sunday))


def start_of_month(value: datetime) -> datetime:
    return start_of_day(value.replace(day=1))


def date_range_for_selector(
    time_range: str,
    records: Iterable[ApplicationRecord] = (),
    now: Optional[datetime] = None,
) -> DateRange:
    """Resolve a range selector into a concrete window and granularity.

    Args:
        time_range: One of ``7d``, ``30d``, ``90d`` or ``all``.
        records: Applications considered when widening the ``all`` range.
        now: Reference time; defaults to the current local time.

    Returns:
        ``DateRange`` ending at the end of the current day.

    Raises:
        ConfigurationError: If ``time_range`` is not a known selector.
    """
    current = resolve_now(now)
    end = end_of_day(current)

    if time_range == RANGE_7D:
        return DateRange(start_of_day(end - timedelta(days=6)), end, GRANULARITY_DAY)
    if time_range == RANGE_30D:
        return DateRange(start_of_day(end - timedelta(days=29)), end, GRANULARITY_DAY)
    if time_range == RANGE_90D:
        return DateRange(start_of_day(end - timedelta(days=89)), end, GRANULARITY_WEEK)
    if time_range == RANGE_ALL:
        start = start_of_day(end - relativedelta(months=_DEFAULT_ALL_RANGE_MONTHS))
        created = [align_timezone(record.created_at, end.tzinfo) for record in records]
        if created:
            earliest = min(created)
            if earliest < start:
                start = start_of_day(earliest)
        return DateRange(start, end, GRANULARITY_MONTH)

    raise ConfigurationError(
        f"Invalid time range '{time_range}': expected one of {', '.join(TIME_RANGES)}."
    )


def bucket_start_for(value: datetime, granularity: str) -> datetime:
    """Map a timestamp to the start of its containing bucket."""
    if granularity == GRANULARITY_DAY:
        return start_of_day(value)
    if granularity == GRANULARITY_WEEK:
        return start_of_week(value)
    if granularity == GRANULARITY_MONTH:
        return start_of_month(value)
    raise ValueError(f"Unknown granularity '{granularity}'.")


def generate_buckets(start: datetime, end: datetime, granularity: str) -> List[datetime]:
    """Generate ordered bucket start dates covering ``[start, end]``.

    The first bucket is the one containing ``start``, so week and month
    buckets may begin before ``start`` itself.
    """
    buckets: List[datetime] = []
    current = bucket_start_for(start, granularity)

    while current <= end:
        buckets.append(current)
        if granularity == GRANULARITY_DAY:
            current = current + timedelta(days=1)
        elif granularity == GRANULARITY_WEEK:
            current = current + timedelta(days=7)
        else:
            current = current + relativedelta(months=1)

    return buckets


def format_bucket_label(value: datetime, granularity: str) -> str:
    """Format a bucket start as ``Jan 5`` (day, week) or ``Jan 2026`` (month)."""
    month = _MONTH_ABBREVIATIONS[value.month - 1]
    if granularity == GRANULARITY_MONTH:
        return f"{month} {value.year}"
    return f"{month} {value.day}"
