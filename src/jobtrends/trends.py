"""One-call computation of every trend view and predictive insight."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Optional, Sequence

from .benchmarks import (
    APPLICATION_BENCHMARKS,
    estimate_weeks_to_offer,
    seasonal_recommendation,
    success_probability,
)
from .market import LaborMarketSource, calculate_live_success_probability
from .models import (
    STATUS_ACCEPTED,
    STATUS_APPLIED,
    STATUS_INTERVIEWING,
    STATUS_OFFERED,
    STATUS_SAVED,
    ApplicationRecord,
    PredictiveInsights,
    SuccessProbabilityFactors,
    TrendsData,
)
from .response_times import compute_response_times
from .stats import calculate_percentage
from .timebuckets import align_timezone, resolve_now
from .timeseries import compute_distribution, compute_time_series
from .velocity import compute_velocity

logger = logging.getLogger(__name__)

INTERVIEW_STATUSES = frozenset({STATUS_INTERVIEWING, STATUS_OFFERED, STATUS_ACCEPTED})
NO_RESPONSE_STATUSES = frozenset({STATUS_SAVED, STATUS_APPLIED})

_SECONDS_PER_WEEK = 7 * 24 * 60 * 60


def compute_trends(
    records: Sequence[ApplicationRecord],
    time_range: str,
    now: Optional[datetime] = None,
) -> TrendsData:
    """Compute the time series, velocity, response-time and distribution views."""
    current = resolve_now(now)

    return TrendsData(
        time_series=compute_time_series(records, time_range, current),
        velocity=compute_velocity(records, time_range, current),
        response_times=compute_response_times(records),
        distribution=compute_distribution(records),
        total_applications=len(records),
        has_data=len(records) > 0,
    )


def compute_success_factors(
    records: Sequence[ApplicationRecord],
    applications_per_week: float,
    now: Optional[datetime] = None,
) -> SuccessProbabilityFactors:
    """Derive success-probability inputs from the current application list.

    Weeks active counts whole weeks since the earliest application and is
    never less than one.
    """
    current = resolve_now(now)
    total = len(records)

    interviewed = sum(1 for record in records if record.status in INTERVIEW_STATUSES)
    responded = sum(1 for record in records if record.status not in NO_RESPONSE_STATUSES)

    earliest = min(
        (align_timezone(record.created_at, current.tzinfo) for record in records),
        default=current,
    )
    earliest = min(earliest, current)
    weeks_active = max(1, math.floor((current - earliest).total_seconds() / _SECONDS_PER_WEEK))

    return SuccessProbabilityFactors(
        application_volume=total,
        application_rate=applications_per_week,
        interview_rate=interviewed / total if total else 0.0,
        response_rate=responded / total if total else 0.0,
        has_referrals=any(record.is_referral for record in records),
        weeks_active=weeks_active,
    )


def compute_predictive_insights(
    records: Sequence[ApplicationRecord],
    applications_per_week: float,
    now: Optional[datetime] = None,
    live: bool = False,
    source: Optional[LaborMarketSource] = None,
) -> PredictiveInsights:
    """Project success probability, weeks to offer and the seasonal outlook.

    With ``live=True`` the probability is adjusted for the current labor
    market; a failed lookup silently leaves the static model in place.
    """
    current = resolve_now(now)
    factors = compute_success_factors(records, applications_per_week, current)

    market_condition: Optional[str] = None
    market_adjustment = 0.0
    if live:
        live_result = calculate_live_success_probability(factors, source)
        probability = live_result.probability
        market_adjustment = live_result.market_adjustment
        market_condition = live_result.market_condition
    else:
        probability = success_probability(factors)

    target = APPLICATION_BENCHMARKS.applications_for_offer.min

    logger.info(
        "Computed predictive insights",
        extra={
            "success_probability": probability,
            "market_condition": market_condition,
            "weeks_active": factors.weeks_active,
        },
    )

    return PredictiveInsights(
        factors=factors,
        success_probability=probability,
        market_adjustment=market_adjustment,
        market_condition=market_condition,
        weeks_to_offer=estimate_weeks_to_offer(
            len(records), applications_per_week, factors.interview_rate
        ),
        seasonal=seasonal_recommendation(current.month - 1),
        progress_to_target=min(100.0, calculate_percentage(len(records), target)),
    )
