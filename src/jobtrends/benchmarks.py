"""Industry benchmarks for job search analytics.

Reference values come from BLS data and recruiting industry research. The
tables are immutable; live labor market data only adjusts scores derived from
them (see :mod:`jobtrends.market`).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .models import LiveMarketBenchmarks, SeasonalRecommendation, SuccessProbabilityFactors
from .stats import clamp


@dataclass(frozen=True, slots=True)
class BenchmarkRange:
    """Inclusive low/high pair for a benchmark value."""

    min: float
    max: float


@dataclass(frozen=True, slots=True)
class ApplicationBenchmarks:
    applications_for_offer: BenchmarkRange
    optimal_weekly_applications: BenchmarkRange
    median_search_weeks: int
    average_search_months: int


@dataclass(frozen=True, slots=True)
class ConversionBenchmarks:
    application_to_interview: BenchmarkRange
    interview_to_offer: BenchmarkRange
    offer_acceptance: float
    referral_multiplier: float
    referral_interview_boost: float


@dataclass(frozen=True, slots=True)
class ResponseTimeBenchmarks:
    """Typical days to first response by application channel and industry."""

    job_board: BenchmarkRange
    referral: float
    career_page: float
    by_industry: Mapping[str, float]
    overall_average: BenchmarkRange


@dataclass(frozen=True, slots=True)
class SeasonalBenchmarks:
    monthly_scores: Mapping[str, int]
    peak_response_boost: BenchmarkRange
    summer_activity_drop: BenchmarkRange


@dataclass(frozen=True, slots=True)
class StrategyBenchmarks:
    networking_time_allocation: float
    hidden_job_market: BenchmarkRange
    connection_filled_jobs: float
    ats_rejection_rate: float
    keyword_match_target: BenchmarkRange
    generic_rejection_speed: float


APPLICATION_BENCHMARKS = ApplicationBenchmarks(
    applications_for_offer=BenchmarkRange(100, 200),
    optimal_weekly_applications=BenchmarkRange(10, 15),
    median_search_weeks=10,
    average_search_months=5,
)

CONVERSION_BENCHMARKS = ConversionBenchmarks(
    application_to_interview=BenchmarkRange(0.03, 0.08),
    interview_to_offer=BenchmarkRange(0.27, 0.36),
    offer_acceptance=0.73,
    # referrals are 7x more likely to result in a hire
    referral_multiplier=7,
    referral_interview_boost=0.4,
)

RESPONSE_TIME_BENCHMARKS = ResponseTimeBenchmarks(
    job_board=BenchmarkRange(39, 55),
    referral=29,
    career_page=35,
    by_industry=MappingProxyType(
        {
            "construction": 13,
            "hospitality": 21,
            "technology": 24,
            "finance": 24,
            "healthcare": 49,
            "engineering": 62,
            "government": 41,
        }
    ),
    overall_average=BenchmarkRange(42, 47.5),
)

MONTH_NAMES: Tuple[str, ...] = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

SEASONAL_BENCHMARKS = SeasonalBenchmarks(
    monthly_scores=MappingProxyType(
        {
            "january": 8,
            "february": 10,
            "march": 7,
            "april": 6,
            "may": 6,
            "june": 5,
            "july": 3,
            "august": 3,
            "september": 9,
            "october": 7,
            "november": 5,
            "december": 4,
        }
    ),
    peak_response_boost=BenchmarkRange(0.15, 0.25),
    summer_activity_drop=BenchmarkRange(0.4, 0.6),
)

STRATEGY_BENCHMARKS = StrategyBenchmarks(
    networking_time_allocation=0.8,
    hidden_job_market=BenchmarkRange(0.5, 0.8),
    connection_filled_jobs=0.85,
    ats_rejection_rate=0.75,
    keyword_match_target=BenchmarkRange(0.65, 0.75),
    generic_rejection_speed=0.75,
)

STATIC_MARKET_BENCHMARKS = LiveMarketBenchmarks(
    unemployment_rate=4.2,
    unemployment_trend="stable",
    job_openings=7500,
    openings_trend="stable",
    inflation_rate=3.2,
    hiring_rate=3.8,
    quits_rate=2.3,
    market_condition="warm",
    data_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
    is_live=False,
)

VOLUME_WEIGHT = 0.3
RATE_WEIGHT = 0.2
INTERVIEW_WEIGHT = 0.3
REFERRAL_BONUS = 0.1
LONG_SEARCH_PENALTY = 0.1


def success_probability(factors: SuccessProbabilityFactors) -> float:
    """Score the likelihood of landing an offer from current search metrics.

    The score adds five terms, each clamped to its own range, then clamps the
    sum to ``[0, 1]``:
    - volume: progress toward 100 applications, up to 0.3
    - rate: weekly rate against 10 per week, up to 0.2
    - interview conversion: rate normalized between 3% and 8%, up to 0.3
    - referral bonus: 0.1 when any application came through a referral
    - time penalty: -0.1 once the search runs past twice the median duration
    """
    volume_target = APPLICATION_BENCHMARKS.applications_for_offer.min
    optimal_rate = APPLICATION_BENCHMARKS.optimal_weekly_applications.min
    interview = CONVERSION_BENCHMARKS.application_to_interview

    score = clamp(factors.application_volume / volume_target) * VOLUME_WEIGHT
    score += clamp(factors.application_rate / optimal_rate) * RATE_WEIGHT
    score += (
        clamp((factors.interview_rate - interview.min) / (interview.max - interview.min))
        * INTERVIEW_WEIGHT
    )

    if factors.has_referrals:
        score += REFERRAL_BONUS

    if factors.weeks_active > APPLICATION_BENCHMARKS.median_search_weeks * 2:
        score -= LONG_SEARCH_PENALTY

    return clamp(score)


def seasonal_recommendation(month: int) -> SeasonalRecommendation:
    """Return the hiring season outlook for a zero-based month index.

    Raises:
        ValueError: If ``month`` is not in ``0..11``.
    """
    if not 0 <= month <= 11:
        raise ValueError("Month index must be in the range [0, 11].")

    score = SEASONAL_BENCHMARKS.monthly_scores[MONTH_NAMES[month]]

    if score >= 9:
        return SeasonalRecommendation(
            score=score,
            band="peak",
            message="Peak hiring season! Maximize your applications now.",
            action="Increase activity to 15-20 applications per week",
        )
    if score >= 7:
        return SeasonalRecommendation(
            score=score,
            band="good",
            message="Strong hiring activity. Good time to apply.",
            action="Maintain 10-15 applications per week",
        )
    if score >= 5:
        return SeasonalRecommendation(
            score=score,
            band="moderate",
            message="Moderate hiring activity. Focus on quality over quantity.",
            action="Target 8-12 tailored applications per week",
        )
    return SeasonalRecommendation(
        score=score,
        band="low",
        message="Slower hiring season. Focus on networking and preparation.",
        action="Spend 80% of time networking, maintain 5-8 applications/week",
    )


def estimate_weeks_to_offer(
    total_applications: float,
    applications_per_week: float,
    interview_rate: float,
) -> Optional[int]:
    """Estimate whole weeks until an offer at the current velocity.

    Uses the user's interview rate when positive, otherwise the benchmark
    minimum, combined with the minimum interview-to-offer rate.

    Returns ``None`` when no applications are being sent.
    """
    if applications_per_week == 0:
        return None

    effective_rate = (
        interview_rate
        if interview_rate > 0
        else CONVERSION_BENCHMARKS.application_to_interview.min
    )
    overall_conversion = effective_rate * CONVERSION_BENCHMARKS.interview_to_offer.min

    applications_needed = 1 / overall_conversion
    applications_remaining = max(0.0, applications_needed - total_applications)

    return math.ceil(applications_remaining / applications_per_week)
