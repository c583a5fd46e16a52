"""Live labor market benchmarks with a static fallback.

The live path makes one labor market lookup. Any failure, whether an
unsuccessful result, a raised exception or a malformed payload, degrades to
``STATIC_MARKET_BENCHMARKS`` and is only logged.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from .benchmarks import (
    CONVERSION_BENCHMARKS,
    RESPONSE_TIME_BENCHMARKS,
    STATIC_MARKET_BENCHMARKS,
    BenchmarkRange,
    ConversionBenchmarks,
    ResponseTimeBenchmarks,
    success_probability,
)
from .bls_client import BlsClient
from .models import (
    LaborMarketResult,
    LiveMarketBenchmarks,
    LiveSuccessProbability,
    SuccessProbabilityFactors,
)
from .stats import clamp, round_half_up

logger = logging.getLogger(__name__)

LaborMarketSource = Callable[[], LaborMarketResult]

MARKET_HOT = "hot"
MARKET_WARM = "warm"
MARKET_COOL = "cool"
MARKET_COLD = "cold"

PROBABILITY_ADJUSTMENTS: Dict[str, float] = {
    MARKET_HOT: 0.15,
    MARKET_WARM: 0.0,
    MARKET_COOL: -0.1,
    MARKET_COLD: -0.2,
}

CONVERSION_MULTIPLIERS: Dict[str, float] = {
    MARKET_HOT: 1.2,
    MARKET_WARM: 1.0,
    MARKET_COOL: 0.85,
    MARKET_COLD: 0.7,
}

RESPONSE_TIME_MULTIPLIERS: Dict[str, float] = {
    MARKET_HOT: 0.8,
    MARKET_WARM: 1.0,
    MARKET_COOL: 1.2,
    MARKET_COLD: 1.5,
}

_TREND_THRESHOLD = 0.2


def determine_trend(change: Optional[float]) -> str:
    """Classify a period-over-period change as ``up``, ``down`` or ``stable``."""
    if change is None or abs(change) < _TREND_THRESHOLD:
        return "stable"
    return "up" if change > 0 else "down"


def determine_market_condition(
    unemployment_rate: float,
    job_openings: float,
    hiring_rate: float,
) -> str:
    """Classify the labor market from unemployment (%), openings (thousands) and hiring (%)."""
    if unemployment_rate < 4 and job_openings > 8000 and hiring_rate > 4:
        return MARKET_HOT
    if unemployment_rate > 6 or job_openings < 5000:
        return MARKET_COLD
    if unemployment_rate > 5 or job_openings < 6000:
        return MARKET_COOL
    return MARKET_WARM


def _default_source() -> LaborMarketResult:
    return BlsClient().get_labor_market_snapshot()


def get_live_market_benchmarks(source: Optional[LaborMarketSource] = None) -> LiveMarketBenchmarks:
    """Fetch live labor market benchmarks, falling back to static data.

    Args:
        source: Labor market lookup; defaults to an unauthenticated BLS client.

    Returns:
        Live benchmarks with ``is_live=True``, or the ``STATIC_MARKET_BENCHMARKS``
        object itself when the lookup fails in any way.
    """
    lookup = source or _default_source

    try:
        result = lookup()
        if not result.success or result.data is None:
            logger.warning(
                "Live market benchmarks unavailable, using static fallback",
                extra={"error": result.error},
            )
            return STATIC_MARKET_BENCHMARKS

        data = result.data
        # the snapshot has no hiring rate; participation rate stands in for it
        market_condition = determine_market_condition(
            data.national_unemployment_rate,
            data.job_openings,
            data.labor_force_participation_rate,
        )

        return LiveMarketBenchmarks(
            unemployment_rate=float(data.national_unemployment_rate),
            unemployment_trend=determine_trend(data.unemployment_rate_change),
            job_openings=float(data.job_openings),
            openings_trend=determine_trend(data.monthly_job_change),
            inflation_rate=data.inflation or STATIC_MARKET_BENCHMARKS.inflation_rate,
            hiring_rate=STATIC_MARKET_BENCHMARKS.hiring_rate,
            quits_rate=data.quits_rate or STATIC_MARKET_BENCHMARKS.quits_rate,
            market_condition=market_condition,
            data_date=datetime.now(timezone.utc),
            is_live=True,
        )
    except Exception as exc:
        logger.warning(
            "Failed to fetch live market benchmarks, using static fallback",
            extra={"error": repr(exc)},
        )
        return STATIC_MARKET_BENCHMARKS


def calculate_live_success_probability(
    factors: SuccessProbabilityFactors,
    source: Optional[LaborMarketSource] = None,
) -> LiveSuccessProbability:
    """Apply the current market condition's offset to the base success probability."""
    benchmarks = get_live_market_benchmarks(source)
    base_probability = success_probability(factors)
    adjustment = PROBABILITY_ADJUSTMENTS[benchmarks.market_condition]

    return LiveSuccessProbability(
        probability=clamp(base_probability + adjustment),
        market_adjustment=adjustment,
        market_condition=benchmarks.market_condition,
    )


def market_adjusted_conversion_benchmarks(market_condition: str) -> ConversionBenchmarks:
    """Scale both conversion-rate ranges for the given market condition."""
    multiplier = CONVERSION_MULTIPLIERS[market_condition]
    base = CONVERSION_BENCHMARKS

    return ConversionBenchmarks(
        application_to_interview=BenchmarkRange(
            base.application_to_interview.min * multiplier,
            base.application_to_interview.max * multiplier,
        ),
        interview_to_offer=BenchmarkRange(
            base.interview_to_offer.min * multiplier,
            base.interview_to_offer.max * multiplier,
        ),
        offer_acceptance=base.offer_acceptance,
        referral_multiplier=base.referral_multiplier,
        referral_interview_boost=base.referral_interview_boost,
    )


def market_adjusted_response_times(market_condition: str) -> ResponseTimeBenchmarks:
    """Scale response-time benchmarks for the given market condition.

    Day counts are rounded to whole days; the overall average range is not.
    """
    multiplier = RESPONSE_TIME_MULTIPLIERS[market_condition]
    base = RESPONSE_TIME_BENCHMARKS

    return ResponseTimeBenchmarks(
        job_board=BenchmarkRange(
            round_half_up(base.job_board.min * multiplier),
            round_half_up(base.job_board.max * multiplier),
        ),
        referral=round_half_up(base.referral * multiplier),
        career_page=round_half_up(base.career_page * multiplier),
        by_industry={
            industry: round_half_up(days * multiplier)
            for industry, days in base.by_industry.items()
        },
        overall_average=BenchmarkRange(
            base.overall_average.min * multiplier,
            base.overall_average.max * multiplier,
        ),
    )
