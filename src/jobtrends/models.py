"""Domain models for job application trend analytics.

Input records mirror the application tracker's stored shape. Everything else in
this module is derived data that is recomputed on every call and never written
back to the tracker.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

STATUS_SAVED = "saved"
STATUS_APPLIED = "applied"
STATUS_SCREENING = "screening"
STATUS_INTERVIEWING = "interviewing"
STATUS_OFFERED = "offered"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"
STATUS_WITHDRAWN = "withdrawn"

APPLICATION_STATUSES = (
    STATUS_SAVED,
    STATUS_APPLIED,
    STATUS_SCREENING,
    STATUS_INTERVIEWING,
    STATUS_OFFERED,
    STATUS_ACCEPTED,
    STATUS_REJECTED,
    STATUS_WITHDRAWN,
)

LOCATION_TYPES = ("remote", "hybrid", "onsite")


@dataclass(frozen=True, slots=True)
class StatusChange:
    """One entry of an application's append-only status history."""

    status: str
    timestamp: datetime
    note: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SalaryRange:
    """Advertised salary range for an application."""

    currency: str
    period: str
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(slots=True)
class ApplicationRecord:
    """A single job application as owned by the application tracker."""

    id: str
    company_name: str
    role_name: str
    status: str
    created_at: datetime
    last_activity_at: datetime
    applied_at: Optional[datetime] = None
    status_history: List[StatusChange] = field(default_factory=list)
    location_type: Optional[str] = None
    salary: Optional[SalaryRange] = None
    is_referral: bool = False


@dataclass(frozen=True, slots=True)
class DateRange:
    """Resolved time window and bucket granularity for a range selector."""

    start: datetime
    end: datetime
    granularity: str


@dataclass(slots=True)
class TimeSeriesDataPoint:
    """Applications grouped into a single time bucket."""

    date: datetime
    count: int
    applications: List[ApplicationRecord]
    label: str


@dataclass(slots=True)
class VelocityMetrics:
    """Weekly application velocity for a time range."""

    applications_per_week: float
    current_week: int
    previous_week: int
    trend: str
    weekly_data: List[TimeSeriesDataPoint]


@dataclass(slots=True)
class VelocityStatus:
    """Velocity compared against the optimal weekly application range."""

    status: str
    message: str


@dataclass(slots=True)
class ResponseTimeSummary:
    """Overall response-time statistics in whole days."""

    average: Optional[int]
    median: Optional[int]
    fastest: Optional[int]
    slowest: Optional[int]


@dataclass(slots=True)
class CompanyResponseTime:
    """Average response time observed for one company."""

    company: str
    average: int
    count: int


@dataclass(slots=True)
class DistributionBucket:
    """A labelled count with its share of the total in percent."""

    range: str
    count: int
    percentage: float


@dataclass(slots=True)
class ResponseTimeAnalytics:
    """Response-time statistics across all responded applications."""

    overall: ResponseTimeSummary
    by_company: List[CompanyResponseTime]
    distribution: List[DistributionBucket]


@dataclass(slots=True)
class ShareEntry:
    """Count and percentage for one category of a breakdown."""

    key: str
    count: int
    percentage: float


@dataclass(slots=True)
class DistributionData:
    """Breakdown of applications by company, location type and status."""

    by_company: List[ShareEntry]
    by_location: List[ShareEntry]
    by_status: List[ShareEntry]


@dataclass(slots=True)
class SuccessProbabilityFactors:
    """Inputs to the success probability model."""

    application_volume: float
    application_rate: float
    interview_rate: float
    response_rate: float
    has_referrals: bool
    weeks_active: float


@dataclass(slots=True)
class LaborMarketSnapshot:
    """Current national labor market indicators."""

    national_unemployment_rate: float
    job_openings: float
    labor_force_participation_rate: float
    unemployment_rate_change: float
    monthly_job_change: float
    inflation: Optional[float] = None
    quits_rate: Optional[float] = None
    period: str = "Current"


@dataclass(slots=True)
class LaborMarketResult:
    """Outcome of a labor market lookup."""

    success: bool
    data: Optional[LaborMarketSnapshot] = None
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LiveMarketBenchmarks:
    """Labor market benchmarks, either live or the static fallback."""

    unemployment_rate: float
    unemployment_trend: str
    job_openings: float
    openings_trend: str
    inflation_rate: float
    hiring_rate: float
    quits_rate: float
    market_condition: str
    data_date: datetime
    is_live: bool


@dataclass(slots=True)
class LiveSuccessProbability:
    """Success probability after the market condition adjustment."""

    probability: float
    market_adjustment: float
    market_condition: str


@dataclass(slots=True)
class SeasonalRecommendation:
    """Hiring season score with a canned message and suggested action."""

    score: int
    band: str
    message: str
    action: str


@dataclass(slots=True)
class PredictiveInsights:
    """Forward-looking projections derived from current metrics."""

    factors: SuccessProbabilityFactors
    success_probability: float
    market_adjustment: float
    market_condition: Optional[str]
    weeks_to_offer: Optional[int]
    seasonal: SeasonalRecommendation
    progress_to_target: float


@dataclass(slots=True)
class TrendsData:
    """All trend views computed for one range selection."""

    time_series: List[TimeSeriesDataPoint]
    velocity: VelocityMetrics
    response_times: ResponseTimeAnalytics
    distribution: DistributionData
    total_applications: int
    has_data: bool
