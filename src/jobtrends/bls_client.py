"""Bureau of Labor Statistics (BLS) public API client for labor market data."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import requests

from .errors import ApiError
from .models import LaborMarketResult, LaborMarketSnapshot

logger = logging.getLogger(__name__)

UNEMPLOYMENT_RATE_SERIES = "LNS14000000"
EMPLOYED_SERIES = "LNS12000000"
LABOR_FORCE_SERIES = "LNS11000000"
JOB_OPENINGS_SERIES = "JTS000000000000000JOL"
QUITS_RATE_SERIES = "JTS000000000000000QUR"
CPI_SERIES = "CUSR0000SA0"

SNAPSHOT_SERIES = (
    UNEMPLOYMENT_RATE_SERIES,
    EMPLOYED_SERIES,
    LABOR_FORCE_SERIES,
    JOB_OPENINGS_SERIES,
    QUITS_RATE_SERIES,
    CPI_SERIES,
)

_FAILED_STATUSES = ("REQUEST_FAILED", "REQUEST_NOT_PROCESSED")
_MISSING_VALUES = ("", "-", "*", "#")


def parse_bls_value(value: Optional[str]) -> Optional[float]:
    """Parse a BLS value string, returning ``None`` for BLS missing-data markers."""
    if value is None or value.strip() in _MISSING_VALUES:
        return None

    try:
        return float(value.replace(",", ""))
    except ValueError:
        return None


def sort_most_recent_first(points: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Order BLS data points by year then period (``M01``..``M12``), newest first."""
    return sorted(
        points,
        key=lambda point: (int(point.get("year") or 0), str(point.get("period") or "")),
        reverse=True,
    )


class BlsClient:
    """Small, typed client for the BLS time series API.

    Every call is a single request with no retries. Callers that need a
    guaranteed answer fall back to static benchmarks instead.
    """

    _API_URL = "https://api.bls.gov/publicAPI/v2/timeseries/data/"

    def __init__(self, api_key: Optional[str] = None, timeout_seconds: int = 30) -> None:
        """Initialize a BLS API client.

        Args:
            api_key: Optional BLS registration key for the higher daily quota.
            timeout_seconds: Per-request timeout in seconds.
        """
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds

        self._session = requests.Session()
        self._session.headers.update(
            {"Accept": "application/json", "Content-Type": "application/json"}
        )

    def _post_json(self, body: Dict[str, Any]) -> Dict[str, Any]:
        """Execute one POST request against the time series endpoint.

        Raises:
            ApiError: If the request fails, returns HTTP >= 400, does not return
                valid JSON, or BLS reports the request as failed.
        """
        url = self._API_URL

        try:
            response = self._session.post(url, json=body, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise ApiError(f"BLS request failed: POST {url}") from exc

        if response.status_code >= 400:
            raise ApiError(
                "BLS API request failed: "
                f"POST {url} returned {response.status_code} - {response.text}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(f"BLS API returned invalid JSON: POST {url}") from exc

        if not isinstance(payload, dict):
            raise ApiError(f"BLS API returned unexpected payload shape: POST {url}")

        if payload.get("status") in _FAILED_STATUSES:
            messages = payload.get("message") or []
            raise ApiError(f"BLS API rejected the request: {'; '.join(map(str, messages))}")

        return payload

    def fetch_series(
        self,
        series_ids: Sequence[str],
        start_year: int,
        end_year: int,
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Fetch data points for several series in one request.

        Returns:
            Mapping of series ID to its data points, newest first. Series the
            API returned without data are omitted.
        """
        if not series_ids:
            raise ApiError("No BLS series IDs provided.")
        if start_year > end_year:
            raise ApiError("BLS start year must be less than or equal to end year.")

        body: Dict[str, Any] = {
            "seriesid": list(series_ids),
            "startyear": str(start_year),
            "endyear": str(end_year),
            "calculations": True,
        }
        if self._api_key:
            body["registrationkey"] = self._api_key

        payload = self._post_json(body)
        results = payload.get("Results") or payload.get("results") or {}

        series_data: Dict[str, List[Dict[str, Any]]] = {}
        for item in results.get("series", []):
            series_id = item.get("seriesID")
            points = item.get("data") or []
            if series_id and points:
                series_data[str(series_id)] = sort_most_recent_first(points)

        return series_data

    def get_labor_market_snapshot(self, now: Optional[datetime] = None) -> LaborMarketResult:
        """Build a national labor market snapshot from unemployment, JOLTS and CPI data.

        Never raises: any API failure is reported as ``success=False``.
        """
        end_year = (now or datetime.now()).year

        try:
            series = self.fetch_series(SNAPSHOT_SERIES, end_year - 1, end_year)
            snapshot = self._build_snapshot(series)
        except ApiError as exc:
            logger.warning("Labor market snapshot unavailable", extra={"error": str(exc)})
            return LaborMarketResult(success=False, error=str(exc))

        return LaborMarketResult(success=True, data=snapshot)

    def _build_snapshot(self, series: Dict[str, List[Dict[str, Any]]]) -> LaborMarketSnapshot:
        def latest(series_id: str, offset: int = 0) -> Optional[float]:
            points = series.get(series_id) or []
            if len(points) <= offset:
                return None
            return parse_bls_value(points[offset].get("value"))

        def change(series_id: str) -> float:
            current = latest(series_id)
            previous = latest(series_id, 1)
            if current is None or previous is None:
                return 0.0
            return current - previous

        unemployment_rate = latest(UNEMPLOYMENT_RATE_SERIES)
        if unemployment_rate is None:
            raise ApiError("BLS response is missing the national unemployment rate.")

        employed = latest(EMPLOYED_SERIES) or 0.0
        labor_force = latest(LABOR_FORCE_SERIES) or 0.0
        participation = (employed / labor_force) * 100 if labor_force > 0 and employed > 0 else 0.0

        missing = [
            series_id
            for series_id in (JOB_OPENINGS_SERIES, QUITS_RATE_SERIES, CPI_SERIES)
            if series_id not in series
        ]
        if missing:
            logger.warning("BLS response is missing series", extra={"series": missing})

        newest = series[UNEMPLOYMENT_RATE_SERIES][0]
        period = f"{newest.get('year')}-{str(newest.get('period', '')).replace('M', '').zfill(2)}"

        return LaborMarketSnapshot(
            national_unemployment_rate=unemployment_rate,
            job_openings=latest(JOB_OPENINGS_SERIES) or 0.0,
            labor_force_participation_rate=participation,
            unemployment_rate_change=change(UNEMPLOYMENT_RATE_SERIES),
            # employed persons are reported in thousands
            monthly_job_change=change(EMPLOYED_SERIES) * 1000,
            inflation=self._twelve_month_change(series.get(CPI_SERIES) or []),
            quits_rate=latest(QUITS_RATE_SERIES),
            period=period,
        )

    def _twelve_month_change(self, points: List[Dict[str, Any]]) -> Optional[float]:
        if not points:
            return None
        calculations = points[0].get("calculations") or {}
        pct_changes = calculations.get("pct_changes") or {}
        return parse_bls_value(pct_changes.get("12"))
