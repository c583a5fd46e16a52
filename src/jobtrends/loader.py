"""Load application records from the tracker's JSON export.

Field names follow the tracker's camelCase storage format. Every timestamp is
parsed from its known field; no string is ever guessed to be a date.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import DataValidationError
from .models import (
    APPLICATION_STATUSES,
    LOCATION_TYPES,
    ApplicationRecord,
    SalaryRange,
    StatusChange,
)

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any, field_name: str) -> Optional[datetime]:
    """Parse an ISO8601 timestamp, accepting a trailing ``Z`` for UTC.

    Raises:
        DataValidationError: If ``value`` is present but not a valid timestamp.
    """
    if value is None or value == "":
        return None

    if not isinstance(value, str):
        raise DataValidationError(f"Field '{field_name}' must be an ISO8601 string, got {value!r}.")

    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise DataValidationError(f"Field '{field_name}' is not a valid timestamp: {value!r}.") from exc


def _require_timestamp(item: Dict[str, Any], *field_names: str) -> datetime:
    for field_name in field_names:
        parsed = parse_timestamp(item.get(field_name), field_name)
        if parsed is not None:
            return parsed

    raise DataValidationError(
        f"Application payload is missing required timestamp '{field_names[0]}': payload={item}"
    )


def _parse_status(value: Any, context: str) -> str:
    if value not in APPLICATION_STATUSES:
        raise DataValidationError(f"Unknown application status {value!r} in {context}.")
    return str(value)


def _parse_salary(value: Any) -> Optional[SalaryRange]:
    if not value:
        return None

    if not isinstance(value, dict):
        raise DataValidationError(f"Field 'salary' must be an object, got {value!r}.")

    return SalaryRange(
        currency=str(value.get("currency") or "USD"),
        period=str(value.get("period") or "annual"),
        min=value.get("min"),
        max=value.get("max"),
    )


def parse_application(item: Dict[str, Any]) -> ApplicationRecord:
    """Convert one stored application object into an ``ApplicationRecord``.

    ``createdAt`` falls back to ``savedAt`` and ``lastActivityAt`` falls back to
    the creation time, matching older exports.

    Raises:
        DataValidationError: If required fields are missing or malformed.
    """
    if not isinstance(item, dict):
        raise DataValidationError(f"Application entry must be an object, got {item!r}.")

    application_id = item.get("id")
    if not application_id:
        raise DataValidationError(f"Application payload is missing required field 'id': payload={item}")

    context = f"application '{application_id}'"
    created_at = _require_timestamp(item, "createdAt", "savedAt")

    history: List[StatusChange] = []
    for entry in item.get("statusHistory") or []:
        if not isinstance(entry, dict):
            raise DataValidationError(
                f"Status history entry must be an object in {context}, got {entry!r}."
            )
        timestamp = parse_timestamp(entry.get("timestamp"), "statusHistory.timestamp")
        if timestamp is None:
            raise DataValidationError(f"Status history entry without timestamp in {context}.")
        history.append(
            StatusChange(
                status=_parse_status(entry.get("status"), context),
                timestamp=timestamp,
                note=entry.get("note"),
            )
        )

    location_type = item.get("locationType") or None
    if location_type is not None and location_type not in LOCATION_TYPES:
        raise DataValidationError(f"Unknown location type {location_type!r} in {context}.")

    return ApplicationRecord(
        id=str(application_id),
        company_name=str(item.get("companyName") or ""),
        role_name=str(item.get("roleName") or ""),
        status=_parse_status(item.get("status"), context),
        created_at=created_at,
        last_activity_at=parse_timestamp(item.get("lastActivityAt"), "lastActivityAt") or created_at,
        applied_at=parse_timestamp(item.get("appliedAt"), "appliedAt"),
        status_history=history,
        location_type=location_type,
        salary=_parse_salary(item.get("salary")),
        is_referral=bool(item.get("isReferral", False)),
    )


def parse_applications(payload: Any) -> List[ApplicationRecord]:
    """Parse a list of applications, or an object holding an ``applications`` list.

    Invalid entries are logged and skipped; the remaining records are returned.

    Raises:
        DataValidationError: If the payload itself is not a list of applications.
    """
    if isinstance(payload, dict):
        payload = payload.get("applications")

    if not isinstance(payload, list):
        raise DataValidationError(
            "Expected a list of applications or an object with an 'applications' list."
        )

    records: List[ApplicationRecord] = []
    for item in payload:
        try:
            records.append(parse_application(item))
        except DataValidationError as exc:
            logger.warning(
                "Skipping invalid application",
                extra={
                    "application_id": item.get("id") if isinstance(item, dict) else None,
                    "error": str(exc),
                },
            )

    return records


def load_applications(path: Path) -> List[ApplicationRecord]:
    """Read and parse an application export file.

    Raises:
        DataValidationError: If the file is not valid JSON or holds invalid records.
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise DataValidationError(f"Input file '{path}' is not valid JSON: {exc}") from exc

    records = parse_applications(payload)
    logger.info("Loaded applications", extra={"path": str(path), "records_total": len(records)})
    return records
