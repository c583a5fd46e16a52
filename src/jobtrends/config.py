"""Configuration parsing and validation for the job trends report."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError
from .timebuckets import TIME_RANGES

OUTPUT_FORMATS = ("text", "json")

_DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the trends report."""

    input_path: Path
    time_range: str
    live: bool
    output_format: str
    bls_api_key: Optional[str]
    timeout_seconds: int


def _timeout_from_env() -> int:
    raw_value = os.getenv("JOB_TRENDS_TIMEOUT", "").strip()
    if not raw_value:
        return _DEFAULT_TIMEOUT_SECONDS

    try:
        timeout = int(raw_value)
    except ValueError as exc:
        raise ConfigurationError(
            "Invalid value for 'JOB_TRENDS_TIMEOUT': expected an integer number of seconds."
        ) from exc

    if timeout <= 0:
        raise ConfigurationError(
            "Invalid value for 'JOB_TRENDS_TIMEOUT': expected an integer greater than 0."
        )

    return timeout


def load_config(
    input_path: str,
    time_range: str = "30d",
    live: bool = False,
    output_format: str = "text",
) -> Config:
    """Build and validate application configuration.

    Args:
        input_path: Path to the JSON export of application records.
        time_range: Range selector, one of ``7d``, ``30d``, ``90d``, ``all``.
        live: Whether to adjust predictions with live labor market data.
        output_format: ``text`` or ``json``.

    Returns:
        A validated ``Config`` instance. ``BLS_API_KEY`` is optional; the BLS
        API accepts unregistered requests at a lower daily limit.

    Raises:
        ConfigurationError: If any value is invalid or the input file does not exist.
    """
    if time_range not in TIME_RANGES:
        raise ConfigurationError(
            f"Invalid value for 'time_range': expected one of {', '.join(TIME_RANGES)}."
        )

    if output_format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Invalid value for 'output_format': expected one of {', '.join(OUTPUT_FORMATS)}."
        )

    path = Path(input_path).expanduser()
    if not path.is_file():
        raise ConfigurationError(f"Input file '{input_path}' does not exist.")

    api_key: str = os.getenv("BLS_API_KEY", "").strip()

    return Config(
        input_path=path,
        time_range=time_range,
        live=live,
        output_format=output_format,
        bls_api_key=api_key or None,
        timeout_seconds=_timeout_from_env(),
    )
