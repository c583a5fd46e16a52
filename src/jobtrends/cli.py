"""Command-line argument parsing for the job trends report."""

from __future__ import annotations

import argparse

from .config import OUTPUT_FORMATS
from .timebuckets import TIME_RANGES


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments for trend reporting.

    Returns:
        Parsed CLI arguments containing the input file, time range, live
        market flag, output format and verbosity.
    """
    parser = argparse.ArgumentParser(
        prog="job-trends",
        description=(
            "Report job application trends (volume over time, weekly velocity, "
            "response times) and predictive insights from a tracker export."
        ),
    )

    parser.add_argument(
        "--input",
        required=True,
        help="Path to the JSON export of job applications.",
    )
    parser.add_argument(
        "--range",
        dest="time_range",
        choices=TIME_RANGES,
        default="30d",
        help="Time range to analyze (default: 30d).",
    )
    parser.add_argument(
        "--live",
        action="store_true",
        help="Adjust the success probability with live BLS labor market data.",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser.parse_args()
