"""Entry point for the job trends report."""

from __future__ import annotations

import logging
import sys

from .bls_client import BlsClient
from .cli import parse_args
from .config import load_config
from .errors import ConfigurationError, DataValidationError
from .loader import load_applications
from .report import generate_report, render_json
from .timebuckets import resolve_now
from .trends import compute_predictive_insights, compute_trends

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_CONFIGURATION = 2
EXIT_DATA_VALIDATION = 3


def orchestrate_trends_report() -> int:
    """Load applications, compute every trend view and print the report.

    Returns:
        Process exit code: 0 on success, 2 for configuration errors, 3 for
        invalid input data, 1 for anything unexpected.
    """
    try:
        args = parse_args()
        logging.basicConfig(
            level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        config = load_config(
            input_path=args.input,
            time_range=args.time_range,
            live=args.live,
            output_format=args.output_format,
        )

        records = load_applications(config.input_path)
        now = resolve_now()
        trends = compute_trends(records, config.time_range, now=now)

        source = None
        if config.live:
            bls_client = BlsClient(api_key=config.bls_api_key, timeout_seconds=config.timeout_seconds)
            source = bls_client.get_labor_market_snapshot

        insights = compute_predictive_insights(
            records,
            trends.velocity.applications_per_week,
            now=now,
            live=config.live,
            source=source,
        )

        if config.output_format == "json":
            print(render_json(trends, insights, config.time_range))
        else:
            print(generate_report(trends, insights, config.time_range))
        return EXIT_OK
    except ConfigurationError as exc:
        logger.error("Configuration error", extra={"error": str(exc)})
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_CONFIGURATION
    except DataValidationError as exc:
        logger.error("Invalid application data", extra={"error": str(exc)})
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_DATA_VALIDATION
    except Exception:
        logger.exception("Unexpected error while generating trends report")
        print("ERROR: unexpected failure while generating trends report.", file=sys.stderr)
        return EXIT_UNEXPECTED


def main() -> int:
    return orchestrate_trends_report()


if __name__ == "__main__":
    raise SystemExit(main())
