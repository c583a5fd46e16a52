"""Tests for command-line argument parsing."""

import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from jobtrends.cli import parse_args


def test_parse_args_with_valid_arguments(monkeypatch):
    """Verify CLI parsing succeeds when all arguments are provided."""
    monkeypatch.setattr(
        sys,
        "argv",
        [
            "job-trends",
            "--input",
            "applications.json",
            "--range",
            "90d",
            "--live",
            "--format",
            "json",
            "--verbose",
        ],
    )

    args = parse_args()

    assert args.input == "applications.json"
    assert args.time_range == "90d"
    assert args.live is True
    assert args.output_format == "json"
    assert args.verbose is True


def test_parse_args_defaults(monkeypatch):
    """Verify CLI parsing applies defaults when only --input is given."""
    monkeypatch.setattr(sys, "argv", ["job-trends", "--input", "applications.json"])

    args = parse_args()

    assert args.time_range == "30d"
    assert args.live is False
    assert args.output_format == "text"
    assert args.verbose is False


def test_parse_args_with_unknown_range_fails_validation(monkeypatch):
    """Verify CLI parsing exits with an error for an unknown --range."""
    monkeypatch.setattr(
        sys,
        "argv",
        ["job-trends", "--input", "applications.json", "--range", "14d"],
    )

    with pytest.raises(SystemExit):
        parse_args()


def test_parse_args_without_input_fails_validation(monkeypatch):
    """Verify CLI parsing exits with an error when --input is missing."""
    monkeypatch.setattr(sys, "argv", ["job-trends"])

    with pytest.raises(SystemExit):
        parse_args()
