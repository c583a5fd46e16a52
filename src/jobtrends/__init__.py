"""Trend analytics for job application tracking."""
