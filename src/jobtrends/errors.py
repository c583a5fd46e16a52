"""Custom exception types for the job trends analytics package."""


class TrendsError(Exception):
    """Base exception for all recoverable trends analytics errors."""


class ConfigurationError(TrendsError):
    """Raised when runtime configuration values are missing or invalid."""


class ApiError(TrendsError):
    """Raised when a labor market API request fails or returns an unexpected response."""


class DataValidationError(TrendsError):
    """Raised when application payloads do not meet expected constraints."""
