# ABOUTME: Error taxonomy for the weather lookup cycle.
# ABOUTME: Validation, fetch, parse and configuration failures share one base class.

from enum import Enum


class WeatherPanelError(Exception):
    """Base class for every error raised by the weather panel."""


class ConfigurationError(WeatherPanelError):
    """Settings are missing or invalid; raised at startup."""


class QueryValidationError(WeatherPanelError):
    """The city query is empty after trimming."""


class FetchErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PROVIDER_ERROR = "provider_error"
    NETWORK_ERROR = "network_error"


class FetchError(WeatherPanelError):
    """The provider could not be reached or answered with a non-success status."""

    def __init__(self, kind: FetchErrorKind, message: str, status_code: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class ParseError(WeatherPanelError):
    """A success response did not have the expected shape."""
