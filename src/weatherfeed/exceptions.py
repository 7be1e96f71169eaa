"""Custom exceptions for the weather feed."""

from __future__ import annotations


class WeatherFeedError(Exception):
    """Base exception for all weather feed errors."""


class ConfigurationError(WeatherFeedError):
    """Raised when the service configuration is invalid."""


class SourceUnavailableError(WeatherFeedError):
    """Raised when a weather source cannot be reached or opened."""


class WeatherServerConnectionError(SourceUnavailableError):
    """Raised when the weather server cannot be connected to."""


class WeatherServerTimeoutError(SourceUnavailableError):
    """Raised when a request to the weather server times out."""


class WeatherServerAPIError(SourceUnavailableError):
    """Raised when the weather server returns an error response (4xx/5xx)."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class MalformedBatchError(WeatherFeedError):
    """Raised when weather data is unparseable or has the wrong record counts."""


class EmptyStateError(WeatherFeedError):
    """Raised when nothing has been stored yet."""
