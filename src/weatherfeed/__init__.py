"""weatherfeed: weather acquisition and normalization for simulation hosts."""

from weatherfeed.clock import HourlyClock
from weatherfeed.config import WeatherServiceConfig, load_config
from weatherfeed.exceptions import (
    ConfigurationError,
    EmptyStateError,
    MalformedBatchError,
    SourceUnavailableError,
    WeatherFeedError,
    WeatherServerAPIError,
    WeatherServerConnectionError,
    WeatherServerTimeoutError,
)
from weatherfeed.ports import TimeSource, WeatherSink
from weatherfeed.service import WeatherService
from weatherfeed.sinks import LoggingSink, RecordingSink

__all__ = [
    "ConfigurationError",
    "EmptyStateError",
    "HourlyClock",
    "LoggingSink",
    "MalformedBatchError",
    "RecordingSink",
    "SourceUnavailableError",
    "TimeSource",
    "WeatherFeedError",
    "WeatherServerAPIError",
    "WeatherServerConnectionError",
    "WeatherServerTimeoutError",
    "WeatherService",
    "WeatherServiceConfig",
    "WeatherSink",
    "load_config",
]

__version__ = "0.1.0"
