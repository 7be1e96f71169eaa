"""Service configuration: model, validation and environment loading."""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from weatherfeed.exceptions import ConfigurationError
from weatherfeed.models.batch import SourceMode

MILLIS_PER_HOUR = 60 * 60 * 1000
MAX_REQUEST_INTERVAL = 24

DEFAULT_SERVER_URL = "http://wolf-08.fbk.eur.nl:8080/WeatherServer/faces/index.xhtml"
DEFAULT_TIMEOUT = 30.0

ENV_PREFIX = "WEATHERFEED_"


class WeatherServiceConfig(BaseModel):
    """Configuration surface of the weather service.

    Every field accepts its snake_case name or the camelCase key used by
    server property files (``weatherReqInterval``, ``forecastHorizon``, ...).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    weather_location: str = "rotterdam"
    server_url: str = DEFAULT_SERVER_URL
    # Accepted for compatibility; every fetch is synchronous.
    blocking: bool = True
    weather_data: str = ""
    weather_req_interval: int = Field(default=24, ge=1)
    forecast_horizon: int = Field(default=24, ge=1)
    fetch_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @field_validator("weather_req_interval")
    @classmethod
    def _clamp_interval(cls, value: int) -> int:
        return min(MAX_REQUEST_INTERVAL, value)

    @property
    def source_mode(self) -> SourceMode:
        """Primary source selected by the ``weather_data`` suffix."""
        if self.weather_data.endswith(".xml"):
            return SourceMode.ARCHIVE
        if self.weather_data.endswith(".state"):
            return SourceMode.STATE_LOG
        return SourceMode.WEB

    @property
    def poll_interval_millis(self) -> int:
        return self.weather_req_interval * MILLIS_PER_HOUR


def _from_environment() -> dict[str, str]:
    values: dict[str, str] = {}
    for name in WeatherServiceConfig.model_fields:
        raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None:
            values[name] = raw
    return values


def load_config(env_file: str | None = None, **overrides: Any) -> WeatherServiceConfig:
    """Build a config from ``WEATHERFEED_*`` environment variables.

    Args:
        env_file: Optional ``.env`` file loaded before reading the environment.
            Variables already set in the process environment win.
        **overrides: Field values (snake_case or camelCase) applied last.

    Raises:
        ConfigurationError: If any value fails validation.
    """
    if env_file is not None:
        load_dotenv(env_file, override=False)

    values: dict[str, Any] = _from_environment()
    values.update(overrides)
    try:
        return WeatherServiceConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid weather service configuration: {exc}") from exc
