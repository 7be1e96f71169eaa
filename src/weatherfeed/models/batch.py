"""Acquisition batch and result models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from weatherfeed.models.forecast import WeatherForecastBundle, WeatherForecastPrediction
from weatherfeed.models.report import WeatherReport


class SourceMode(str, Enum):
    """Where a batch of weather data came from."""

    ARCHIVE = "xml file"
    STATE_LOG = "state file"
    WEB = "web"


class AcquisitionBatch(BaseModel):
    """Reports and flat predictions obtained in one fetch cycle."""

    model_config = ConfigDict(frozen=True)

    reports: tuple[WeatherReport, ...] = ()
    predictions: tuple[WeatherForecastPrediction, ...] = ()

    def matches(self, request_interval: int, forecast_horizon: int) -> bool:
        """True if the batch holds exactly R reports and R*H predictions."""
        return (
            len(self.reports) == request_interval
            and len(self.predictions) == request_interval * forecast_horizon
        )


class AcquisitionResult(BaseModel):
    """A normalized batch: stamped reports plus one forecast bundle per report."""

    model_config = ConfigDict(frozen=True)

    source: SourceMode
    reports: tuple[WeatherReport, ...]
    bundles: tuple[WeatherForecastBundle, ...]
