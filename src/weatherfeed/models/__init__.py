"""Weather feed data models."""

from weatherfeed.models.batch import AcquisitionBatch, AcquisitionResult, SourceMode
from weatherfeed.models.forecast import WeatherForecastBundle, WeatherForecastPrediction
from weatherfeed.models.report import WeatherReport
from weatherfeed.models.time_slot import TimeSlot

__all__ = [
    "AcquisitionBatch",
    "AcquisitionResult",
    "SourceMode",
    "TimeSlot",
    "WeatherForecastBundle",
    "WeatherForecastPrediction",
    "WeatherReport",
]
