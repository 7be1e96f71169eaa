"""Host capabilities consumed by the weather service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from weatherfeed.models.forecast import WeatherForecastBundle
from weatherfeed.models.report import WeatherReport
from weatherfeed.models.time_slot import TimeSlot


class TimeSource(ABC):
    """Simulation clock as seen by the weather service."""

    @abstractmethod
    def current_time_slot(self) -> TimeSlot: ...

    @abstractmethod
    def next_time_slot(self, slot: TimeSlot) -> TimeSlot: ...

    @abstractmethod
    def current_wall_clock_millis(self) -> int: ...


class WeatherSink(ABC):
    """Fire-and-forget delivery of published weather messages."""

    @abstractmethod
    def publish_report(self, report: WeatherReport) -> None: ...

    @abstractmethod
    def publish_forecast(self, bundle: WeatherForecastBundle) -> None: ...
