"""Ready-made weather sinks."""

from __future__ import annotations

from weatherfeed._logging import get_logger
from weatherfeed.models.forecast import WeatherForecastBundle
from weatherfeed.models.report import WeatherReport
from weatherfeed.ports import WeatherSink


class LoggingSink(WeatherSink):
    """Writes one acquisition-log line per published message."""

    def publish_report(self, report: WeatherReport) -> None:
        get_logger().info(
            "PUBLISH report slot=%d temp=%.1f wind=%.1f dir=%.1f cloud=%.2f",
            report.time_slot.serial_number,
            report.temperature,
            report.wind_speed,
            report.wind_direction,
            report.cloud_cover,
        )

    def publish_forecast(self, bundle: WeatherForecastBundle) -> None:
        get_logger().info(
            "PUBLISH forecast origin=%d predictions=%d",
            bundle.origin_time_slot.serial_number,
            bundle.horizon,
        )


class RecordingSink(WeatherSink):
    """Keeps every published message in memory, in publication order."""

    def __init__(self) -> None:
        self.reports: list[WeatherReport] = []
        self.forecasts: list[WeatherForecastBundle] = []

    def publish_report(self, report: WeatherReport) -> None:
        self.reports.append(report)

    def publish_forecast(self, bundle: WeatherForecastBundle) -> None:
        self.forecasts.append(bundle)
