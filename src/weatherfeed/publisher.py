"""Storage of the latest accepted batch and per-tick publication."""

from __future__ import annotations

from weatherfeed._logging import get_logger
from weatherfeed.exceptions import EmptyStateError
from weatherfeed.models.batch import AcquisitionResult
from weatherfeed.models.forecast import WeatherForecastBundle
from weatherfeed.models.report import WeatherReport
from weatherfeed.models.time_slot import TimeSlot
from weatherfeed.ports import TimeSource, WeatherSink


class WeatherStore:
    """Holds the reports and bundles of the most recent accepted batch."""

    def __init__(self) -> None:
        self._reports: dict[int, WeatherReport] = {}
        self._bundles: dict[int, WeatherForecastBundle] = {}
        self._latest_report: WeatherReport | None = None
        self._latest_bundle: WeatherForecastBundle | None = None

    def replace(self, result: AcquisitionResult) -> None:
        """Swap in a new batch; the previous one is dropped in full."""
        self._reports = {r.time_slot.serial_number: r for r in result.reports}
        self._bundles = {b.origin_time_slot.serial_number: b for b in result.bundles}
        self._latest_report = result.reports[-1] if result.reports else None
        self._latest_bundle = result.bundles[-1] if result.bundles else None

    def current_report(self, slot: TimeSlot) -> WeatherReport:
        """Report for ``slot``, else the latest stored one."""
        if self._latest_report is None:
            raise EmptyStateError("Weather report store is empty")
        return self._reports.get(slot.serial_number, self._latest_report)

    def current_forecast(self, slot: TimeSlot) -> WeatherForecastBundle:
        """Bundle issued at ``slot``, else the latest stored one."""
        if self._latest_bundle is None:
            raise EmptyStateError("Weather forecast store is empty")
        return self._bundles.get(slot.serial_number, self._latest_bundle)


class Publisher:
    """Emits exactly one report and one forecast bundle per call.

    When nothing has been stored yet, zero-valued placeholders stamped with the
    current slot are published instead.
    """

    def __init__(
        self,
        sink: WeatherSink,
        time_source: TimeSource,
        forecast_horizon: int,
        store: WeatherStore | None = None,
    ) -> None:
        self._sink = sink
        self._time_source = time_source
        self.forecast_horizon = forecast_horizon
        self.store = store if store is not None else WeatherStore()

    def store_result(self, result: AcquisitionResult) -> None:
        self.store.replace(result)

    def publish_report(self) -> WeatherReport:
        slot = self._time_source.current_time_slot()
        try:
            report = self.store.current_report(slot)
        except EmptyStateError:
            get_logger().error("null weather-report!")
            report = WeatherReport.placeholder(slot)
        self._sink.publish_report(report)
        return report

    def publish_forecast(self) -> WeatherForecastBundle:
        slot = self._time_source.current_time_slot()
        try:
            bundle = self.store.current_forecast(slot)
        except EmptyStateError:
            get_logger().error("null weather-forecast!")
            bundle = WeatherForecastBundle.placeholder(slot, self.forecast_horizon)
        self._sink.publish_forecast(bundle)
        return bundle
