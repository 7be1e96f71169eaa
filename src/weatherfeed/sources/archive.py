"""Windowed extraction from a weather archive covering a whole run."""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET

from weatherfeed._dates import date_label
from weatherfeed._logging import log_source_call
from weatherfeed.decoder import (
    FORECAST_TAG,
    FORECASTS_TAG,
    REPORT_TAG,
    REPORTS_TAG,
    ROOT_TAG,
)
from weatherfeed.exceptions import MalformedBatchError, SourceUnavailableError
from weatherfeed.models.batch import SourceMode
from weatherfeed.models.time_slot import TimeSlot
from weatherfeed.ports import TimeSource


class XmlWindowExtractor:
    """Cuts a ``request_interval``-report window out of a weather archive.

    The archive is a ``<data>`` document whose ``weatherReports`` and
    ``weatherForecasts`` collections span an entire run. The window starts at
    the first report dated at or after the anchor slot; forecasts are picked
    by their ``origin`` attribute, one anchor slot at a time.
    """

    def __init__(
        self,
        request_interval: int,
        forecast_horizon: int,
        time_source: TimeSource,
    ) -> None:
        self.request_interval = request_interval
        self.forecast_horizon = forecast_horizon
        self._time_source = time_source

    def _load(self, archive_path: str | os.PathLike[str]) -> ET.Element:
        try:
            return ET.parse(archive_path).getroot()
        except ET.ParseError as exc:
            raise MalformedBatchError(f"Unparseable weather archive {archive_path}: {exc}") from exc
        except OSError as exc:
            raise SourceUnavailableError(f"Cannot read weather archive {archive_path}: {exc}") from exc

    def _find_reports(self, root: ET.Element, start_label: str) -> list[ET.Element]:
        found: list[ET.Element] = []
        for collection in root.iterfind(REPORTS_TAG):
            for report in collection.iterfind(REPORT_TAG):
                # Labels are zero-padded, so string order is time order
                if report.get("date", "") < start_label:
                    continue
                found.append(report)
                if len(found) == self.request_interval:
                    return found
        return found

    def _find_forecasts(self, root: ET.Element, origin_label: str) -> list[ET.Element]:
        found: list[ET.Element] = []
        for collection in root.iterfind(FORECASTS_TAG):
            for forecast in collection.iterfind(FORECAST_TAG):
                if forecast.get("origin") != origin_label:
                    continue
                found.append(forecast)
                if len(found) == self.forecast_horizon:
                    return found
        return found

    @log_source_call(SourceMode.ARCHIVE)
    def extract(self, archive_path: str | os.PathLike[str], anchor: TimeSlot) -> str:
        """Return a ``<data>`` document holding the window that starts at ``anchor``.

        Raises:
            SourceUnavailableError: If the archive cannot be read.
            MalformedBatchError: If the archive is not XML or the window does not
                hold exactly R reports and R*H forecasts.
        """
        root = self._load(archive_path)

        reports = self._find_reports(root, date_label(anchor))

        forecasts: list[ET.Element] = []
        origin = anchor
        for _ in range(self.request_interval):
            forecasts.extend(self._find_forecasts(root, date_label(origin)))
            origin = self._time_source.next_time_slot(origin)

        expected = self.request_interval * self.forecast_horizon
        if len(reports) != self.request_interval or len(forecasts) != expected:
            raise MalformedBatchError(
                f"Archive window at {date_label(anchor)} has {len(reports)} reports and "
                f"{len(forecasts)} forecasts, expected {self.request_interval} and {expected}"
            )

        window = ET.Element(ROOT_TAG)
        reports_element = ET.SubElement(window, REPORTS_TAG)
        for report in reports:
            ET.SubElement(reports_element, REPORT_TAG, dict(report.attrib))
        forecasts_element = ET.SubElement(window, FORECASTS_TAG)
        for forecast in forecasts:
            ET.SubElement(forecasts_element, FORECAST_TAG, dict(forecast.attrib))
        return ET.tostring(window, encoding="unicode")
