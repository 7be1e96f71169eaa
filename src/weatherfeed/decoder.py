"""Decoding of attribute-bearing weather XML into typed records."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping

from weatherfeed.exceptions import MalformedBatchError
from weatherfeed.models.batch import AcquisitionBatch
from weatherfeed.models.forecast import WeatherForecastPrediction
from weatherfeed.models.report import WeatherReport
from weatherfeed.models.time_slot import TimeSlot
from weatherfeed.sequencer import TimeslotSequencer

ROOT_TAG = "data"
REPORTS_TAG = "weatherReports"
REPORT_TAG = "weatherReport"
FORECASTS_TAG = "weatherForecasts"
FORECAST_TAG = "weatherForecast"


def _float(attrs: Mapping[str, str], name: str) -> float:
    raw = attrs.get(name)
    if raw is None:
        raise MalformedBatchError(f"Missing attribute {name!r}")
    try:
        return float(raw)
    except ValueError as exc:
        raise MalformedBatchError(f"Attribute {name!r} is not a number: {raw!r}") from exc


def decode_report(attrs: Mapping[str, str], time_slot: TimeSlot) -> WeatherReport:
    """Build a report stamped with ``time_slot`` from its XML attributes."""
    return WeatherReport(
        time_slot=time_slot,
        temperature=_float(attrs, "temp"),
        wind_speed=_float(attrs, "windspeed"),
        wind_direction=_float(attrs, "winddir"),
        cloud_cover=_float(attrs, "cloudcover"),
    )


def decode_prediction(attrs: Mapping[str, str]) -> WeatherForecastPrediction:
    """Build a prediction whose offset comes verbatim from the ``id`` attribute."""
    raw_id = attrs.get("id")
    try:
        offset = int(raw_id) if raw_id is not None else None
    except ValueError as exc:
        raise MalformedBatchError(f"Forecast id is not an integer: {raw_id!r}") from exc
    if offset is None or offset < 1:
        raise MalformedBatchError(f"Invalid forecast id: {raw_id!r}")
    return WeatherForecastPrediction(
        offset_index=offset,
        temperature=_float(attrs, "temp"),
        wind_speed=_float(attrs, "windspeed"),
        wind_direction=_float(attrs, "winddir"),
        cloud_cover=_float(attrs, "cloudcover"),
    )


class XmlDecoder:
    """Turns a ``<data>`` document into a validated :class:`AcquisitionBatch`.

    A batch is accepted only if it holds exactly ``request_interval`` reports
    and ``request_interval * forecast_horizon`` predictions; anything else is
    rejected in full.
    """

    def __init__(self, request_interval: int, forecast_horizon: int) -> None:
        self.request_interval = request_interval
        self.forecast_horizon = forecast_horizon

    def validate(self, batch: AcquisitionBatch) -> AcquisitionBatch:
        if not batch.matches(self.request_interval, self.forecast_horizon):
            raise MalformedBatchError(
                f"Expected {self.request_interval} reports and "
                f"{self.request_interval * self.forecast_horizon} forecasts, got "
                f"{len(batch.reports)} and {len(batch.predictions)}"
            )
        return batch

    def decode(self, raw_xml: str, sequencer: TimeslotSequencer) -> AcquisitionBatch:
        """Parse ``raw_xml``, stamping reports from ``sequencer`` in document order."""
        try:
            root = ET.fromstring(raw_xml)
        except ET.ParseError as exc:
            raise MalformedBatchError(f"Unparseable weather XML: {exc}") from exc
        if root.tag != ROOT_TAG:
            raise MalformedBatchError(f"Unexpected root element <{root.tag}>")

        reports = [
            decode_report(element.attrib, sequencer.take())
            for element in root.iterfind(f"{REPORTS_TAG}/{REPORT_TAG}")
        ]
        predictions = [
            decode_prediction(element.attrib)
            for element in root.iterfind(f"{FORECASTS_TAG}/{FORECAST_TAG}")
        ]
        return self.validate(
            AcquisitionBatch(reports=tuple(reports), predictions=tuple(predictions))
        )
