"""Shared test fixtures and sample weather payloads."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

import weatherfeed._logging as weather_logging
from weatherfeed.clock import HourlyClock
from weatherfeed.sinks import RecordingSink

SERVER_URL = "http://weather.example/WeatherServer/faces/index.xhtml"
BASE = datetime(2009, 3, 15, tzinfo=timezone.utc)


SAMPLE_REPORT_ATTRS = {
    "temp": "5.5",
    "windspeed": "4.2",
    "winddir": "230.0",
    "cloudcover": "0.75",
    "location": "rotterdam",
    "date": "2009-03-15 00:00",
}

SAMPLE_FORECAST_ATTRS = {
    "id": "3",
    "temp": "6.1",
    "windspeed": "3.9",
    "winddir": "225.0",
    "cloudcover": "0.5",
    "location": "rotterdam",
    "origin": "2009-03-15 00:00",
    "date": "2009-03-15 03:00",
}


def label(instant: datetime) -> str:
    return instant.strftime("%Y-%m-%d %H:00")


def _report_xml(instant: datetime, temp: float) -> str:
    return (
        f'<weatherReport temp="{temp}" windspeed="4.0" winddir="180.0" '
        f'cloudcover="0.5" location="rotterdam" date="{label(instant)}"/>'
    )


def _forecast_xml(origin: datetime, offset: int, temp: float) -> str:
    target = origin + timedelta(hours=offset)
    return (
        f'<weatherForecast id="{offset}" temp="{temp}" windspeed="3.0" '
        f'winddir="90.0" cloudcover="0.25" location="rotterdam" '
        f'origin="{label(origin)}" date="{label(target)}"/>'
    )


def make_data_xml(
    reports: int,
    horizon: int,
    start: datetime = BASE,
    offsets: list[int] | None = None,
) -> str:
    """A weather-server style document: ``reports`` reports, ``horizon`` forecasts each.

    Report ``k`` has temperature ``k``; its forecasts have temperature
    ``100 * k + offset``.
    """
    report_lines = [
        _report_xml(start + timedelta(hours=k), float(k)) for k in range(reports)
    ]
    forecast_lines = []
    for k in range(reports):
        origin = start + timedelta(hours=k)
        for offset in offsets or range(1, horizon + 1):
            forecast_lines.append(_forecast_xml(origin, offset, float(100 * k + offset)))
    return (
        "<data><weatherReports>"
        + "".join(report_lines)
        + "</weatherReports><weatherForecasts>"
        + "".join(forecast_lines)
        + "</weatherForecasts></data>"
    )


def make_archive_xml(hours: int, horizon: int, start: datetime = BASE) -> str:
    """An archive covering ``hours`` consecutive hourly reports and their forecasts."""
    return make_data_xml(hours, horizon, start=start)


REPORT_TYPE = "org.powertac.common.WeatherReport"
FORECAST_TYPE = "org.powertac.common.WeatherForecastPrediction"


def make_state_log(
    reports: int,
    horizon: int,
    first_stamp: int = 100,
    first_slot: int = 0,
) -> tuple[str, int]:
    """State log lines for ``reports`` reports, each followed by its forecasts.

    Returns the log text and the next unused stamp.
    """
    lines = ["0:org.powertac.common.Competition::1::new::default"]
    stamp = first_stamp
    for k in range(reports):
        lines.append(
            f"{k}:{REPORT_TYPE}::{stamp}::new::{first_slot + k}::{float(k)}::4.0::180.0::0.5"
        )
        stamp += 1
        for offset in range(1, horizon + 1):
            lines.append(
                f"{k}:{FORECAST_TYPE}::{stamp}::new::{offset}::"
                f"{float(100 * k + offset)}::3.0::90.0::0.25"
            )
            stamp += 1
    return "\n".join(lines) + "\n", stamp


@pytest.fixture(autouse=True)
def _acquisition_log(tmp_path):
    """Redirect the acquisition log to tmp_path and reset the cached logger."""
    old_logger = weather_logging._logger
    old_dir = weather_logging._LOG_DIR
    old_file = weather_logging._LOG_FILE

    named_logger = logging.getLogger(weather_logging.LOGGER_NAME)
    named_logger.handlers.clear()

    log_dir = tmp_path / "logs"
    weather_logging._logger = None
    weather_logging._LOG_DIR = str(log_dir)
    weather_logging._LOG_FILE = str(log_dir / "acquisition.log")

    yield log_dir / "acquisition.log"

    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
    weather_logging._logger = old_logger
    weather_logging._LOG_DIR = old_dir
    weather_logging._LOG_FILE = old_file


@pytest.fixture
def acquisition_log(_acquisition_log):
    return _acquisition_log


@pytest.fixture
def clock() -> HourlyClock:
    return HourlyClock(BASE)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
