"""Incremental extraction from an append-only simulation state log."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError

from weatherfeed._http import SyncTransport
from weatherfeed._logging import log_source_call
from weatherfeed.exceptions import MalformedBatchError, SourceUnavailableError
from weatherfeed.models.batch import AcquisitionBatch, SourceMode
from weatherfeed.models.forecast import WeatherForecastPrediction
from weatherfeed.models.report import WeatherReport
from weatherfeed.sequencer import TimeslotSequencer

REPORT_TYPE = "org.powertac.common.WeatherReport"
FORECAST_TYPE = "org.powertac.common.WeatherForecastPrediction"
FIELD_SEPARATOR = "::"


def _metrics(fields: list[str]) -> dict[str, float]:
    try:
        return {
            "temperature": float(fields[4]),
            "wind_speed": float(fields[5]),
            "wind_direction": float(fields[6]),
            "cloud_cover": float(fields[7]),
        }
    except (IndexError, ValueError) as exc:
        raise MalformedBatchError(f"Bad weather fields in state log: {fields!r}") from exc


class StateLogExtractor:
    """Reads new weather records from a growing state log.

    Each relevant line looks like
    ``<n>:org.powertac.common.WeatherReport::<stamp>::new::<slot>::<temp>::<windspeed>::<winddir>::<cloudcover>``;
    forecast lines carry the offset index in the fourth field instead of the
    slot. Lines whose stamp is at or below :attr:`last_stamp` were consumed by an
    earlier call and are skipped.
    """

    def __init__(
        self,
        request_interval: int,
        forecast_horizon: int,
        transport: SyncTransport | None = None,
    ) -> None:
        self.request_interval = request_interval
        self.forecast_horizon = forecast_horizon
        self._transport = transport
        self.last_stamp = 0

    @contextmanager
    def _open_lines(self, source: str) -> Iterator[Iterator[str]]:
        if source.startswith(("http://", "https://")):
            if self._transport is None:
                raise SourceUnavailableError(f"No HTTP transport for state log {source}")
            with self._transport.stream_lines(source) as lines:
                yield lines
            return

        scheme, separator, rest = source.partition("://")
        if source.startswith("file:") and not separator:
            path = source[len("file:"):]
        elif not separator:
            path = source
        elif scheme == "file":
            path = rest
        else:
            raise SourceUnavailableError(f"Unsupported state log location {source}")

        try:
            handle = open(path, encoding="utf-8")
        except OSError as exc:
            raise SourceUnavailableError(f"Cannot open state log {path}: {exc}") from exc
        with handle:
            try:
                yield handle
            except UnicodeDecodeError as exc:
                raise MalformedBatchError(f"State log {path} is not valid UTF-8: {exc}") from exc

    @log_source_call(SourceMode.STATE_LOG)
    def extract(self, source: str, sequencer: TimeslotSequencer) -> AcquisitionBatch:
        """Collect unseen reports and forecasts until R*H forecasts are read.

        Reports are stamped from ``sequencer``. Once ``forecast_horizon``
        reports have been read, every further consumed line moves the replay
        cursor to its stamp. The returned batch is not count-checked here.
        """
        horizon = self.forecast_horizon
        wanted = self.request_interval * horizon
        reports: list[WeatherReport] = []
        predictions: list[WeatherForecastPrediction] = []

        with self._open_lines(source) as lines:
            for line in lines:
                is_report = REPORT_TYPE in line
                if not is_report and FORECAST_TYPE not in line:
                    continue

                fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
                try:
                    stamp = int(fields[1])
                except (IndexError, ValueError) as exc:
                    raise MalformedBatchError(f"Bad stamp in state log line {line!r}") from exc
                if stamp <= self.last_stamp:
                    continue

                try:
                    if is_report:
                        reports.append(
                            WeatherReport(time_slot=sequencer.take(), **_metrics(fields))
                        )
                    else:
                        predictions.append(
                            WeatherForecastPrediction(
                                offset_index=int(fields[3]), **_metrics(fields)
                            )
                        )
                except (IndexError, ValueError, ValidationError) as exc:
                    raise MalformedBatchError(f"Bad state log line {line!r}: {exc}") from exc

                # NOTE: threshold is the horizon, not the request interval
                if len(reports) == horizon:
                    self.last_stamp = stamp
                if len(predictions) == wanted:
                    break

        return AcquisitionBatch(reports=tuple(reports), predictions=tuple(predictions))
