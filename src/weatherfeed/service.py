"""Weather service: per-tick source selection, normalization and publication."""

from __future__ import annotations

from collections.abc import Callable

from weatherfeed._http import SyncTransport
from weatherfeed._logging import get_logger, log_tick
from weatherfeed.bundler import ForecastBundler
from weatherfeed.config import WeatherServiceConfig
from weatherfeed.decoder import XmlDecoder
from weatherfeed.exceptions import WeatherFeedError
from weatherfeed.models.batch import AcquisitionBatch, AcquisitionResult, SourceMode
from weatherfeed.ports import TimeSource, WeatherSink
from weatherfeed.publisher import Publisher
from weatherfeed.sequencer import TimeslotSequencer
from weatherfeed.sources.archive import XmlWindowExtractor
from weatherfeed.sources.state_log import StateLogExtractor
from weatherfeed.sources.web import WebFetcher


class WeatherService:
    """Acquires, normalizes and publishes weather data once per tick.

    Every ``weather_req_interval`` hours of simulated time the service fetches
    a batch from the configured source, falling back to the weather server,
    and publishes one report and one forecast bundle on every tick.

    Usage:
        with WeatherService(config, clock, sink) as service:
            service.activate(clock.current_wall_clock_millis())

    Ticks must be serialized by the caller.
    """

    def __init__(
        self,
        config: WeatherServiceConfig,
        time_source: TimeSource,
        sink: WeatherSink,
        transport: SyncTransport | None = None,
    ) -> None:
        self.config = config
        self._time_source = time_source
        self._owns_transport = transport is None
        self._transport = transport or SyncTransport(timeout=config.fetch_timeout)

        interval = config.weather_req_interval
        horizon = config.forecast_horizon
        self.sequencer = TimeslotSequencer(time_source)
        self.decoder = XmlDecoder(interval, horizon)
        self.bundler = ForecastBundler(horizon)
        self.web_fetcher = WebFetcher(self._transport, config.server_url)
        self.archive_extractor = XmlWindowExtractor(interval, horizon, time_source)
        self.state_log_extractor = StateLogExtractor(interval, horizon, self._transport)
        self.publisher = Publisher(sink, time_source, horizon)

        if not config.blocking:
            get_logger().warning(
                "Non-blocking weather requests are not supported; fetching synchronously."
            )

    def __enter__(self) -> WeatherService:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP transport if this service created it."""
        if self._owns_transport:
            self._transport.close()

    # ── Acquisition ────────────────────────────────────────────

    def is_fetch_due(self, now_millis: int) -> bool:
        return now_millis % self.config.poll_interval_millis == 0

    def _from_archive(self) -> AcquisitionBatch:
        anchor = self.sequencer.reset()
        raw = self.archive_extractor.extract(self.config.weather_data, anchor)
        self.sequencer.reset()
        return self.decoder.decode(raw, self.sequencer)

    def _from_state_log(self) -> AcquisitionBatch:
        self.sequencer.reset()
        batch = self.state_log_extractor.extract(self.config.weather_data, self.sequencer)
        return self.decoder.validate(batch)

    def _from_web(self) -> AcquisitionBatch:
        slot = self.sequencer.reset()
        raw = self.web_fetcher.fetch(slot, self.config.weather_location)
        self.sequencer.reset()
        return self.decoder.decode(raw, self.sequencer)

    def _attempts(self) -> list[tuple[SourceMode, Callable[[], AcquisitionBatch]]]:
        attempts: list[tuple[SourceMode, Callable[[], AcquisitionBatch]]] = []
        mode = self.config.source_mode
        if mode is SourceMode.ARCHIVE:
            attempts.append((SourceMode.ARCHIVE, self._from_archive))
        elif mode is SourceMode.STATE_LOG:
            attempts.append((SourceMode.STATE_LOG, self._from_state_log))
        attempts.append((SourceMode.WEB, self._from_web))
        return attempts

    def _normalize(self, source: SourceMode, batch: AcquisitionBatch) -> AcquisitionResult:
        origins = [report.time_slot for report in batch.reports]
        bundles = self.bundler.bundle(batch.predictions, origins)
        return AcquisitionResult(source=source, reports=batch.reports, bundles=tuple(bundles))

    def poll(self, now_millis: int) -> AcquisitionResult | None:
        """Fetch a batch if one is due at ``now_millis``.

        Sources are tried in priority order and the first valid batch is
        stored for publication and returned. Returns None when no fetch is due
        or every source failed; previously stored data then stays current.
        """
        logger = get_logger()
        if not self.is_fetch_due(now_millis):
            logger.info("WeatherService reports not time to grab weather data.")
            return None

        logger.info(
            "Timeslot %d WeatherService reports time to make request for weather data",
            self._time_source.current_time_slot().serial_number,
        )
        for source, attempt in self._attempts():
            try:
                result = self._normalize(source, attempt())
            except WeatherFeedError as exc:
                logger.error(
                    "Unable to get weather from weather %s: %s: %s",
                    source.value, type(exc).__name__, exc,
                )
                continue

            logger.debug("Got data via a %s request", source.value)
            self.publisher.store_result(result)
            logger.info(
                "%d WeatherReports and %d WeatherForecasts fetched from %s",
                len(result.reports), len(result.bundles), source.value,
            )
            return result

        logger.error("No weather data acquired; keeping previously published values")
        return None

    # ── Ticks ──────────────────────────────────────────────────

    @log_tick
    def activate(self, now_millis: int) -> AcquisitionResult | None:
        """Run one tick: poll, then publish one report and one forecast."""
        result = self.poll(now_millis)
        self.publisher.publish_report()
        self.publisher.publish_forecast()
        return result

    def tick(self) -> AcquisitionResult | None:
        """Run one tick at the host's current wall-clock time."""
        return self.activate(self._time_source.current_wall_clock_millis())
