"""Live weather server source."""

from __future__ import annotations

from weatherfeed._dates import date_key
from weatherfeed._http import SyncTransport
from weatherfeed._logging import get_logger, log_source_call
from weatherfeed.models.batch import SourceMode
from weatherfeed.models.time_slot import TimeSlot


class WebFetcher:
    """Fetches one day of reports and forecasts from the weather server.

    Usage:
        fetcher = WebFetcher(transport, "http://weather.example/WeatherServer")
        xml = fetcher.fetch(clock.current_time_slot(), "rotterdam")
    """

    def __init__(self, transport: SyncTransport, server_url: str) -> None:
        self._transport = transport
        self.server_url = server_url

    @log_source_call(SourceMode.WEB)
    def fetch(self, slot: TimeSlot, location: str) -> str:
        """GET ``server_url?weatherDate=YYYYMMDDHH&weatherLocation=<location>``."""
        query_date = date_key(slot)
        get_logger().info("Query datetime value for REST call: %s", query_date)
        return self._transport.get_text(
            self.server_url,
            [("weatherDate", query_date), ("weatherLocation", location)],
        )
