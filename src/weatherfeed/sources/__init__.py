"""Weather data sources: local archive, incremental state log, live server."""

from weatherfeed.sources.archive import XmlWindowExtractor
from weatherfeed.sources.state_log import StateLogExtractor
from weatherfeed.sources.web import WebFetcher

__all__ = [
    "StateLogExtractor",
    "WebFetcher",
    "XmlWindowExtractor",
]
