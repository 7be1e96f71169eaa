"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from weatherfeed.config import DEFAULT_TIMEOUT
from weatherfeed.exceptions import (
    WeatherServerAPIError,
    WeatherServerConnectionError,
    WeatherServerTimeoutError,
)


def _raise_for_status(response: httpx.Response) -> None:
    if response.status_code >= 400:
        raise WeatherServerAPIError(
            status_code=response.status_code,
            message=response.text,
        )


class SyncTransport:
    """Synchronous HTTP transport using httpx.Client.

    Every request is bounded by ``timeout``; failures map onto the
    weather server exceptions and are never retried.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._client = httpx.Client(
            timeout=timeout,
            headers={"Accept": "application/xml, text/plain"},
        )

    def get_text(self, url: str, params: list[tuple[str, str]]) -> str:
        """Perform a GET request and return the response body."""
        try:
            response = self._client.get(url, params=params)
        except httpx.ConnectError as exc:
            raise WeatherServerConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise WeatherServerTimeoutError(str(exc)) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise WeatherServerConnectionError(str(exc)) from exc
        _raise_for_status(response)
        return response.text

    @contextmanager
    def stream_lines(self, url: str) -> Iterator[Iterator[str]]:
        """Stream a text resource line by line; the response is closed on exit."""
        try:
            with self._client.stream("GET", url) as response:
                if response.status_code >= 400:
                    response.read()
                    _raise_for_status(response)
                yield response.iter_lines()
        except httpx.ConnectError as exc:
            raise WeatherServerConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise WeatherServerTimeoutError(str(exc)) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise WeatherServerConnectionError(str(exc)) from exc

    def close(self) -> None:
        self._client.close()
