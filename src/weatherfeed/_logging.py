"""Acquisition logging for weather sources and service ticks."""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from typing import Any, Callable, TypeVar

from weatherfeed.models.batch import AcquisitionBatch, AcquisitionResult, SourceMode

F = TypeVar("F", bound=Callable[..., Any])

LOGGER_NAME = "weatherfeed.acquisition"

_LOG_DIR = os.environ.get("WEATHERFEED_LOG_DIR", os.path.join(os.getcwd(), "logs"))
_LOG_FILE = os.path.join(_LOG_DIR, "acquisition.log")

_logger: logging.Logger | None = None
_logger_lock = threading.Lock()


def _has_log_file(logger: logging.Logger, path: str) -> bool:
    target = os.path.abspath(path)
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == target
        for h in logger.handlers
    )


def get_logger() -> logging.Logger:
    """Return the acquisition logger, attaching the log file handler on first use.

    Other handlers on the logger (test capture, host handlers) do not stand in
    for the acquisition log file.
    """
    global _logger
    if _logger is not None and _has_log_file(_logger, _LOG_FILE):
        return _logger

    with _logger_lock:
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        if not _has_log_file(logger, _LOG_FILE):
            os.makedirs(_LOG_DIR, exist_ok=True)
            handler = logging.FileHandler(_LOG_FILE, encoding="utf-8")
            handler.setFormatter(
                logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"),
            )
            logger.addHandler(handler)
        _logger = logger

    return _logger


def _call_summary(fn: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    # args[0] is the bound instance
    parts = [repr(a) for a in args[1:]]
    parts += [f"{k}={v!r}" for k, v in kwargs.items()]
    return f"{fn.__qualname__}({', '.join(parts)})"


def _outcome(result: Any) -> str:
    if isinstance(result, AcquisitionResult):
        return (
            f"{len(result.reports)} reports, {len(result.bundles)} bundles "
            f"via {result.source.value}"
        )
    if isinstance(result, AcquisitionBatch):
        return f"{len(result.reports)} reports, {len(result.predictions)} predictions"
    if isinstance(result, str):
        return f"{len(result)} chars of XML"
    if result is None:
        return "no new weather data"
    return type(result).__name__


def _timed(fn: F, tag: str) -> F:
    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger()
        call = _call_summary(fn, args, kwargs)
        logger.info("%s CALL: %s", tag, call)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            logger.error(
                "%s FAIL: %s -> %s: %s (%.3fs)",
                tag, call, type(exc).__name__, exc, time.monotonic() - start,
            )
            raise
        logger.info(
            "%s OK: %s -> %s (%.3fs)",
            tag, call, _outcome(result), time.monotonic() - start,
        )
        return result

    return wrapper  # type: ignore[return-value]


def log_source_call(mode: SourceMode) -> Callable[[F], F]:
    """Decorator factory logging attempts of the ``mode`` weather source."""

    def decorator(fn: F) -> F:
        return _timed(fn, f"[{mode.value}]")

    return decorator


def log_tick(fn: F) -> F:
    """Decorator that logs one service tick and what it acquired."""
    return _timed(fn, "TICK")
