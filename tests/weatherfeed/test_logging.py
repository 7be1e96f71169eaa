"""Tests for weatherfeed._logging: decorators and file logging."""

from __future__ import annotations

import logging

import pytest

import weatherfeed._logging as mod
from weatherfeed._logging import get_logger, log_source_call, log_tick
from weatherfeed.models import (
    AcquisitionBatch,
    AcquisitionResult,
    SourceMode,
    WeatherForecastBundle,
    WeatherReport,
)
from weatherfeed.sinks import LoggingSink


class _FakeSource:
    """Minimal class to test logging decorators."""

    @log_source_call(SourceMode.STATE_LOG)
    def extract(self, source: str) -> AcquisitionBatch:
        return AcquisitionBatch()

    @log_source_call(SourceMode.WEB)
    def fetch(self, location: str) -> str:
        return "<data/>"

    @log_source_call(SourceMode.ARCHIVE)
    def extract_failing(self, source: str, anchor: int = 0) -> AcquisitionBatch:
        raise ValueError("test error")

    @log_tick
    def activate(self, now: int) -> AcquisitionResult | None:
        return None

    @log_tick
    def activate_with_data(self, now: int) -> AcquisitionResult:
        return AcquisitionResult(source=SourceMode.WEB, reports=(), bundles=())

    @log_tick
    def activate_failing(self, now: int) -> None:
        raise RuntimeError("tick error")


@pytest.fixture
def fake_source() -> _FakeSource:
    return _FakeSource()


class TestLogSourceCall:
    def test_returns_result(self, fake_source: _FakeSource) -> None:
        assert fake_source.fetch("rotterdam") == "<data/>"

    def test_logs_call_and_ok(self, fake_source: _FakeSource, acquisition_log) -> None:
        fake_source.extract("game-1.state")
        content = acquisition_log.read_text()
        assert "[state file] CALL: _FakeSource.extract('game-1.state')" in content
        assert (
            "[state file] OK: _FakeSource.extract('game-1.state') -> 0 reports, 0 predictions"
            in content
        )

    def test_raw_xml_counted_in_chars(self, fake_source: _FakeSource, acquisition_log) -> None:
        fake_source.fetch("rotterdam")
        assert "[web] OK: _FakeSource.fetch('rotterdam') -> 7 chars of XML" in acquisition_log.read_text()

    def test_logs_failure(self, fake_source: _FakeSource, acquisition_log) -> None:
        with pytest.raises(ValueError, match="test error"):
            fake_source.extract_failing("weather.xml", anchor=3)
        content = acquisition_log.read_text()
        assert (
            "[xml file] FAIL: _FakeSource.extract_failing('weather.xml', anchor=3)"
            " -> ValueError: test error"
        ) in content

    def test_preserves_function_name(self, fake_source: _FakeSource) -> None:
        assert fake_source.extract.__name__ == "extract"


class TestLogTick:
    def test_logs_tick(self, fake_source: _FakeSource, acquisition_log) -> None:
        fake_source.activate(0)
        content = acquisition_log.read_text()
        assert "TICK CALL: _FakeSource.activate(0)" in content
        assert "TICK OK: _FakeSource.activate(0) -> no new weather data" in content

    def test_logs_acquired_counts(self, fake_source: _FakeSource, acquisition_log) -> None:
        fake_source.activate_with_data(0)
        assert "-> 0 reports, 0 bundles via web" in acquisition_log.read_text()

    def test_logs_tick_failure(self, fake_source: _FakeSource, acquisition_log) -> None:
        with pytest.raises(RuntimeError, match="tick error"):
            fake_source.activate_failing(0)
        content = acquisition_log.read_text()
        assert "TICK FAIL: _FakeSource.activate_failing(0) -> RuntimeError: tick error" in content

    def test_creates_log_directory(self, tmp_path) -> None:
        """Log directory is created on first use."""
        new_dir = tmp_path / "nested" / "logs"
        mod._LOG_DIR = str(new_dir)
        mod._LOG_FILE = str(new_dir / "acquisition.log")
        mod._logger = None
        logging.getLogger(mod.LOGGER_NAME).handlers.clear()

        _FakeSource().activate(0)

        assert (new_dir / "acquisition.log").exists()


class TestGetLogger:
    def test_file_handler_added_beside_foreign_handler(
        self, fake_source: _FakeSource, acquisition_log,
    ) -> None:
        named = logging.getLogger(mod.LOGGER_NAME)
        named.addHandler(logging.NullHandler())

        fake_source.activate(0)

        assert "TICK CALL" in acquisition_log.read_text()
        file_handlers = [h for h in named.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

    def test_file_handler_added_once(self) -> None:
        first = get_logger()
        second = get_logger()
        assert first is second
        file_handlers = [h for h in first.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1


class TestLoggingSink:
    def test_publish_lines(self, clock, acquisition_log) -> None:
        sink = LoggingSink()
        slot = clock.current_time_slot()
        sink.publish_report(WeatherReport.placeholder(slot))
        sink.publish_forecast(WeatherForecastBundle.placeholder(slot, 24))
        content = acquisition_log.read_text()
        assert "PUBLISH report slot=0 temp=0.0" in content
        assert "PUBLISH forecast origin=0 predictions=24" in content
