"""In-process simulation clock with one-hour time slots."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from weatherfeed.models.time_slot import TimeSlot
from weatherfeed.ports import TimeSource

SLOT_LENGTH = timedelta(hours=1)


class HourlyClock(TimeSource):
    """Hourly simulation clock starting at ``base``.

    Usage:
        clock = HourlyClock(datetime(2009, 3, 15, tzinfo=timezone.utc))
        clock.current_time_slot()   # serial 0, 2009-03-15 00:00
        clock.advance()
        clock.current_time_slot()   # serial 1, 2009-03-15 01:00
    """

    def __init__(self, base: datetime, first_serial: int = 0) -> None:
        if base.tzinfo is None:
            base = base.replace(tzinfo=timezone.utc)
        self._base = base
        self._first_serial = first_serial
        self._now = base

    @property
    def now(self) -> datetime:
        return self._now

    def set_time(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        if instant < self._base:
            raise ValueError(f"{instant} is before the clock base {self._base}")
        self._now = instant

    def advance(self, slots: int = 1) -> None:
        self._now += SLOT_LENGTH * slots

    def _slot(self, serial: int) -> TimeSlot:
        offset = serial - self._first_serial
        return TimeSlot(serial_number=serial, start_instant=self._base + SLOT_LENGTH * offset)

    def current_time_slot(self) -> TimeSlot:
        elapsed = int((self._now - self._base) // SLOT_LENGTH)
        return self._slot(self._first_serial + elapsed)

    def next_time_slot(self, slot: TimeSlot) -> TimeSlot:
        return self._slot(slot.serial_number + 1)

    def current_wall_clock_millis(self) -> int:
        return int(self._now.timestamp() * 1000)
