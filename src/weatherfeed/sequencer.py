"""Time slot cursor for records that carry no absolute slot on the wire."""

from __future__ import annotations

from weatherfeed.models.time_slot import TimeSlot
from weatherfeed.ports import TimeSource


class TimeslotSequencer:
    """Stepping cursor over simulation time slots.

    The cursor is seeded from the host's current slot by :meth:`reset` at the
    start of every fetch cycle and moves forward one slot per consumed report.

    Usage:
        seq = TimeslotSequencer(clock)
        seq.reset()
        slot = seq.take()   # current slot; cursor now on the next one
    """

    def __init__(self, time_source: TimeSource) -> None:
        self._time_source = time_source
        self._cursor: TimeSlot | None = None
        self._steps = 0

    def __repr__(self) -> str:
        cursor = None if self._cursor is None else self._cursor.serial_number
        return f"TimeslotSequencer(cursor={cursor}, steps={self._steps})"

    @property
    def steps(self) -> int:
        """Number of advances since the last reset."""
        return self._steps

    def reset(self) -> TimeSlot:
        self._cursor = self._time_source.current_time_slot()
        self._steps = 0
        return self._cursor

    def snapshot(self) -> TimeSlot:
        if self._cursor is None:
            return self.reset()
        return self._cursor

    def advance(self) -> TimeSlot:
        self._cursor = self._time_source.next_time_slot(self.snapshot())
        self._steps += 1
        return self._cursor

    def take(self) -> TimeSlot:
        """Return the current slot and step past it."""
        slot = self.snapshot()
        self.advance()
        return slot
