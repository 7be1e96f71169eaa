"""Date keys used on the wire and in weather archives."""

from __future__ import annotations

from weatherfeed.models.time_slot import TimeSlot


def date_key(slot: TimeSlot) -> str:
    """Compact query key for the weather server, e.g. ``2009031500``."""
    start = slot.start_instant
    return f"{start.year:04d}{start.month:02d}{start.day:02d}{start.hour % 24:02d}"


def date_label(slot: TimeSlot) -> str:
    """Archive date label, e.g. ``2009-03-15 00:00``.

    Labels of this form sort lexicographically in time order.
    """
    start = slot.start_instant
    return f"{start.year:04d}-{start.month:02d}-{start.day:02d} {start.hour % 24:02d}:00"
