"""Simulation time slot model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TimeSlot(BaseModel):
    """One discrete simulation time slot, identified by its serial number."""

    model_config = ConfigDict(frozen=True)

    serial_number: int
    start_instant: datetime
