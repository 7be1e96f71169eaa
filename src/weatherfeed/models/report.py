"""Weather report model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from weatherfeed.models.time_slot import TimeSlot


class WeatherReport(BaseModel):
    """Observed weather for a single time slot."""

    model_config = ConfigDict(frozen=True)

    time_slot: TimeSlot
    temperature: float
    wind_speed: float
    wind_direction: float
    cloud_cover: float

    @classmethod
    def placeholder(cls, time_slot: TimeSlot) -> WeatherReport:
        """Zero-valued report used when nothing has been acquired yet."""
        return cls(
            time_slot=time_slot,
            temperature=0.0,
            wind_speed=0.0,
            wind_direction=0.0,
            cloud_cover=0.0,
        )
