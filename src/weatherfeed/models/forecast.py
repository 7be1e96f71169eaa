"""Weather forecast models (single predictions and per-origin bundles)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from weatherfeed.models.time_slot import TimeSlot


class WeatherForecastPrediction(BaseModel):
    """Forecast for the slot ``offset_index`` hours after its origin."""

    model_config = ConfigDict(frozen=True)

    offset_index: int = Field(ge=1)
    temperature: float
    wind_speed: float
    wind_direction: float
    cloud_cover: float


class WeatherForecastBundle(BaseModel):
    """All predictions issued at one origin time slot, ordered by offset."""

    model_config = ConfigDict(frozen=True)

    origin_time_slot: TimeSlot
    predictions: tuple[WeatherForecastPrediction, ...]

    @field_validator("predictions")
    @classmethod
    def _order_by_offset(
        cls, value: tuple[WeatherForecastPrediction, ...],
    ) -> tuple[WeatherForecastPrediction, ...]:
        return tuple(sorted(value, key=lambda p: p.offset_index))

    @property
    def horizon(self) -> int:
        return len(self.predictions)

    @classmethod
    def placeholder(cls, origin: TimeSlot, horizon: int) -> WeatherForecastBundle:
        """Bundle of ``horizon`` zero-valued predictions, offsets 1..horizon."""
        return cls(
            origin_time_slot=origin,
            predictions=tuple(
                WeatherForecastPrediction(
                    offset_index=j,
                    temperature=0.0,
                    wind_speed=0.0,
                    wind_direction=0.0,
                    cloud_cover=0.0,
                )
                for j in range(1, horizon + 1)
            ),
        )
