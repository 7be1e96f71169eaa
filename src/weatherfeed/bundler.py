"""Grouping of flat forecast predictions into per-origin bundles."""

from __future__ import annotations

from collections.abc import Sequence

from weatherfeed.exceptions import MalformedBatchError
from weatherfeed.models.forecast import WeatherForecastBundle, WeatherForecastPrediction
from weatherfeed.models.time_slot import TimeSlot


class ForecastBundler:
    """Splits predictions into contiguous groups of ``forecast_horizon``.

    Group ``k`` becomes the bundle for ``origins[k]``; inside a group the
    offsets must be exactly ``1..forecast_horizon``.
    """

    def __init__(self, forecast_horizon: int) -> None:
        self.forecast_horizon = forecast_horizon

    def bundle(
        self,
        predictions: Sequence[WeatherForecastPrediction],
        origins: Sequence[TimeSlot],
    ) -> list[WeatherForecastBundle]:
        horizon = self.forecast_horizon
        if len(predictions) % horizon != 0:
            raise MalformedBatchError(
                f"{len(predictions)} predictions do not split into groups of {horizon}"
            )
        groups = len(predictions) // horizon
        if groups != len(origins):
            raise MalformedBatchError(
                f"{groups} forecast groups for {len(origins)} origin slots"
            )

        expected = set(range(1, horizon + 1))
        bundles: list[WeatherForecastBundle] = []
        for k, origin in enumerate(origins):
            group = predictions[k * horizon:(k + 1) * horizon]
            offsets = [p.offset_index for p in group]
            if set(offsets) != expected:
                raise MalformedBatchError(
                    f"Forecast group {k} has offsets {offsets}, expected 1..{horizon}"
                )
            bundles.append(
                WeatherForecastBundle(
                    origin_time_slot=origin,
                    predictions=tuple(sorted(group, key=lambda p: p.offset_index)),
                )
            )
        return bundles
