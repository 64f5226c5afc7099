"""Clamped piecewise-linear interpolation from scene seconds to entity values."""

import math
from bisect import bisect_right
from datetime import datetime, timedelta
from typing import Sequence

from .timeline import EPOCH, AnimationWindow, EntityTimeline


class ClampedLinearScale:
    """Linear map from ``domain`` onto ``range`` that clamps to the domain bounds."""

    def __init__(self, domain: tuple[float, float], range: tuple[float, float]):
        self.domain = domain
        self.range = range

    def __call__(self, x: float) -> float:
        return _clamped_map(x, self.domain, self.range)

    def invert(self, y: float) -> float:
        return _clamped_map(y, self.range, self.domain)


def _clamped_map(x: float, source: tuple[float, float], target: tuple[float, float]) -> float:
    s0, s1 = source
    t0, t1 = target
    if s0 == s1:
        # Degenerate source: every input lands on the middle of the target.
        return (t0 + t1) / 2
    ratio = (x - s0) / (s1 - s0)
    ratio = min(1.0, max(0.0, ratio))
    return t0 + (t1 - t0) * ratio


def interpolate(a: float, b: float, ratio: float) -> float:
    """Blend two values; NaN on either side always yields NaN."""
    if math.isnan(a) or math.isnan(b):
        return math.nan
    return a + (b - a) * ratio


class EntityInterpolator:
    """
    Value of one entity at any scene second.

    Outside the observed seconds the first/last value is returned as-is,
    so a NaN boundary observation stays NaN.
    """

    def __init__(self, entity_id: str, seconds: Sequence[float], series: dict[str, Sequence[float]], value_field: str):
        if not seconds:
            raise ValueError(f"Entity '{entity_id}' has no observations")
        self.entity_id = entity_id
        self.seconds = list(seconds)
        self.series = {key: list(values) for key, values in series.items()}
        self.value_field = value_field

    def __call__(self, sec: float) -> float:
        return self._sample(self.series[self.value_field], sec)

    def values_at(self, sec: float) -> dict[str, float]:
        """Sample every configured value field at ``sec``."""
        return {key: self._sample(values, sec) for key, values in self.series.items()}

    def _sample(self, values: list[float], sec: float) -> float:
        seconds = self.seconds
        if sec <= seconds[0]:
            return values[0]
        if sec >= seconds[-1]:
            return values[-1]
        i = bisect_right(seconds, sec) - 1
        s0, s1 = seconds[i], seconds[i + 1]
        if sec == s0:
            return values[i]
        return interpolate(values[i], values[i + 1], (sec - s0) / (s1 - s0))


def build_sec_to_date(timelines: Sequence[EntityTimeline], window: AnimationWindow) -> ClampedLinearScale:
    """Map the animation window onto the full dataset's date extent."""
    instants = [obs.instant for timeline in timelines for obs in timeline.observations]
    if not instants:
        return ClampedLinearScale((window.start, window.end), (0.0, 0.0))
    return ClampedLinearScale((window.start, window.end), (min(instants), max(instants)))


def build_interpolators(
    timelines: Sequence[EntityTimeline],
    sec_to_date: ClampedLinearScale,
) -> dict[str, EntityInterpolator]:
    """Build one interpolator per entity, keyed by id in timeline order."""
    interpolators: dict[str, EntityInterpolator] = {}
    for timeline in timelines:
        observations = timeline.observations
        seconds = [sec_to_date.invert(obs.instant) for obs in observations]
        keys = observations[0].values.keys()
        series = {key: [obs.values[key] for obs in observations] for key in keys}
        interpolators[timeline.id] = EntityInterpolator(
            timeline.id,
            seconds,
            series,
            observations[0].value_field,
        )
    return interpolators


def instant_to_datetime(instant: float) -> datetime:
    return EPOCH + timedelta(seconds=instant)
