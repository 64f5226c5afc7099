"""Visibility multipliers: global entrance/exit fade and rank cutoff fade."""

from bisect import bisect_right

from ..constants import CUTOFF_ALPHA_FLOOR
from .interpolation import ClampedLinearScale
from .timeline import AnimationWindow


class FadeSchedule:
    """
    Four-point piecewise-linear alpha over scene time.

    Rises across the fade-in, holds through both freezes and the motion,
    then falls across the fade-out. A zero-length fade keeps alpha at 1 on
    that side. Times outside the schedule clamp to the nearest end.
    """

    def __init__(
        self,
        window: AnimationWindow,
        freeze_time: tuple[float, float],
        fade_time: tuple[float, float],
    ):
        fade_in, fade_out = fade_time
        freeze_in, freeze_out = freeze_time
        visible_from = window.start - freeze_in
        visible_until = window.end + freeze_out
        self.times = (
            visible_from - fade_in,
            visible_from,
            visible_until,
            visible_until + fade_out,
        )
        self.alphas = (
            0.0 if fade_in else 1.0,
            1.0,
            1.0,
            0.0 if fade_out else 1.0,
        )

    def __call__(self, sec: float) -> float:
        times, alphas = self.times, self.alphas
        if sec <= times[0]:
            return alphas[0]
        if sec >= times[-1]:
            return alphas[-1]
        i = min(bisect_right(times, sec) - 1, len(times) - 2)
        t0, t1 = times[i], times[i + 1]
        if t1 == t0:
            return alphas[i + 1]
        return alphas[i] + (alphas[i + 1] - alphas[i]) * (sec - t0) / (t1 - t0)


def rank_cutoff_alpha(smoothed_rank: float, item_count: int) -> float:
    """Fade from 1 at the last visible slot to near 0 one slot below it."""
    scale = ClampedLinearScale((item_count - 1, item_count), (1.0, CUTOFF_ALPHA_FLOOR))
    return scale(smoothed_rank)
