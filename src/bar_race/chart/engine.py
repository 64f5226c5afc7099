"""Per-frame state engine for bar chart race animations.

``BarChartEngine.frame_at`` turns raw per-entity time series into ranked,
smoothly interpolated bar records for one scene time. Rank smoothing keeps
state between calls, so an engine must be queried in non-decreasing time,
one call per frame, at the density given by ``options.fps``. Querying an
earlier time is not corrected: it advances the rank windows again and is
counted in ``time_regressions``. Concurrent renderers should give each
worker its own engine.

The look-back samples taken before the window starts rank entities with the
same rule as live frames, so an entity without data sits on the sentinel
rank (``item_count``) from the first frame rather than at its sorted
position.
"""

import logging
import math
from datetime import datetime
from typing import Callable, Iterable, Sequence

from ..constants import DEFAULT_DURATION
from ..dataset import MetaRow, Row
from .fade import FadeSchedule, rank_cutoff_alpha
from .frame import BarChartFrame, FrameRecord
from .interpolation import (
    ClampedLinearScale,
    build_interpolators,
    build_sec_to_date,
    instant_to_datetime,
)
from .options import BarChartOptions
from .smoothing import RankSmoother, ranks_with_sentinel
from .timeline import AnimationWindow, group_timelines, index_meta, normalize_rows, resolve_window

logger = logging.getLogger(__name__)

TextMeasure = Callable[[str, float], float]


def approximate_text_width(text: str, font_size: float) -> float:
    """Rough text width for monospace-like fonts when no renderer is available."""
    return len(text) * font_size * 0.6


class BarChartEngine:
    """Computes bar chart frames from a dataset."""

    def __init__(
        self,
        rows: Sequence[Row],
        meta_rows: Iterable[MetaRow] = (),
        options: BarChartOptions | None = None,
        scene_duration: float = DEFAULT_DURATION,
        text_measure: TextMeasure = approximate_text_width,
    ):
        """
        Initialize the engine and prime the rank histories.

        Args:
            rows: Raw data rows with id, date and value fields
            meta_rows: Optional metadata rows keyed by the same id field
            options: Chart configuration
            scene_duration: Total scene length in seconds
            text_measure: Callable returning the width of text at a font size

        Raises:
            ConfigurationError: If the rows or options cannot form a chart
        """
        self.options = options or BarChartOptions()
        self.scene_duration = scene_duration
        self.window: AnimationWindow = resolve_window(self.options, scene_duration)

        normalized = normalize_rows(rows, self.options)
        self.coercion_failures = normalized.coercion_failures
        self.timelines = group_timelines(normalized.observations)
        self.meta = index_meta(meta_rows, self.options.id_field)
        self.sec_to_date: ClampedLinearScale = build_sec_to_date(self.timelines, self.window)
        self.interpolators = build_interpolators(self.timelines, self.sec_to_date)
        self.ids = list(self.interpolators)

        font_size = self.options.font_size
        self.label_placeholder = max(
            (text_measure(self.label_for(entity_id), font_size) for entity_id in self.ids),
            default=0.0,
        )
        self.value_placeholder = max(
            (
                text_measure(self.options.value_format(obs.value), font_size)
                for obs in normalized.observations
                if not math.isnan(obs.value)
            ),
            default=0.0,
        )
        self.available_width = max(
            0.0, self.options.available_width(self.label_placeholder, self.value_placeholder)
        )

        self.fade = FadeSchedule(self.window, self.options.freeze_time, self.options.fade_time)
        self.smoother = RankSmoother(self.ids, self.options.sampling, self.options.item_count)
        self.last_values: dict[str, dict[str, float]] = {}
        self.time_regressions = 0
        self._last_query: float | None = None

        logger.debug(
            "Chart set up with %d entities from %d rows, window [%.3f, %.3f]",
            len(self.ids),
            len(normalized.observations),
            self.window.start,
            self.window.end,
        )
        self._prime_history()

    def _prime_history(self) -> None:
        """Sample one swap duration before the window so histories start full."""
        sampling = self.options.sampling
        step = self.options.swap / sampling
        start = self.window.start - self.options.swap
        look_back = [start + i * step for i in range(sampling)]
        self.smoother.prime(self._sentinel_ranks(sec) for sec in look_back)
        logger.debug("Primed rank histories with %d samples", sampling)

    def _raw_values(self, sec: float) -> dict[str, float]:
        return {entity_id: interpolator(sec) for entity_id, interpolator in self.interpolators.items()}

    def _sentinel_ranks(self, sec: float) -> dict[str, int]:
        return ranks_with_sentinel(self._raw_values(sec), self.options.item_count)

    def _check_time(self, sec: float) -> None:
        if self._last_query is not None and sec < self._last_query:
            self.time_regressions += 1
            logger.warning(
                "Frame requested at %.4fs after %.4fs; rank smoothing assumes increasing time",
                sec,
                self._last_query,
            )
        self._last_query = sec

    def _hold_over(self, sampled: dict[str, dict[str, float]]) -> dict[str, dict[str, float]]:
        """Replace missing samples with the entity's last numeric value, per field."""
        held = {}
        for entity_id, fields in sampled.items():
            known = self.last_values.setdefault(entity_id, {})
            for key, value in fields.items():
                if not math.isnan(value):
                    known[key] = value
            held[entity_id] = {key: known.get(key, math.nan) for key in fields}
        return held

    def frame_at(self, sec: float) -> list[FrameRecord]:
        """
        Compute one record per entity for scene time ``sec``.

        Advances the rank histories; call once per rendered frame.
        """
        self._check_time(sec)
        if not self.ids:
            return []

        sampled = {
            entity_id: interpolator.values_at(sec) for entity_id, interpolator in self.interpolators.items()
        }
        value_field = self.options.value_field
        raw_values = {entity_id: fields[value_field] for entity_id, fields in sampled.items()}
        ranks = ranks_with_sentinel(raw_values, self.options.item_count)
        smoothed = self.smoother.advance(ranks)
        held = self._hold_over(sampled)

        max_value = max((value for value in raw_values.values() if not math.isnan(value)), default=0.0)
        scale_x = ClampedLinearScale((0.0, max_value), (0.0, self.available_width))
        time_alpha = self.fade(sec)

        records = []
        for entity_id in self.ids:
            fields = held[entity_id]
            value = fields[value_field]
            extent = 0.0 if math.isnan(value) or max_value <= 0 else scale_x(value)
            records.append(
                FrameRecord(
                    id=entity_id,
                    value=value,
                    rank=smoothed[entity_id],
                    alpha=rank_cutoff_alpha(smoothed[entity_id], self.options.item_count) * time_alpha,
                    horizontal_extent=extent,
                    values=fields,
                )
            )
        return records

    def snapshot(self, sec: float) -> BarChartFrame:
        """Build an immutable frame snapshot, advancing state like ``frame_at``."""
        return BarChartFrame(
            time_sec=sec,
            date_label=self.date_label(sec),
            alpha=self.fade(sec),
            records=tuple(self.frame_at(sec)),
        )

    def date_at(self, sec: float) -> datetime:
        return instant_to_datetime(self.sec_to_date(sec))

    def date_label(self, sec: float) -> str:
        if not self.ids:
            return ""
        return self.date_at(sec).strftime(self.options.date_format)

    def label_for(self, entity_id: str) -> str:
        return self.options.label_format(entity_id, self.meta)

    def bar_info_for(self, entity_id: str) -> str:
        return self.options.bar_info(entity_id, self.meta)

    def color_key_for(self, entity_id: str) -> str:
        """Value of the configured color field for an entity (falls back to the id)."""
        field = self.options.colors_by
        if field == self.options.id_field:
            return entity_id
        record = self.meta.get(entity_id) or {}
        return str(record.get(field, entity_id))

    @property
    def bar_x(self) -> float:
        return self.options.margin.left + self.options.bar_padding + self.label_placeholder

    def bar_y(self, rank: float) -> float:
        return self.options.margin.top + rank * (self.options.bar_height + self.options.bar_gap)

    def history_lengths(self) -> dict[str, int]:
        return self.smoother.lengths()
