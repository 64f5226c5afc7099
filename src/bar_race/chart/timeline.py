"""Normalization of raw rows into per-entity timelines and the animation window."""

import copy
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping, Sequence

from ..dataset import MetaRow, Row
from ..errors import ConfigurationError
from .options import BarChartOptions

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1)

# Tried after the configured format; bar races are often yearly or monthly
FALLBACK_DATE_FORMATS = ("%Y", "%Y-%m")


@dataclass(frozen=True)
class RawObservation:
    """One entity's values at one instant; missing or invalid values are NaN."""

    id: str
    timestamp: datetime
    values: Mapping[str, float]
    value_field: str

    @property
    def value(self) -> float:
        return self.values[self.value_field]

    @property
    def instant(self) -> float:
        """Timestamp as seconds since the epoch (naive, UTC-normalized)."""
        return (self.timestamp - EPOCH).total_seconds()


@dataclass(frozen=True)
class EntityTimeline:
    """Chronological observations for one entity."""

    id: str
    observations: tuple[RawObservation, ...]


@dataclass(frozen=True)
class NormalizedData:
    observations: tuple[RawObservation, ...]
    coercion_failures: int


@dataclass(frozen=True)
class AnimationWindow:
    """Seconds of the scene in which values move: ``[start, end]``."""

    start: float
    end: float

    def __post_init__(self) -> None:
        if not self.end > self.start:
            raise ConfigurationError(
                f"Animation window must have positive length, got [{self.start}, {self.end}]"
            )

    @property
    def duration(self) -> float:
        return self.end - self.start


def resolve_window(options: BarChartOptions, scene_duration: float) -> AnimationWindow:
    """Use the explicit ``ani_time`` or derive it from fade and freeze durations."""
    if options.ani_time is not None:
        return AnimationWindow(*options.ani_time)
    fade_in, fade_out = options.fade_time
    freeze_in, freeze_out = options.freeze_time
    return AnimationWindow(
        start=fade_in + freeze_in,
        end=scene_duration - freeze_out - fade_out,
    )


def parse_date(raw: Any, date_format: str) -> datetime:
    """
    Convert a raw date cell into a naive UTC datetime.

    Accepts ``datetime``/``date`` objects, integers as years, ISO-8601
    strings, strings in the configured ``date_format``, and bare years or
    year-months (``2000``, ``2000-05``).
    """
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, date):
        parsed = datetime(raw.year, raw.month, raw.day)
    elif isinstance(raw, int) and not isinstance(raw, bool):
        try:
            parsed = datetime(raw, 1, 1)
        except ValueError:
            raise ConfigurationError(f"Year {raw!r} is out of range")
    elif isinstance(raw, str):
        parsed = _parse_date_text(raw.strip(), date_format)
    else:
        raise ConfigurationError(f"Unsupported date value {raw!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _parse_date_text(text: str, date_format: str) -> datetime:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in (date_format, *FALLBACK_DATE_FORMATS):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise ConfigurationError(f"Cannot parse date {text!r} with format {date_format!r}")


def coerce_value(raw: Any) -> float:
    """Coerce a raw cell to float; anything unusable becomes NaN."""
    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def normalize_rows(rows: Sequence[Row], options: BarChartOptions) -> NormalizedData:
    """
    Build observations from raw rows without touching the input rows.

    Raises:
        ConfigurationError: If a row lacks the id or date field, no row
            carries the value field, or a date cannot be parsed
    """
    if not rows:
        return NormalizedData(observations=(), coercion_failures=0)

    _check_row_shape(rows, options)

    observations = []
    failures = 0
    for row in rows:
        values = {}
        for key in options.value_keys:
            raw = row.get(key)
            value = coerce_value(raw)
            if math.isnan(value) and not _is_missing(raw):
                failures += 1
                logger.debug("Value %r in field %r is not numeric, using NaN", raw, key)
            values[key] = value
        observations.append(
            RawObservation(
                id=str(row[options.id_field]),
                timestamp=parse_date(row[options.date_field], options.date_format),
                values=values,
                value_field=options.value_field,
            )
        )
    return NormalizedData(observations=tuple(observations), coercion_failures=failures)


def group_timelines(observations: Iterable[RawObservation]) -> list[EntityTimeline]:
    """Group observations per id in first-encounter order, each sorted by time."""
    grouped: dict[str, list[RawObservation]] = {}
    for observation in observations:
        grouped.setdefault(observation.id, []).append(observation)
    return [
        EntityTimeline(
            id=entity_id,
            observations=tuple(sorted(items, key=lambda o: o.timestamp)),
        )
        for entity_id, items in grouped.items()
    ]


def index_meta(meta_rows: Iterable[MetaRow], id_field: str) -> dict[str, MetaRow]:
    """Key metadata rows by id; the first row seen for an id wins."""
    meta: dict[str, MetaRow] = {}
    for row in meta_rows:
        if id_field not in row:
            continue
        meta.setdefault(str(row[id_field]), copy.deepcopy(dict(row)))
    return meta


def _is_missing(raw: Any) -> bool:
    if raw is None:
        return True
    if isinstance(raw, float) and math.isnan(raw):
        return True
    return isinstance(raw, str) and not raw.strip()


def _check_row_shape(rows: Sequence[Row], options: BarChartOptions) -> None:
    for index, row in enumerate(rows):
        for name in (options.id_field, options.date_field):
            if name not in row:
                raise ConfigurationError(f"Row {index} has no field '{name}'")
    if not any(options.value_field in row for row in rows):
        raise ConfigurationError(f"No row has the value field '{options.value_field}'")
