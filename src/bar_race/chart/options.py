"""Immutable chart configuration and the quantities derived from it."""

import math
from dataclasses import dataclass, field
from typing import Callable, Mapping

from ..constants import (
    DEFAULT_BAR_GAP,
    DEFAULT_BAR_PADDING,
    DEFAULT_DATE_FIELD,
    DEFAULT_DATE_FORMAT,
    DEFAULT_FADE_TIME,
    DEFAULT_FPS,
    DEFAULT_FREEZE_TIME,
    DEFAULT_ID_FIELD,
    DEFAULT_ITEM_COUNT,
    DEFAULT_MARGIN,
    DEFAULT_SHAPE,
    DEFAULT_SWAP,
    DEFAULT_VALUE_FIELD,
    LABEL_FONT_RATIO,
)
from ..dataset import MetaRow
from ..errors import ConfigurationError

ValueFormat = Callable[[float], str]
LabelFormat = Callable[[str, Mapping[str, MetaRow]], str]


def format_value(value: float) -> str:
    """Format a bar value as a thousands-separated integer."""
    if math.isnan(value):
        return ""
    return f"{value:,.0f}"


def format_label(entity_id: str, meta: Mapping[str, MetaRow]) -> str:
    """Use the metadata ``name`` when the entity has one, else the id."""
    record = meta.get(entity_id)
    if record and record.get("name"):
        return str(record["name"])
    return str(entity_id)


@dataclass(frozen=True)
class Margin:
    left: float
    top: float
    right: float
    bottom: float


@dataclass(frozen=True)
class BarChartOptions:
    """
    Configuration for one bar chart race.

    Time pairs (``freeze_time``, ``fade_time``) are ``(before, after)`` the
    animated motion, in seconds. ``ani_time`` pins the motion window
    explicitly; when omitted it is derived from the scene duration.
    """

    item_count: int = DEFAULT_ITEM_COUNT
    id_field: str = DEFAULT_ID_FIELD
    date_field: str = DEFAULT_DATE_FIELD
    value_field: str = DEFAULT_VALUE_FIELD
    value_keys: tuple[str, ...] = ()
    color_field: str | None = None
    ani_time: tuple[float, float] | None = None
    freeze_time: tuple[float, float] = DEFAULT_FREEZE_TIME
    fade_time: tuple[float, float] = DEFAULT_FADE_TIME
    swap: float = DEFAULT_SWAP
    fps: int = DEFAULT_FPS
    shape: tuple[int, int] = DEFAULT_SHAPE
    margin: Margin = field(default_factory=lambda: Margin(*DEFAULT_MARGIN))
    bar_padding: float = DEFAULT_BAR_PADDING
    bar_gap: float = DEFAULT_BAR_GAP
    date_format: str = DEFAULT_DATE_FORMAT
    value_format: ValueFormat = format_value
    label_format: LabelFormat = format_label
    bar_info_format: LabelFormat | None = None

    def __post_init__(self) -> None:
        if self.item_count <= 0:
            raise ConfigurationError(f"item_count must be positive, got {self.item_count}")
        if self.fps <= 0:
            raise ConfigurationError(f"fps must be positive, got {self.fps}")
        if self.swap <= 0:
            raise ConfigurationError(f"swap must be positive, got {self.swap}")
        for name in ("freeze_time", "fade_time"):
            before, after = getattr(self, name)
            if before < 0 or after < 0:
                raise ConfigurationError(f"{name} must not be negative, got {(before, after)}")
        if not self.value_keys:
            object.__setattr__(self, "value_keys", (self.value_field,))
        elif self.value_field not in self.value_keys:
            object.__setattr__(self, "value_keys", (self.value_field, *self.value_keys))
        if self.bar_height <= 0:
            raise ConfigurationError(
                f"bar height must be positive, got {self.bar_height:.2f} for {self.item_count} bars "
                f"in a {self.shape[1]}px tall chart"
            )

    @property
    def sampling(self) -> int:
        """Rank samples kept per swap duration."""
        # Half-up rounding: 10 fps with a 0.25 s swap keeps 3 samples
        return max(1, math.floor(self.fps * self.swap + 0.5))

    @property
    def bar_height(self) -> float:
        _, height = self.shape
        usable = height - self.margin.top - self.margin.bottom - self.bar_gap * (self.item_count - 1)
        return usable / self.item_count

    @property
    def font_size(self) -> float:
        return self.bar_height * LABEL_FONT_RATIO

    @property
    def colors_by(self) -> str:
        return self.color_field or self.id_field

    def available_width(self, label_placeholder: float, value_placeholder: float) -> float:
        """Width left for the longest bar once margins and text columns are reserved."""
        width, _ = self.shape
        return (
            width
            - self.margin.left
            - self.bar_padding
            - label_placeholder
            - self.margin.right
            - value_placeholder
        )

    def bar_info(self, entity_id: str, meta: Mapping[str, MetaRow]) -> str:
        formatter = self.bar_info_format or self.label_format
        return formatter(entity_id, meta)
