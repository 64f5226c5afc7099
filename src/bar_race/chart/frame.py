"""Frame payloads produced by the chart engine."""

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class FrameRecord:
    """Visual state of one entity at one query time."""

    id: str
    value: float
    rank: float
    alpha: float
    horizontal_extent: float
    # Every configured value field, held over like ``value``
    values: Mapping[str, float] = field(default_factory=dict)

    @property
    def visible(self) -> bool:
        return self.alpha > 0


@dataclass(frozen=True)
class BarChartFrame:
    """A full chart snapshot at a specific scene time."""

    time_sec: float
    date_label: str
    alpha: float
    records: tuple[FrameRecord, ...]
