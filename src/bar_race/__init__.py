"""Bar chart race animations from per-entity time series."""

from .chart import BarChartEngine, BarChartOptions, FrameRecord
from .errors import BarRaceError, ConfigurationError, DataError

__all__ = [
    "BarChartEngine",
    "BarChartOptions",
    "BarRaceError",
    "ConfigurationError",
    "DataError",
    "FrameRecord",
]
