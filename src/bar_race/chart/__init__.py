"""Bar chart race frame computation and rendering."""

from .animator import Animator
from .engine import BarChartEngine
from .fade import FadeSchedule, rank_cutoff_alpha
from .frame import BarChartFrame, FrameRecord
from .interpolation import ClampedLinearScale, EntityInterpolator
from .options import BarChartOptions, Margin, format_label, format_value
from .ranking import rank_entities
from .raster_animation import generate_raster_frames
from .renderer import Renderer
from .smoothing import RankHistory, RankSmoother
from .timeline import AnimationWindow, EntityTimeline, RawObservation

__all__ = [
    "Animator",
    "AnimationWindow",
    "BarChartEngine",
    "BarChartFrame",
    "BarChartOptions",
    "ClampedLinearScale",
    "EntityInterpolator",
    "EntityTimeline",
    "FadeSchedule",
    "FrameRecord",
    "Margin",
    "RankHistory",
    "RankSmoother",
    "RawObservation",
    "Renderer",
    "format_label",
    "format_value",
    "generate_raster_frames",
    "rank_cutoff_alpha",
    "rank_entities",
]
