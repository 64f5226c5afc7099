"""Shared animation orchestration used by the CLI."""

from typing import Iterable, Sequence

from .chart.animator import Animator
from .chart.engine import BarChartEngine
from .chart.options import BarChartOptions
from .chart.raster_animation import generate_raster_frames
from .chart.renderer import measure_text
from .dataset import MetaRow, Row
from .output import resolve_output_provider
from .output.base import OutputProvider


def build_engine(
    rows: Sequence[Row],
    meta_rows: Iterable[MetaRow],
    options: BarChartOptions,
    scene_duration: float,
) -> BarChartEngine:
    """Create an engine whose text placeholders are measured with the renderer's font."""
    return BarChartEngine(
        rows,
        meta_rows,
        options=options,
        scene_duration=scene_duration,
        text_measure=measure_text,
    )


def encode_animation(
    rows: Sequence[Row],
    meta_rows: Iterable[MetaRow],
    output_path: str,
    *,
    options: BarChartOptions,
    scene_duration: float,
    watermark: bool = False,
    max_frames: int | None = None,
    provider: OutputProvider | None = None,
) -> bytes:
    """Render the scene frame by frame and encode it for the given output path."""
    target_provider = provider or resolve_output_provider(output_path)
    engine = build_engine(rows, meta_rows, options, scene_duration)
    animator = Animator(engine, watermark=watermark)
    frame_stream = generate_raster_frames(animator, max_frames)
    return target_provider.encode(frame_stream, frame_duration=animator.frame_duration)
