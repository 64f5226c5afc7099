"""Animator for stepping a chart engine through a scene."""

from typing import Iterator

from .engine import BarChartEngine
from .frame import BarChartFrame


class Animator:
    """Generates chart frames at a fixed frame rate."""

    def __init__(self, engine: BarChartEngine, watermark: bool = False):
        """
        Initialize animator.

        Args:
            engine: Primed chart engine; it must not have been queried yet
            watermark: Whether to add watermark to output frames
        """
        self.engine = engine
        self.fps = engine.options.fps
        self.watermark = watermark
        self.frame_duration = 1000 // self.fps
        # Delta time in seconds per frame
        self.delta_time = 1.0 / self.fps
        self.total_frames = max(1, round(engine.scene_duration * self.fps))

    def iter_frame_timeline(
        self, max_frames: int | None = None
    ) -> Iterator[tuple[BarChartFrame, int]]:
        """Yield chart snapshots in increasing scene time with elapsed time in milliseconds."""
        rendered = 0
        elapsed_ms = 0
        for index in range(self.total_frames):
            if max_frames is not None and rendered >= max_frames:
                break
            yield self.engine.snapshot(index * self.delta_time), elapsed_ms
            rendered += 1
            elapsed_ms += self.frame_duration
