"""Base classes for animation output providers."""

import logging
from abc import ABC, abstractmethod
from io import BytesIO
from typing import Iterator

from PIL import Image

logger = logging.getLogger(__name__)


class OutputProvider(ABC):
    """Encodes a stream of rendered frames and writes the result to ``path``."""

    def __init__(self, path: str = ""):
        self.path = path

    @abstractmethod
    def encode(self, frames: Iterator[Image.Image], frame_duration: int) -> bytes:
        """
        Encode frames into the output format.

        Args:
            frames: Rendered frames in display order
            frame_duration: Frame duration in milliseconds

        Returns:
            Encoded output as bytes (empty when there are no frames)
        """
        raise NotImplementedError

    def write(self, data: bytes) -> None:
        if not self.path:
            raise ValueError("Output path not set")
        with open(self.path, "wb") as f:
            f.write(data)


class AnimatedImageOutputProvider(OutputProvider):
    """Animated image formats Pillow can save from a frame sequence."""

    @property
    @abstractmethod
    def output_format(self) -> str:
        """Pillow format name passed to ``Image.save``."""
        raise NotImplementedError

    @property
    def save_options(self) -> dict[str, object]:
        return {}

    def encode(self, frames: Iterator[Image.Image], frame_duration: int) -> bytes:
        frame_list = list(frames)
        if not frame_list:
            return b""

        logger.debug("Encoding %d frames as %s", len(frame_list), self.output_format)
        buffer = BytesIO()
        frame_list[0].save(
            buffer,
            format=self.output_format,
            save_all=True,
            append_images=frame_list[1:],
            duration=max(1, frame_duration),
            loop=0,
            **self.save_options,
        )
        return buffer.getvalue()


class GifOutputProvider(AnimatedImageOutputProvider):
    """Animated GIF output."""

    @property
    def output_format(self) -> str:
        return "gif"

    @property
    def save_options(self) -> dict[str, object]:
        return {"optimize": False}


class WebPOutputProvider(AnimatedImageOutputProvider):
    """Lossless animated WebP output."""

    @property
    def output_format(self) -> str:
        return "webp"

    @property
    def save_options(self) -> dict[str, object]:
        return {"lossless": True, "quality": 100, "method": 4}
