"""Renderer for drawing chart frames using Pillow."""

from functools import lru_cache

from PIL import Image, ImageDraw, ImageFont

from ..constants import BACKGROUND_COLOR, BAR_INFO_COLOR, BAR_RADIUS, DATE_LABEL_COLOR
from .colors import ColorPicker
from .engine import BarChartEngine
from .frame import BarChartFrame, FrameRecord

WATERMARK_TEXT = "bar-race"
DATE_FONT_SIZE = 45


@lru_cache(maxsize=32)
def load_font(size: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    return ImageFont.load_default(size=max(1, round(size)))


def measure_text(text: str, font_size: float) -> float:
    """Width in pixels of ``text`` drawn with the default font at ``font_size``."""
    draw = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    return draw.textlength(text, font=load_font(font_size))


class Renderer:
    """Renders chart snapshots as PIL Images."""

    def __init__(self, engine: BarChartEngine, watermark: bool = False):
        """
        Initialize renderer.

        Args:
            engine: The chart engine whose snapshots are rendered
            watermark: Whether to add watermark to frames
        """
        self.engine = engine
        self.options = engine.options
        self.watermark = watermark
        self.colors = ColorPicker()
        self.width, self.height = self.options.shape

    def render_frame(self, frame: BarChartFrame) -> Image.Image:
        """
        Render a chart snapshot as an image.

        Returns:
            PIL Image of the frame
        """
        img = Image.new("RGB", (self.width, self.height), BACKGROUND_COLOR)

        overlay = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay, "RGBA")
        for record in frame.records:
            # Bars faded out entirely are skipped
            if record.visible:
                self._draw_bar(draw, record)

        self._draw_date(draw, frame)

        if self.watermark:
            self._draw_watermark(draw)

        combined = Image.alpha_composite(img.convert("RGBA"), overlay)

        return combined.convert("RGB").convert("P", palette=Image.Palette.ADAPTIVE)

    def _draw_bar(self, draw: ImageDraw.ImageDraw, record: FrameRecord) -> None:
        bar_height = self.options.bar_height
        padding = self.options.bar_padding
        font = load_font(self.options.font_size)
        alpha = round(255 * record.alpha)
        color = self.colors.get_color(self.engine.color_key_for(record.id))
        fill = (*color, alpha)

        x = self.engine.bar_x
        y = self.engine.bar_y(record.rank)
        if record.horizontal_extent > 0:
            draw.rounded_rectangle(
                (x, y, x + record.horizontal_extent, y + bar_height),
                radius=BAR_RADIUS,
                fill=fill,
            )

        label = self.engine.label_for(record.id)
        draw.text((x - padding, y + bar_height), label, font=font, fill=fill, anchor="rd")

        value_text = self.options.value_format(record.value)
        draw.text(
            (x + record.horizontal_extent + padding, y + bar_height),
            value_text,
            font=font,
            fill=fill,
            anchor="ld",
        )

        info = self.engine.bar_info_for(record.id)
        if draw.textlength(info, font=font) + 2 * padding <= record.horizontal_extent:
            draw.text(
                (x + record.horizontal_extent - padding, y + bar_height),
                info,
                font=font,
                fill=(*BAR_INFO_COLOR, alpha),
                anchor="rd",
            )

    def _draw_date(self, draw: ImageDraw.ImageDraw, frame: BarChartFrame) -> None:
        """Draw the current date in the bottom-right corner."""
        if not frame.date_label:
            return
        font = load_font(DATE_FONT_SIZE)
        x = self.width - self.options.margin.right
        y = self.height - self.options.margin.bottom
        draw.text(
            (x, y),
            frame.date_label,
            font=font,
            fill=(*DATE_LABEL_COLOR, round(255 * frame.alpha)),
            anchor="rd",
        )

    def _draw_watermark(self, draw: ImageDraw.ImageDraw) -> None:
        """Draw watermark text in the top-right corner."""
        font = ImageFont.load_default()
        color = (100, 100, 100, 128)  # Semi-transparent gray
        margin = 5

        bbox = draw.textbbox((0, 0), WATERMARK_TEXT, font=font)
        text_width = bbox[2] - bbox[0]

        draw.text((self.width - text_width - margin, margin), WATERMARK_TEXT, font=font, fill=color)
