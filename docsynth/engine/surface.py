"""
Drawing surface abstraction.

The layout engine only talks to ``DrawingSurface``; ``PillowSurface`` is the
implementation backed by a Pillow RGB image. Text is positioned by the top of
its line box, matching a canvas with ``textBaseline = "top"``.
"""

from __future__ import annotations

import base64
import io
import logging
import math
from typing import Optional, Protocol, Tuple

from PIL import Image, ImageDraw, ImageFont

from ..config import LayoutConfig
from ..exceptions import RenderingError
from .fonts import FontRegistry, FontSpec, PillowFont

logger = logging.getLogger(__name__)

_NO_COLOR = ("", "none", "transparent")


def _color(value: Optional[str]) -> Optional[str]:
    if value is None or str(value).strip().lower() in _NO_COLOR:
        return None
    return str(value)


def jpeg_quality_percent(quality: float) -> int:
    """Map a 0-1 quality hint onto Pillow's 1-100 JPEG quality scale."""
    if not math.isfinite(quality):
        quality = 0.92
    return max(1, min(100, int(round(quality * 100))))


class DrawingSurface(Protocol):
    """Operations the layout engine needs from a 2D rasterizer."""

    width: int
    height: int

    def set_font(self, spec: FontSpec) -> None: ...

    def measure_text(self, text: str) -> float: ...

    def draw_text(self, text: str, x: float, y: float, color: str, align: str = "left") -> None: ...

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: str,
                  line_width: float = 1) -> None: ...

    def draw_rounded_rect(self, x: float, y: float, width: float, height: float, radius: float,
                          fill: Optional[str] = None, stroke: Optional[str] = None,
                          line_width: float = 1) -> None: ...

    def draw_arc(self, center_x: float, center_y: float, radius: float, start: float, end: float,
                 color: str, line_width: float, round_caps: bool = False) -> None: ...

    def draw_image(self, image: Image.Image, x: float, y: float, width: float, height: float) -> None: ...

    def to_data_url(self, mime: str = "image/jpeg", quality: float = 0.92) -> str: ...


class PillowSurface:
    """Fixed-size RGB drawing surface backed by Pillow."""

    def __init__(self, width: int, height: int, background: str = "#ffffff",
                 fonts: Optional[FontRegistry] = None):
        self.width = int(width)
        self.height = int(height)
        self.image = Image.new("RGB", (self.width, self.height), _color(background) or "#ffffff")
        self._draw = ImageDraw.Draw(self.image)
        self.fonts = fonts or FontRegistry()
        self.font_spec = FontSpec()
        self._font: PillowFont = self.fonts.load(self.font_spec)

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------
    def set_font(self, spec: FontSpec) -> None:
        if spec != self.font_spec:
            self.font_spec = spec
            self._font = self.fonts.load(spec)

    def measure_text(self, text: str) -> float:
        if not text:
            return 0.0
        return float(self._draw.textlength(text, font=self._font))

    def draw_text(self, text: str, x: float, y: float, color: str, align: str = "left") -> None:
        if not text:
            return
        draw_x = x
        if align == "center":
            draw_x = x - self.measure_text(text) / 2
        elif align == "right":
            draw_x = x - self.measure_text(text)
        if isinstance(self._font, ImageFont.FreeTypeFont):
            self._draw.text((draw_x, y), text, fill=_color(color), font=self._font, anchor="la")
        else:
            self._draw.text((draw_x, y), text, fill=_color(color), font=self._font)

    # ------------------------------------------------------------------
    # Shapes
    # ------------------------------------------------------------------
    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: str,
                  line_width: float = 1) -> None:
        fill = _color(color)
        if fill is None:
            return
        self._draw.line([(x1, y1), (x2, y2)], fill=fill, width=max(1, int(round(line_width))))

    def draw_rounded_rect(self, x: float, y: float, width: float, height: float, radius: float,
                          fill: Optional[str] = None, stroke: Optional[str] = None,
                          line_width: float = 1) -> None:
        fill_color = _color(fill)
        stroke_color = _color(stroke)
        if fill_color is None and stroke_color is None:
            return
        box = [x, y, x + max(width, 0), y + max(height, 0)]
        self._draw.rounded_rectangle(
            box,
            radius=max(0, int(round(radius))),
            fill=fill_color,
            outline=stroke_color,
            width=max(1, int(round(line_width))) if stroke_color else 0,
        )

    def draw_arc(self, center_x: float, center_y: float, radius: float, start: float, end: float,
                 color: str, line_width: float, round_caps: bool = False) -> None:
        """Stroke an arc centred on ``radius``; angles in radians, clockwise."""
        fill = _color(color)
        if fill is None or end <= start:
            return
        half = line_width / 2
        box = [center_x - radius - half, center_y - radius - half,
               center_x + radius + half, center_y + radius + half]
        self._draw.arc(box, math.degrees(start), math.degrees(end), fill=fill,
                       width=max(1, int(round(line_width))))
        if round_caps:
            for angle in (start, end):
                cap_x = center_x + radius * math.cos(angle)
                cap_y = center_y + radius * math.sin(angle)
                self._draw.ellipse([cap_x - half, cap_y - half, cap_x + half, cap_y + half], fill=fill)

    def draw_image(self, image: Image.Image, x: float, y: float, width: float, height: float) -> None:
        size: Tuple[int, int] = (max(1, int(round(width))), max(1, int(round(height))))
        resized = image.convert("RGBA").resize(size, Image.Resampling.LANCZOS)
        self.image.paste(resized, (int(round(x)), int(round(y))), resized)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def _encode(self, **params) -> bytes:
        buffer = io.BytesIO()
        try:
            self.image.save(buffer, **params)
        except (OSError, ValueError) as exc:
            raise RenderingError("Failed to encode page", details=str(exc)) from exc
        return buffer.getvalue()

    def to_jpeg_bytes(self, quality: float = 0.92) -> bytes:
        return self._encode(format="JPEG", quality=jpeg_quality_percent(quality))

    def to_png_bytes(self) -> bytes:
        return self._encode(format="PNG")

    def to_data_url(self, mime: str = "image/jpeg", quality: float = 0.92) -> str:
        """Encode the page as a base64 data URL (JPEG or PNG)."""
        if mime == "image/png":
            payload = self.to_png_bytes()
        else:
            mime = "image/jpeg"
            payload = self.to_jpeg_bytes(quality)
        return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


def create_report_page(config: Optional[LayoutConfig] = None,
                       fonts: Optional[FontRegistry] = None,
                       width: Optional[int] = None,
                       height: Optional[int] = None,
                       background: Optional[str] = None) -> PillowSurface:
    """Create a blank report page surface sized from ``config``."""
    config = config or LayoutConfig()
    fonts = fonts or FontRegistry(config.fonts.search_dirs)
    surface = PillowSurface(
        width or config.page.width,
        height or config.page.height,
        background=background or config.page.background,
        fonts=fonts,
    )
    logger.debug("Created report page %dx%d", surface.width, surface.height)
    return surface
