"""Styled text blocks and shape primitives painted onto a drawing surface."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..exceptions import LayoutError
from ..utils.parsing import clamp_fraction
from .fonts import FontSpec, normalize_font_weight
from .geometry import Rect
from .images import ReportImage
from .surface import DrawingSurface
from .text_metrics import truncate_text, wrap_text


ALIGNMENTS = ("left", "center", "right")

DEFAULT_FAMILY = "sans"


@dataclass(frozen=True, slots=True)
class TextBlockStyle:
    """Every option recognised by ``draw_text_block``.

    ``family=None`` uses the caller's default family; ``line_height=None``
    uses ``round(size * 1.45)``; ``max_lines=0`` disables truncation.
    """

    size: float = 16.0
    weight: int = 400
    family: Optional[str] = None
    color: str = "#0f172a"
    align: str = "left"
    max_lines: int = 0
    line_height: Optional[float] = None

    def __post_init__(self):
        if self.align not in ALIGNMENTS:
            raise LayoutError("Unsupported text alignment", details=repr(self.align))
        if self.size <= 0:
            raise LayoutError("Font size must be positive", details=repr(self.size))

    @property
    def resolved_line_height(self) -> float:
        if self.line_height and self.line_height > 0:
            return float(self.line_height)
        return float(round(self.size * 1.45))

    def font_spec(self, default_family: str = DEFAULT_FAMILY) -> FontSpec:
        return FontSpec(
            size=self.size,
            weight=normalize_font_weight(self.weight),
            family=self.family or default_family,
        )


@dataclass(slots=True)
class TextBlockResult:
    lines: List[str]
    height: float
    line_height: float


def set_report_font(surface: DrawingSurface, size: float = 16, weight: int | str = 400,
                    family: Optional[str] = None) -> FontSpec:
    """Apply a font to ``surface`` and return the applied spec."""
    spec = FontSpec(size=size, weight=normalize_font_weight(weight), family=family or DEFAULT_FAMILY)
    surface.set_font(spec)
    return spec


def layout_text_block(surface: DrawingSurface, text: object, max_width: float,
                      style: TextBlockStyle = TextBlockStyle(),
                      default_family: str = DEFAULT_FAMILY) -> TextBlockResult:
    """Apply the style's font and compute the block's lines without painting."""
    surface.set_font(style.font_spec(default_family))
    if style.max_lines > 0:
        lines = truncate_text(surface.measure_text, text, max_width, style.max_lines)
    else:
        lines = wrap_text(surface.measure_text, text, max_width)
    line_height = style.resolved_line_height
    return TextBlockResult(lines=lines, height=len(lines) * line_height, line_height=line_height)


def draw_text_block(surface: DrawingSurface, text: object, x: float, y: float, max_width: float,
                    style: TextBlockStyle = TextBlockStyle(),
                    default_family: str = DEFAULT_FAMILY) -> TextBlockResult:
    """Paint wrapped (or truncated) text; line ``i`` sits at ``y + i * line_height``.

    Center and right alignment anchor on the block width, not the glyph width.
    """
    result = layout_text_block(surface, text, max_width, style, default_family)
    if style.align == "center":
        anchor_x = x + max_width / 2
    elif style.align == "right":
        anchor_x = x + max_width
    else:
        anchor_x = x
    for index, line in enumerate(result.lines):
        surface.draw_text(line, anchor_x, y + index * result.line_height, style.color, style.align)
    return result


def clamp_radius(radius: float, width: float, height: float) -> float:
    return max(0.0, min(float(radius or 0), width / 2, height / 2))


def draw_rounded_rect(surface: DrawingSurface, x: float, y: float, width: float, height: float,
                      radius: float = 24, fill: Optional[str] = None, stroke: Optional[str] = None,
                      line_width: float = 1) -> None:
    surface.draw_rounded_rect(x, y, width, height, clamp_radius(radius, width, height),
                              fill=fill, stroke=stroke, line_width=line_width)


def draw_divider(surface: DrawingSurface, x: float, y: float, width: float,
                 color: str = "#cbd5e1", line_width: float = 1) -> None:
    surface.draw_line(x, y, x + width, y, color, line_width)


@dataclass(frozen=True, slots=True)
class PillStyle:
    width: float = 180.0
    height: float = 34.0
    radius: Optional[float] = None
    fill: str = "#eff6ff"
    stroke: Optional[str] = None
    line_width: float = 1.0
    size: float = 14.0
    weight: int = 700
    color: str = "#1d4ed8"
    family: Optional[str] = None


def draw_pill(surface: DrawingSurface, text: object, x: float, y: float,
              style: PillStyle = PillStyle()) -> TextBlockResult:
    """Status badge: a rounded rectangle with one centered text line."""
    radius = style.height / 2 if style.radius is None else style.radius
    draw_rounded_rect(surface, x, y, style.width, style.height, radius,
                      fill=style.fill, stroke=style.stroke, line_width=style.line_width)
    text_y = y + max((style.height - style.size) / 2 - 2, 6)
    return draw_text_block(
        surface, text, x, text_y, style.width,
        TextBlockStyle(size=style.size, weight=style.weight, family=style.family,
                       color=style.color, align="center", max_lines=1),
    )


@dataclass(frozen=True, slots=True)
class DonutSegment:
    value: float
    color: str = "#1f7a8c"


@dataclass(frozen=True, slots=True)
class DonutStyle:
    radius: float = 80.0
    thickness: float = 18.0
    start_angle: float = -math.pi / 2
    track_color: str = "#e2e8f0"
    value_size: float = 42.0
    value_weight: int = 700
    value_color: str = "#0f172a"
    caption_size: float = 14.0
    caption_weight: int = 500
    caption_color: str = "#64748b"
    caption_line_height: float = 18.0
    family: Optional[str] = None


def donut_sweeps(segments: Sequence[DonutSegment], start_angle: float = -math.pi / 2) -> List[tuple]:
    """Return ``(start, end, color)`` per visible segment, values clamped to [0, 1]."""
    sweeps = []
    cursor = start_angle
    for segment in segments:
        value = clamp_fraction(segment.value)
        if value <= 0:
            continue
        angle = value * math.pi * 2
        sweeps.append((cursor, cursor + angle, segment.color))
        cursor += angle
    return sweeps


def draw_donut_chart(surface: DrawingSurface, center_x: float, center_y: float,
                     segments: Sequence[DonutSegment] = (), value_label: Optional[str] = None,
                     caption: Optional[str] = None, style: DonutStyle = DonutStyle()) -> None:
    surface.draw_arc(center_x, center_y, style.radius, 0.0, math.pi * 2,
                     style.track_color, style.thickness)

    for start, end, color in donut_sweeps(segments, style.start_angle):
        surface.draw_arc(center_x, center_y, style.radius, start, end, color,
                         style.thickness, round_caps=True)

    if value_label:
        draw_text_block(
            surface, value_label, center_x - style.radius + 20, center_y - 26, style.radius * 2 - 40,
            TextBlockStyle(size=style.value_size, weight=style.value_weight, family=style.family,
                           color=style.value_color, align="center", max_lines=1),
        )
    if caption:
        draw_text_block(
            surface, caption, center_x - style.radius + 18, center_y + 22, style.radius * 2 - 36,
            TextBlockStyle(size=style.caption_size, weight=style.caption_weight, family=style.family,
                           color=style.caption_color, align="center", max_lines=2,
                           line_height=style.caption_line_height),
        )


def fit_image_box(image_width: float, image_height: float, box: Rect) -> Rect:
    """Scale an image to fit inside ``box`` preserving aspect ratio, centered."""
    if image_width <= 0 or image_height <= 0:
        raise LayoutError("Image dimensions must be positive", details=f"{image_width}x{image_height}")
    scale = min(box.width / image_width, box.height / image_height)
    width = image_width * scale
    height = image_height * scale
    return Rect(
        x=box.x + (box.width - width) / 2,
        y=box.y + (box.height - height) / 2,
        width=width,
        height=height,
    )


def draw_image_fit(surface: DrawingSurface, image: ReportImage, box: Rect) -> Rect:
    target = fit_image_box(image.width, image.height, box)
    surface.draw_image(image.image, target.x, target.y, target.width, target.height)
    return target


def get_report_initials(value: object, fallback: str = "HB") -> str:
    """Two-letter initials for the image fallback badge."""
    text = normalize_name(value)
    if not text:
        return fallback
    parts = text.split(" ")
    if len(parts) == 1:
        return parts[0][:2].upper()
    return f"{parts[0][:1]}{parts[1][:1]}".upper()


def normalize_name(value: object) -> str:
    return " ".join(str(value or "").split())


@dataclass(frozen=True, slots=True)
class BadgeStyle:
    fill: str = "#dff3fb"
    color: str = "#2396c5"
    radius: float = 14.0
    weight: int = 700
    family: Optional[str] = None


def draw_logo(surface: DrawingSurface, image: Optional[ReportImage], name: object, box: Rect,
              badge: BadgeStyle = BadgeStyle()) -> bool:
    """Draw ``image`` fitted into ``box``, or an initials badge when it is missing.

    Returns ``True`` when the image itself was drawn.
    """
    if image is not None:
        draw_image_fit(surface, image, box)
        return True

    draw_rounded_rect(surface, box.x, box.y, box.width, box.height, badge.radius, fill=badge.fill)
    size = max(8.0, min(box.width, box.height) * 0.4)
    style = TextBlockStyle(size=size, weight=badge.weight, family=badge.family, color=badge.color,
                           align="center", max_lines=1, line_height=size)
    draw_text_block(surface, get_report_initials(name), box.x, box.y + (box.height - size) / 2,
                    box.width, style)
    return False
