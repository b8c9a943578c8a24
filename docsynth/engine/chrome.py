"""Page header and footer painted around the block-flow body."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import PageGeometry
from .drawing import BadgeStyle, TextBlockStyle, draw_divider, draw_logo, draw_text_block
from .geometry import Rect
from .images import ReportImage
from .surface import DrawingSurface

DEFAULT_GENERATED_BY = "docsynth"
DEFAULT_FOOTER_NOTE = "Confirm attendance and resolutions before sharing externally."


@dataclass(frozen=True, slots=True)
class ChromeContent:
    """Strings and media shown in the header and footer.

    ``generated_on`` is an already formatted date label; nothing here reads
    the clock so the same input always yields the same pages.
    """

    organization: str = ""
    title: str = ""
    generated_by: str = DEFAULT_GENERATED_BY
    generated_on: str = ""
    footer_note: str = DEFAULT_FOOTER_NOTE
    logo: Optional[ReportImage] = None
    show_header: bool = True


class StandardChrome:
    """Header with logo (or initials), organisation and title; footer with page number."""

    logo_size = 64.0
    header_top = 40.0
    header_rule_y = 128.0
    header_bottom = 152.0
    line_color = "#d4d4d4"
    ink = "#111111"
    footer_color = "#505050"
    soft = "#666666"

    def __init__(self, geometry: PageGeometry, content: ChromeContent = ChromeContent(),
                 family: str = "sans"):
        self.geometry = geometry
        self.content = content
        self.family = family

    def body_top(self) -> float:
        """First usable body y once the header is drawn."""
        if self.content.show_header:
            return max(self.geometry.body_top, self.header_bottom)
        return self.geometry.body_top

    def draw(self, surface: DrawingSurface, page_number: int, page_count: int) -> None:
        if self.content.show_header:
            self.draw_header(surface)
        self.draw_footer(surface, page_number, page_count)

    def draw_header(self, surface: DrawingSurface) -> None:
        content = self.content
        margin = self.geometry.margin_x
        box = Rect(margin, self.header_top, self.logo_size, self.logo_size)
        draw_logo(surface, content.logo, content.organization, box, BadgeStyle(family=self.family))

        text_x = margin + self.logo_size + 20
        text_width = self.geometry.width - margin - text_x
        draw_text_block(surface, content.organization or "Organisation", text_x, self.header_top + 4,
                        text_width, TextBlockStyle(size=20, weight=700, color=self.ink, max_lines=1,
                                                   line_height=26), self.family)
        if content.title:
            draw_text_block(surface, content.title, text_x, self.header_top + 36, text_width,
                            TextBlockStyle(size=14, weight=400, color=self.soft, max_lines=1,
                                           line_height=18), self.family)
        draw_divider(surface, margin, self.header_rule_y, self.geometry.body_width, color=self.line_color)

    def draw_footer(self, surface: DrawingSurface, page_number: int, page_count: int) -> None:
        content = self.content
        geometry = self.geometry
        margin = geometry.margin_x
        height = geometry.height

        draw_divider(surface, margin, height - 128, geometry.body_width, color=self.line_color)

        generated = f"Generated by {content.generated_by or DEFAULT_GENERATED_BY}"
        if content.generated_on:
            generated += f" on {content.generated_on}"
        draw_text_block(surface, generated, margin, height - 102, 600,
                        TextBlockStyle(size=12, color=self.footer_color, max_lines=1, line_height=16),
                        self.family)
        if content.footer_note:
            draw_text_block(surface, content.footer_note, margin, height - 76, 760,
                            TextBlockStyle(size=11, color=self.soft, max_lines=2, line_height=14),
                            self.family)

        label = f"Page {page_number}" if page_count <= 1 else f"Page {page_number} of {page_count}"
        draw_text_block(surface, label, geometry.width - margin - 120, height - 100, 120,
                        TextBlockStyle(size=12, color=self.footer_color, align="right", max_lines=1,
                                       line_height=16), self.family)
