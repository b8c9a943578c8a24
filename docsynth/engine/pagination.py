"""

Block-flow pagination.

Lays an ordered list of content blocks onto as many fixed-size pages as
needed. A block is never split across pages: each block is measured with the
exact code path used to draw it, and a new page is started when the block
would cross the body bottom.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence

from ..config import LayoutConfig
from ..exceptions import LayoutError
from .blocks import ContentBlock, ListBlock, ParagraphBlock, SectionBlock, SignatureBlock, TitleBlock
from .drawing import TextBlockStyle, draw_divider, draw_text_block, layout_text_block
from .fonts import FontRegistry
from .surface import DrawingSurface, PillowSurface, create_report_page

logger = logging.getLogger(__name__)


class PageChrome(Protocol):
    """Header/footer painter applied to every finished page."""

    def draw(self, surface: DrawingSurface, page_number: int, page_count: int) -> None: ...


@dataclass(frozen=True, slots=True)
class BlockStyles:
    """Typography and spacing per block kind."""

    ink: str = "#111111"
    title: TextBlockStyle = field(default_factory=lambda: TextBlockStyle(
        size=18, weight=700, color="#111111", line_height=32))
    title_spacing: float = 18.0
    section: TextBlockStyle = field(default_factory=lambda: TextBlockStyle(
        size=16, weight=700, color="#111111", line_height=28))
    section_spacing: float = 8.0
    underline_gap: float = 4.0
    underline_width: float = 1.2
    heading_after: float = 12.0
    paragraph: TextBlockStyle = field(default_factory=lambda: TextBlockStyle(
        size=15, weight=400, color="#2f2f2f", line_height=28))
    paragraph_spacing: float = 14.0
    list_item: TextBlockStyle = field(default_factory=lambda: TextBlockStyle(
        size=15, weight=400, color="#2f2f2f", line_height=27))
    list_indent: float = 28.0
    list_item_spacing: float = 8.0
    list_spacing: float = 2.0
    signature_line_width: float = 280.0
    signature_line_offset: float = 28.0
    signature_height: float = 120.0
    signature_name: TextBlockStyle = field(default_factory=lambda: TextBlockStyle(
        size=13, weight=700, color="#111111", align="center", max_lines=1, line_height=18))
    signature_role: TextBlockStyle = field(default_factory=lambda: TextBlockStyle(
        size=12, weight=400, color="#666666", align="center", max_lines=1, line_height=16))


class BlockFlowLayout:
    """Measures, draws and paginates content blocks on raster pages."""

    def __init__(self, config: Optional[LayoutConfig] = None,
                 surface_factory: Optional[Callable[[], PillowSurface]] = None,
                 chrome: Optional[PageChrome] = None, styles: Optional[BlockStyles] = None,
                 fonts: Optional[FontRegistry] = None):
        self.config = config or LayoutConfig()
        self.styles = styles or BlockStyles()
        self.chrome = chrome
        self.fonts = fonts or FontRegistry(self.config.fonts.search_dirs)
        self.surface_factory = surface_factory or (lambda: create_report_page(self.config, self.fonts))
        self.family = self.config.fonts.family

        page = self.config.page
        if page.body_bottom <= page.body_top:
            raise LayoutError("Page body bottom must be below body top",
                              details=f"top={page.body_top}, bottom={page.body_bottom}")

    @property
    def body_x(self) -> float:
        return self.config.page.margin_x

    @property
    def body_width(self) -> float:
        return self.config.page.body_width

    def new_page(self) -> PillowSurface:
        return self.surface_factory()

    # ------------------------------------------------------------------
    # Measure / render
    # ------------------------------------------------------------------
    def measure(self, surface: DrawingSurface, block: ContentBlock) -> float:
        """Height the block occupies including its trailing spacing."""
        return self._flow(surface, block, 0.0, paint=False)

    def render(self, surface: DrawingSurface, block: ContentBlock, cursor_y: float) -> float:
        """Draw the block at ``cursor_y`` and return the advanced cursor."""
        return cursor_y + self._flow(surface, block, cursor_y, paint=True)

    def _flow(self, surface: DrawingSurface, block: ContentBlock, y: float, paint: bool) -> float:
        styles = self.styles
        if isinstance(block, TitleBlock):
            return self._heading(surface, block.text, y, styles.title, paint) + styles.title_spacing
        if isinstance(block, SectionBlock):
            return self._heading(surface, block.text, y, styles.section, paint) + styles.section_spacing
        if isinstance(block, ParagraphBlock):
            return self._text(surface, block.text, self.body_x, y, self.body_width,
                              styles.paragraph, paint) + styles.paragraph_spacing
        if isinstance(block, ListBlock):
            return self._list(surface, block, y, paint)
        if isinstance(block, SignatureBlock):
            if paint:
                self._signature(surface, block, y)
            return styles.signature_height
        raise LayoutError("Unsupported block", details=type(block).__name__)

    def _text(self, surface: DrawingSurface, text: str, x: float, y: float, width: float,
              style: TextBlockStyle, paint: bool) -> float:
        if paint:
            return draw_text_block(surface, text, x, y, width, style, self.family).height
        return layout_text_block(surface, text, width, style, self.family).height

    def _heading(self, surface: DrawingSurface, text: str, y: float, style: TextBlockStyle,
                 paint: bool) -> float:
        styles = self.styles
        if paint:
            rendered = draw_text_block(surface, text, self.body_x, y, self.body_width, style, self.family)
            underline = min(self.body_width, max(surface.measure_text(line) for line in rendered.lines))
            draw_divider(surface, self.body_x, y + rendered.height + styles.underline_gap, underline,
                         color=style.color, line_width=styles.underline_width)
            height = rendered.height
        else:
            height = layout_text_block(surface, text, self.body_width, style, self.family).height
        return height + styles.heading_after

    def _list(self, surface: DrawingSurface, block: ListBlock, y: float, paint: bool) -> float:
        styles = self.styles
        style = styles.list_item
        marker_x = self.body_x + styles.list_indent
        cursor = y
        for index, item in enumerate(block.items):
            marker = block.marker(index)
            surface.set_font(style.font_spec(self.family))
            gutter = surface.measure_text(marker)
            text_x = marker_x + gutter
            text_width = self.body_width - styles.list_indent - gutter
            if paint:
                surface.draw_text(marker.rstrip(), marker_x, cursor, style.color, "left")
            cursor += self._text(surface, item, text_x, cursor, text_width, style, paint)
            cursor += styles.list_item_spacing
        return cursor - y + styles.list_spacing

    def _signature(self, surface: DrawingSurface, block: SignatureBlock, y: float) -> None:
        styles = self.styles
        width = styles.signature_line_width
        line_y = y + styles.signature_line_offset
        left_x = self.body_x
        right_x = self.config.page.width - self.body_x - width
        for x, name, role in ((left_x, block.left_name, block.left_role),
                              (right_x, block.right_name, block.right_role)):
            draw_divider(surface, x, line_y, width, color=styles.ink, line_width=1)
            draw_text_block(surface, name, x, line_y + 12, width, styles.signature_name, self.family)
            draw_text_block(surface, role, x, line_y + 34, width, styles.signature_role, self.family)

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------
    def paginate(self, blocks: Sequence[ContentBlock]) -> List[PillowSurface]:
        """Flow ``blocks`` onto pages; always returns at least one page."""
        page_config = self.config.page
        pages: List[PillowSurface] = [self.new_page()]
        cursor_y = page_config.body_top
        placed_on_page = 0

        for block in blocks:
            surface = pages[-1]
            height = self.measure(surface, block)
            if cursor_y + height > page_config.body_bottom and placed_on_page > 0:
                surface = self.new_page()
                pages.append(surface)
                cursor_y = page_config.body_top
                placed_on_page = 0
                logger.debug("Started page %d for %s block", len(pages), block.kind)
            if cursor_y + height > page_config.body_bottom:
                logger.warning("%s block of height %.0f overflows page %d", block.kind, height, len(pages))
            cursor_y = self.render(surface, block, cursor_y)
            placed_on_page += 1

        if self.chrome is not None:
            for number, surface in enumerate(pages, start=1):
                self.chrome.draw(surface, number, len(pages))

        logger.debug("Laid out %d blocks on %d page(s)", len(blocks), len(pages))
        return pages
