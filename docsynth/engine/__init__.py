"""Page layout engine: surfaces, text, shapes, images and block-flow pagination."""

from .blocks import (
    ContentBlock,
    ListBlock,
    ParagraphBlock,
    SectionBlock,
    SignatureBlock,
    TitleBlock,
    block_from_dict,
    blocks_from_list,
    load_blocks,
)
from .chrome import ChromeContent, StandardChrome
from .drawing import (
    DonutSegment,
    DonutStyle,
    PillStyle,
    TextBlockResult,
    TextBlockStyle,
    draw_divider,
    draw_donut_chart,
    draw_image_fit,
    draw_logo,
    draw_pill,
    draw_rounded_rect,
    draw_text_block,
    fit_image_box,
    get_report_initials,
    set_report_font,
)
from .fonts import FontRegistry, FontSpec
from .geometry import Rect
from .images import ReportImage, load_report_image, release_report_image, report_image
from .pagination import BlockFlowLayout, BlockStyles, PageChrome
from .surface import DrawingSurface, PillowSurface, create_report_page
from .text_metrics import TextMetrics, normalize_text, truncate_text, wrap_text

__all__ = [
    "BlockFlowLayout",
    "BlockStyles",
    "ChromeContent",
    "ContentBlock",
    "DonutSegment",
    "DonutStyle",
    "DrawingSurface",
    "FontRegistry",
    "FontSpec",
    "ListBlock",
    "PageChrome",
    "ParagraphBlock",
    "PillStyle",
    "PillowSurface",
    "Rect",
    "ReportImage",
    "SectionBlock",
    "SignatureBlock",
    "StandardChrome",
    "TextBlockResult",
    "TextBlockStyle",
    "TextMetrics",
    "TitleBlock",
    "block_from_dict",
    "blocks_from_list",
    "create_report_page",
    "draw_divider",
    "draw_donut_chart",
    "draw_image_fit",
    "draw_logo",
    "draw_pill",
    "draw_rounded_rect",
    "draw_text_block",
    "fit_image_box",
    "get_report_initials",
    "load_blocks",
    "load_report_image",
    "normalize_text",
    "release_report_image",
    "report_image",
    "set_report_font",
    "truncate_text",
    "wrap_text",
]
