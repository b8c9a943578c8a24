"""

Report builder: content blocks in, ``PdfFile`` out.

This is the entry point a document template calls. The logo is the only
asynchronous input; it is awaited once before layout starts and released
when the pages are finished, whether or not layout succeeds.

"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx

from .config import DocSynthConfig
from .engine.blocks import ContentBlock, block_from_dict
from .engine.chrome import DEFAULT_FOOTER_NOTE, DEFAULT_GENERATED_BY, ChromeContent, StandardChrome
from .engine.images import report_image
from .engine.pagination import BlockFlowLayout
from .engine.surface import PillowSurface
from .pdfcompiler.image_document import build_pdf_file_from_surfaces
from .pdfcompiler.output import PdfFile

logger = logging.getLogger(__name__)

BlockInput = Union[ContentBlock, Dict[str, Any]]


def coerce_blocks(blocks: Sequence[BlockInput]) -> List[ContentBlock]:
    """Accept block objects or their JSON dictionaries."""
    return [block_from_dict(block) if isinstance(block, dict) else block for block in blocks]


def render_report_pages(blocks: Sequence[BlockInput], chrome: StandardChrome,
                        config: Optional[DocSynthConfig] = None) -> List[PillowSurface]:
    """Lay ``blocks`` out below the chrome header and return the page surfaces."""
    config = config or DocSynthConfig()
    page = replace(config.layout.page, body_top=chrome.body_top())
    layout = BlockFlowLayout(replace(config.layout, page=page), chrome=chrome)
    return layout.paginate(coerce_blocks(blocks))


async def build_report_file(
    blocks: Sequence[BlockInput],
    file_name: str = "report.pdf",
    title: str = "",
    organization: str = "",
    logo_url: Optional[str] = None,
    quality: Optional[float] = None,
    config: Optional[DocSynthConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
    generated_by: str = DEFAULT_GENERATED_BY,
    generated_on: str = "",
    footer_note: str = DEFAULT_FOOTER_NOTE,
    show_header: bool = True,
) -> PdfFile:
    """Render ``blocks`` into a paginated raster PDF.

    A missing or failing logo degrades to an initials badge; layout and PDF
    assembly errors propagate.
    """
    config = config or DocSynthConfig()
    async with report_image(logo_url, client=client) as logo:
        chrome = StandardChrome(
            config.layout.page,
            ChromeContent(
                organization=organization,
                title=title,
                generated_by=generated_by,
                generated_on=generated_on,
                footer_note=footer_note,
                logo=logo,
                show_header=show_header,
            ),
            family=config.layout.fonts.family,
        )
        surfaces = render_report_pages(blocks, chrome, config)

    logger.debug("Rendered %d report page(s)", len(surfaces))
    return build_pdf_file_from_surfaces(surfaces, file_name=file_name, quality=quality,
                                        title=title or None, config=config)
