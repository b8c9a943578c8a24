"""

Plain text PDF path.

Writes a title and a list of ASCII lines as Helvetica text-showing runs, one
``BT /F1 <size> Tf <x> <y> Td (<text>) Tj ET`` run per line. Lines move down
by a fixed line height and never go below the bottom margin: overflowing
lines continue on a new page, or are dropped when pagination is disabled.

Object numbering for ``N`` pages: catalog 1, pages 2, page objects
``3..N+2``, content streams ``N+3..2N+2`` and the shared font ``2N+3``.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from ..config import DocSynthConfig, TextDocumentOptions
from ..utils.text import HelveticaMetrics
from .objects import PdfDocument, PdfRef, PdfStream
from .output import PdfFile
from .utils import to_pdf_ascii
from .writer import PdfWriter

logger = logging.getLogger(__name__)

FONT_ALIAS = "/F1"
DEFAULT_TITLE = "Document"


@dataclass(frozen=True, slots=True)
class TextRun:
    size: float
    x: float
    y: float
    text: str


@dataclass(slots=True)
class TextPage:
    runs: List[TextRun] = field(default_factory=list)


def wrap_pdf_line(value: object, max_chars: int = 92) -> List[str]:
    """Wrap ``value`` by character count.

    Words longer than ``max_chars`` are split into ``max_chars - 1`` character
    pieces ending in a hyphen. Returns ``[""]`` for empty input.
    """
    text = to_pdf_ascii(value)
    if not text:
        return [""]
    max_chars = max(2, int(max_chars))

    lines: List[str] = []
    current = ""
    for word in text.split(" "):
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_chars:
            current = candidate
            continue
        if current:
            lines.append(current)
        remaining = word
        while len(remaining) > max_chars:
            lines.append(remaining[: max_chars - 1] + "-")
            remaining = remaining[max_chars - 1:]
        current = remaining
    if current:
        lines.append(current)
    return lines or [""]


def prepare_lines(lines: Iterable[object], options: TextDocumentOptions = TextDocumentOptions(),
                  wrap: bool = True) -> List[str]:
    """ASCII-normalize ``lines``; with ``wrap`` each is wrapped.

    ``options.wrap_mode`` picks the rule: ``"width"`` measures Helvetica at the
    line size against the text width, ``"chars"`` counts ``options.max_chars``.
    """
    metrics = HelveticaMetrics(font_size=options.line_size)
    prepared: List[str] = []
    for line in lines:
        text = to_pdf_ascii(line)
        if wrap and text and options.wrap_mode == "chars":
            prepared.extend(wrap_pdf_line(text, options.max_chars))
        elif wrap and text:
            prepared.extend(metrics.wrap(text, options.text_width))
        else:
            prepared.append(text)
    return prepared


def layout_text_pages(title: object, lines: Sequence[str],
                      options: TextDocumentOptions = TextDocumentOptions()) -> List[TextPage]:
    """Position the title and ``lines``; continuation pages start at the title baseline."""
    heading = to_pdf_ascii(title) or DEFAULT_TITLE
    pages = [TextPage(runs=[TextRun(options.title_size, options.margin_x, options.title_y, heading)])]
    y = options.first_line_y

    for index, line in enumerate(lines):
        if y < options.bottom_margin:
            if not options.paginate:
                logger.warning("Dropped %d line(s) below the bottom margin", len(lines) - index)
                break
            pages.append(TextPage())
            y = options.title_y
        pages[-1].runs.append(TextRun(options.line_size, options.margin_x, y, line))
        y -= options.line_height

    return pages


def build_text_document(pages: Sequence[TextPage],
                        options: TextDocumentOptions = TextDocumentOptions(),
                        info: Optional[dict] = None) -> PdfDocument:
    count = len(pages)
    font_obj_num = 2 * count + 3
    document = PdfDocument(info_dict=info)

    page_obj_nums = []
    for index, page in enumerate(pages):
        page_obj_num = 3 + index
        content_obj_num = 3 + count + index

        stream = PdfStream()
        for run in page.runs:
            stream.add_text(FONT_ALIAS, run.size, run.x, run.y, run.text)

        document.add_object(page_obj_num, {
            "Type": "/Page",
            "Parent": PdfRef(document.pages_obj_num),
            "MediaBox": [0, 0, options.page_width, options.page_height],
            "Resources": {"Font": {FONT_ALIAS.lstrip("/"): PdfRef(font_obj_num)}},
            "Contents": PdfRef(content_obj_num),
        })
        document.add_object(content_obj_num, {}, stream=stream.to_bytes("\n"))
        page_obj_nums.append(page_obj_num)

    document.add_object(font_obj_num, {
        "Type": "/Font",
        "Subtype": "/Type1",
        "BaseFont": "/Helvetica",
    })
    document.add_page_tree(page_obj_nums)
    return document


def build_text_pdf(title: object, lines: Iterable[object],
                   options: Optional[TextDocumentOptions] = None, wrap: bool = True,
                   info: Optional[dict] = None, compress_streams: bool = False,
                   producer: Optional[str] = None) -> bytes:
    """Assemble a text-only PDF: a 16pt title and 10pt body lines by default."""
    options = options or TextDocumentOptions()
    prepared = prepare_lines(lines, options, wrap=wrap)
    pages = layout_text_pages(title, prepared, options)
    document = build_text_document(pages, options, info)
    data = PdfWriter(compress_streams=compress_streams, producer=producer).write(document)
    logger.debug("Built text PDF: %d line(s) on %d page(s), %d bytes", len(prepared), len(pages), len(data))
    return data


def build_text_pdf_file(title: object, lines: Iterable[object], file_name: str = "document.pdf",
                        config: Optional[DocSynthConfig] = None, wrap: bool = True) -> PdfFile:
    config = config or DocSynthConfig()
    heading = to_pdf_ascii(title) or DEFAULT_TITLE
    data = build_text_pdf(heading, lines, config.text, wrap=wrap, info={"Title": heading},
                          compress_streams=config.compress_streams, producer=config.producer)
    name = str(file_name or "document.pdf")
    logger.info("Exported %s (%d bytes)", name, len(data))
    return PdfFile(name=name, data=data)
