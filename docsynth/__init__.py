"""
docsynth - report pages and hand-assembled PDF files.

Content blocks are laid out on fixed-size raster pages with a Pillow drawing
surface, paginated without ever splitting a block, and written into a PDF
built byte by byte (objects, cross-reference table, trailer) with each page
embedded as a JPEG image. A second path writes ASCII text lines as Helvetica
text runs.

Quick Start:
    import asyncio
    from docsynth import ParagraphBlock, TitleBlock, build_report_file

    pdf = asyncio.run(build_report_file([TitleBlock("Minutes"), ParagraphBlock("...")]))
    pdf.save("minutes.pdf")

    from docsynth import build_text_pdf
    data = build_text_pdf("Notes", ["first line", "second line"])
"""

from .version import __version__, __version_info__

from .exceptions import (
    CompilationError,
    ConfigError,
    DocSynthError,
    FontError,
    LayoutError,
    MediaError,
    RenderingError,
)
from .config import (
    DocSynthConfig,
    FontDefaults,
    LayoutConfig,
    PageGeometry,
    PdfPageSize,
    TextDocumentOptions,
    load_config,
)
from .engine import (
    BlockFlowLayout,
    ListBlock,
    ParagraphBlock,
    SectionBlock,
    SignatureBlock,
    TitleBlock,
    load_blocks,
)
from .pdfcompiler import (
    PageBuffer,
    PdfFile,
    build_pdf_file_from_surfaces,
    build_pdf_from_image_pages,
    build_text_pdf,
    build_text_pdf_file,
)
from .report import build_report_file

__all__ = [
    "__version__",
    "__version_info__",
    "BlockFlowLayout",
    "CompilationError",
    "ConfigError",
    "DocSynthConfig",
    "DocSynthError",
    "FontDefaults",
    "FontError",
    "LayoutConfig",
    "LayoutError",
    "ListBlock",
    "MediaError",
    "PageBuffer",
    "PageGeometry",
    "ParagraphBlock",
    "PdfFile",
    "PdfPageSize",
    "RenderingError",
    "SectionBlock",
    "SignatureBlock",
    "TextDocumentOptions",
    "TitleBlock",
    "build_pdf_file_from_surfaces",
    "build_pdf_from_image_pages",
    "build_report_file",
    "build_text_pdf",
    "build_text_pdf_file",
    "load_blocks",
    "load_config",
]
