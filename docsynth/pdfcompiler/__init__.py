"""PDF Compiler - hand-assembled PDF files from raster pages or text lines."""

from .image_document import (
    PageBuffer,
    build_pdf_file_from_surfaces,
    build_pdf_from_image_pages,
    data_url_to_bytes,
    surface_to_jpeg_page,
)
from .objects import PdfDocument, PdfObject, PdfRef, PdfStream
from .output import PdfFile
from .text_document import build_text_pdf, build_text_pdf_file, wrap_pdf_line
from .utils import escape_pdf_text, to_pdf_ascii
from .writer import PdfWriter

__all__ = [
    "PageBuffer",
    "PdfDocument",
    "PdfFile",
    "PdfObject",
    "PdfRef",
    "PdfStream",
    "PdfWriter",
    "build_pdf_file_from_surfaces",
    "build_pdf_from_image_pages",
    "build_text_pdf",
    "build_text_pdf_file",
    "data_url_to_bytes",
    "escape_pdf_text",
    "surface_to_jpeg_page",
    "to_pdf_ascii",
    "wrap_pdf_line",
]
