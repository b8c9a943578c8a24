"""

Raster PDF path.

Every rendered page becomes one JPEG image XObject drawn over the whole PDF
page. The JPEG bytes are embedded as-is with ``/DCTDecode``; nothing is
re-encoded here.

Object layout for page ``i`` (zero-based): image ``3 + 3i``, content stream
``4 + 3i``, page ``5 + 3i``. The catalog is object 1 and the page tree 2.

"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Sequence

from ..config import DocSynthConfig, PdfPageSize
from ..exceptions import CompilationError
from .objects import PdfDocument, PdfRef, PdfStream
from .output import PdfFile
from .utils import to_pdf_ascii
from .writer import PdfWriter

if TYPE_CHECKING:
    from ..engine.surface import DrawingSurface

logger = logging.getLogger(__name__)

JPEG_SOI = b"\xff\xd8"
IMAGE_ALIAS = "/Im1"
DEFAULT_QUALITY = 0.92

_JPEG_DATA_URL = re.compile(r"^data:image/jpeg;base64,(.+)$", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True, slots=True)
class PageBuffer:
    """One rendered page: pixel size and its JPEG encoding."""

    width: int
    height: int
    data: bytes

    def validate(self, index: int = 0) -> None:
        for name, value in (("width", self.width), ("height", self.height)):
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise CompilationError(f"Page {index + 1} has an invalid {name}", details=repr(value))
        if not isinstance(self.data, (bytes, bytearray)) or not bytes(self.data[:2]) == JPEG_SOI:
            raise CompilationError(f"Page {index + 1} is not JPEG data",
                                   details="expected the FF D8 start-of-image marker")


def data_url_to_bytes(value: object) -> bytes:
    """Decode a ``data:image/jpeg;base64,...`` URL; any other input raises ``CompilationError``."""
    match = _JPEG_DATA_URL.match(str(value or ""))
    if not match:
        raise CompilationError("Expected a JPEG data URL for PDF export")
    try:
        return base64.b64decode(match.group(1), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CompilationError("JPEG data URL has an invalid base64 payload") from exc


def surface_to_jpeg_page(surface: DrawingSurface, quality: float = DEFAULT_QUALITY) -> PageBuffer:
    """Capture a finished surface as an immutable JPEG page buffer."""
    data = data_url_to_bytes(surface.to_data_url("image/jpeg", quality))
    return PageBuffer(width=int(surface.width), height=int(surface.height), data=data)


def build_image_document(pages: Sequence[PageBuffer], page_size: PdfPageSize = PdfPageSize(),
                         info: Optional[Dict[str, str]] = None) -> PdfDocument:
    """Build the object graph for ``pages``; all pages are validated first."""
    if not pages:
        raise CompilationError("At least one rendered report page is required")
    for index, page in enumerate(pages):
        page.validate(index)

    document = PdfDocument(info_dict=info)
    page_obj_nums = []
    for index, page in enumerate(pages):
        image_obj_num = 3 + index * 3
        content_obj_num = image_obj_num + 1
        page_obj_num = image_obj_num + 2

        document.add_object(image_obj_num, {
            "Type": "/XObject",
            "Subtype": "/Image",
            "Width": page.width,
            "Height": page.height,
            "ColorSpace": "/DeviceRGB",
            "BitsPerComponent": 8,
            "Filter": "/DCTDecode",
        }, stream=bytes(page.data))

        content = PdfStream()
        content.add_image(IMAGE_ALIAS, 0, 0, page_size.width, page_size.height)
        document.add_object(content_obj_num, {}, stream=content.to_bytes(" "))

        document.add_object(page_obj_num, {
            "Type": "/Page",
            "Parent": PdfRef(document.pages_obj_num),
            "MediaBox": [0, 0, page_size.width, page_size.height],
            "Resources": {"XObject": {IMAGE_ALIAS.lstrip("/"): PdfRef(image_obj_num)}},
            "Contents": PdfRef(content_obj_num),
        })
        page_obj_nums.append(page_obj_num)

    document.add_page_tree(page_obj_nums)
    return document


def build_pdf_from_image_pages(pages: Sequence[PageBuffer], page_size: PdfPageSize = PdfPageSize(),
                               info: Optional[Dict[str, str]] = None, compress_streams: bool = False,
                               producer: Optional[str] = None) -> bytes:
    """Assemble a complete PDF from JPEG page buffers, one image per page."""
    document = build_image_document(pages, page_size, info)
    data = PdfWriter(compress_streams=compress_streams, producer=producer).write(document)
    logger.debug("Built image PDF: %d page(s), %d bytes", len(pages), len(data))
    return data


def build_pdf_file_from_surfaces(surfaces: Sequence[DrawingSurface], file_name: str = "document.pdf",
                                 quality: Optional[float] = None, title: Optional[str] = None,
                                 config: Optional[DocSynthConfig] = None) -> PdfFile:
    """Encode every surface as JPEG and return the assembled ``PdfFile``.

    ``quality`` falls back to ``config.jpeg_quality``. A ``title`` adds an
    ``/Info`` dictionary; without one the output carries no metadata.
    """
    config = config or DocSynthConfig()
    if quality is None:
        quality = config.jpeg_quality
    if not surfaces:
        raise CompilationError("At least one rendered report page is required")

    pages = [surface_to_jpeg_page(surface, quality) for surface in surfaces]
    info = {"Title": to_pdf_ascii(title)} if title else None
    data = build_pdf_from_image_pages(pages, config.pdf_page, info=info,
                                      compress_streams=config.compress_streams,
                                      producer=config.producer)
    name = str(file_name or "document.pdf")
    logger.info("Exported %s: %d page(s), %d bytes", name, len(pages), len(data))
    return PdfFile(name=name, data=data)
