"""PDF file writer - generates objects, xref, trailer, and final PDF bytes."""

from __future__ import annotations

import logging
import zlib
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..exceptions import CompilationError
from .objects import PdfDocument, PdfObject, PdfRef
from .utils import escape_pdf_string, format_pdf_number

logger = logging.getLogger(__name__)

PDF_HEADER = b"%PDF-1.4\n"
FREE_ENTRY = b"0000000000 65535 f \n"


class PdfWriter:
    """Serializes a ``PdfDocument`` into bytes.

    Objects are emitted in ascending number order while a running byte
    counter records the offset of every ``<n> 0 obj`` line; those offsets
    feed the cross-reference table. All accounting is done on encoded bytes.
    """

    def __init__(self, compress_streams: bool = False, producer: Optional[str] = None):
        self.compress_streams = compress_streams
        self.producer = producer
        self._parts: List[bytes] = []
        self._offsets: Dict[int, int] = {}
        self.current_offset = 0

    def write(self, document: PdfDocument) -> bytes:
        """Return the complete PDF file for ``document``.

        Raises:
            CompilationError: If the document has no objects or dangling references
        """
        if document is None or not document.objects:
            raise CompilationError("Document has no objects to write")
        document.validate()

        self._parts = []
        self._offsets = {}
        self.current_offset = 0

        objects = dict(document.objects)
        info_obj_num = None
        if document.info_dict:
            info = dict(document.info_dict)
            if self.producer:
                info.setdefault("Producer", self.producer)
            info_obj_num = document.max_object_number + 1
            objects[info_obj_num] = PdfObject(info_obj_num, info)

        self._push(PDF_HEADER)
        for number in sorted(objects):
            self._write_object(objects[number])

        max_number = max(objects)
        xref_offset = self.current_offset
        self._write_xref(max_number)
        self._write_trailer(xref_offset, max_number, document.catalog_obj_num, info_obj_num)

        data = b"".join(self._parts)
        logger.debug("Serialized %d objects into %d bytes", len(objects), len(data))
        return data

    def write_to(self, document: PdfDocument, output_path: str | Path) -> Path:
        path = Path(output_path)
        path.write_bytes(self.write(document))
        return path

    def _push(self, part: bytes) -> None:
        self._parts.append(part)
        self.current_offset += len(part)

    def _write_object(self, obj: PdfObject) -> None:
        self._offsets[obj.number] = self.current_offset
        self._push(f"{obj.number} 0 obj\n".encode("ascii"))

        if obj.stream is None:
            self._push(self._dict_to_pdf(obj.dictionary).encode("latin-1", "replace"))
        else:
            stream_dict = dict(obj.dictionary)
            payload = obj.stream
            if self.compress_streams and "Filter" not in stream_dict:
                payload = zlib.compress(payload)
                stream_dict["Filter"] = "/FlateDecode"
            stream_dict["Length"] = len(payload)
            self._push(self._dict_to_pdf(stream_dict).encode("latin-1", "replace"))
            self._push(b"\nstream\n")
            self._push(payload)
            self._push(b"\nendstream")

        self._push(b"\nendobj\n")

    def _write_xref(self, max_number: int) -> None:
        self._push(b"xref\n")
        self._push(f"0 {max_number + 1}\n".encode("ascii"))
        self._push(FREE_ENTRY)
        for number in range(1, max_number + 1):
            offset = self._offsets.get(number)
            if offset is None:
                logger.debug("Object %d missing, writing free xref entry", number)
                self._push(FREE_ENTRY)
            else:
                self._push(f"{offset:010d} 00000 n \n".encode("ascii"))

    def _write_trailer(self, xref_offset: int, max_number: int, root_obj_num: int,
                       info_obj_num: Optional[int] = None) -> None:
        trailer_dict: Dict[str, Any] = {
            "Size": max_number + 1,
            "Root": PdfRef(root_obj_num),
        }
        if info_obj_num is not None:
            trailer_dict["Info"] = PdfRef(info_obj_num)
        self._push(b"trailer\n")
        self._push(self._dict_to_pdf(trailer_dict).encode("latin-1", "replace"))
        self._push(f"\nstartxref\n{xref_offset}\n%%EOF\n".encode("ascii"))

    def _dict_to_pdf(self, d: Dict[str, Any]) -> str:
        """Convert dictionary to PDF format.

        Keys become names; string values starting with ``/`` are names and any
        other string is written as an escaped literal string.
        """
        parts = ["<<"]
        for key, value in d.items():
            clean_key = key.lstrip("/")
            parts.append(f"/{clean_key} {self._value_to_pdf(value)}")
        parts.append(">>")
        return " ".join(parts)

    def _value_to_pdf(self, value: Any) -> str:
        if isinstance(value, PdfRef):
            return str(value)
        if isinstance(value, dict):
            return self._dict_to_pdf(value)
        if isinstance(value, (list, tuple)):
            return "[" + " ".join(self._value_to_pdf(item) for item in value) + "]"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return format_pdf_number(value)
        if isinstance(value, str):
            if value.startswith("/"):
                return value
            return f"({escape_pdf_string(value)})"
        raise CompilationError("Unsupported PDF value", details=type(value).__name__)
