"""PDF objects and data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..exceptions import CompilationError
from .utils import escape_pdf_text, format_pdf_matrix, format_pdf_number


@dataclass(frozen=True, slots=True)
class PdfRef:
    """Indirect reference ``<n> <g> R``."""

    number: int
    generation: int = 0

    def __str__(self) -> str:
        return f"{self.number} {self.generation} R"


@dataclass
class PdfStream:
    """Content stream built from painting operations.

    Each entry of ``commands`` is one complete operation (for example a whole
    ``BT ... ET`` text run); operands inside an operation are separated by
    single spaces and operations by ``separator`` when serialized.
    """

    commands: List[str] = field(default_factory=list)

    def write(self, command: str) -> None:
        """Append a raw PDF command to the stream."""
        if command is None:
            return
        self.commands.append(str(command))

    def add_text(self, font_alias: str, font_size: float, x: float, y: float, text: object) -> None:
        """Add a text-showing run; ``text`` is reduced to escaped printable ASCII.

        Args:
            font_alias: Font alias (e.g., "/F1")
            font_size: Font size in points
            x: X position of the baseline start
            y: Y position of the baseline
            text: Text content
        """
        self.commands.append(" ".join([
            "BT",
            f"{font_alias} {format_pdf_number(font_size)} Tf",
            f"{format_pdf_number(x)} {format_pdf_number(y)} Td",
            f"({escape_pdf_text(text)}) Tj",
            "ET",
        ]))

    def add_image(self, image_alias: str, x: float, y: float, width: float, height: float) -> None:
        """Paint an image XObject scaled from unit image space to ``width`` x ``height``."""
        self.commands.append(" ".join([
            "q",
            f"{format_pdf_matrix(width, 0, 0, height, x, y)} cm",
            f"{image_alias} Do",
            "Q",
        ]))

    def get_content(self, separator: str = "\n") -> str:
        """Get stream content as string."""
        return separator.join(self.commands)

    def to_bytes(self, separator: str = "\n") -> bytes:
        try:
            return self.get_content(separator).encode("ascii")
        except UnicodeEncodeError as exc:
            raise CompilationError("Content stream must be ASCII", details=str(exc)) from exc


@dataclass
class PdfObject:
    """Indirect object: dictionary body plus an optional stream payload.

    ``/Length`` is never stored by callers; the writer derives it from the
    exact payload it emits.
    """

    number: int
    dictionary: Dict[str, Any] = field(default_factory=dict)
    stream: Optional[bytes] = None

    def __post_init__(self):
        if not isinstance(self.number, int) or isinstance(self.number, bool) or self.number < 1:
            raise CompilationError("Object numbers must be positive integers", details=repr(self.number))


@dataclass
class PdfDocument:
    """Represents a complete PDF document as a set of numbered objects."""

    objects: Dict[int, PdfObject] = field(default_factory=dict)
    catalog_obj_num: int = 1
    pages_obj_num: int = 2
    info_dict: Optional[Dict[str, str]] = None  # Title, Producer, ...

    def add(self, obj: PdfObject) -> PdfObject:
        if obj.number in self.objects:
            raise CompilationError("Duplicate object number", details=str(obj.number))
        self.objects[obj.number] = obj
        return obj

    def add_object(self, number: int, dictionary: Dict[str, Any], stream: Optional[bytes] = None) -> PdfObject:
        return self.add(PdfObject(number, dictionary, stream))

    @property
    def max_object_number(self) -> int:
        return max(self.objects, default=0)

    def get_catalog_dict(self) -> Dict[str, Any]:
        return {
            "Type": "/Catalog",
            "Pages": PdfRef(self.pages_obj_num),
        }

    def get_pages_tree_dict(self, page_obj_nums: List[int]) -> Dict[str, Any]:
        """Generate pages tree dictionary; kids keep display order."""
        kids = [PdfRef(num) for num in page_obj_nums]
        return {
            "Type": "/Pages",
            "Kids": kids,
            "Count": len(kids),
        }

    def add_page_tree(self, page_obj_nums: List[int]) -> None:
        """Add the catalog and pages objects for ``page_obj_nums``."""
        self.add_object(self.catalog_obj_num, self.get_catalog_dict())
        self.add_object(self.pages_obj_num, self.get_pages_tree_dict(page_obj_nums))

    def validate(self) -> None:
        """Check that the catalog exists and every reference points at an object."""
        if self.catalog_obj_num not in self.objects:
            raise CompilationError("Document has no catalog object")
        for obj in self.objects.values():
            for ref in _references(obj.dictionary):
                if ref.number not in self.objects:
                    raise CompilationError(
                        "Dangling object reference",
                        details=f"object {obj.number} references {ref}",
                    )


def _references(value: Any):
    if isinstance(value, PdfRef):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from _references(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _references(item)
