"""

Text normalization, wrapping and truncation.

The wrapping algorithms take a ``measure`` callable returning the width of a
string in the font currently applied, so the same code serves the raster
surface (Pillow glyph advances) and the text PDF path (Helvetica AFM widths
from ReportLab). Nothing here depends on the layout engine.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List

from reportlab.pdfbase import pdfmetrics  # type: ignore

Measure = Callable[[str], float]

ELLIPSIS = "..."

_WHITESPACE = re.compile(r"\s+")


def normalize_text(value: object) -> str:
    """Collapse whitespace runs to single spaces and trim the ends."""
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value)).strip()


def wrap_text(measure: Measure, text: object, max_width: float) -> List[str]:
    """

    Greedy word wrap.

    Words are appended to the current line while the line fits in
    ``max_width``. A word wider than ``max_width`` on its own is broken
    character by character; each sub-line keeps at least one character.

    Returns:
    At least one line (``[""]`` for empty input).

    """
    normalized = normalize_text(text)
    if not normalized:
        return [""]
    safe_max_width = max_width if max_width and max_width > 0 else 1.0

    lines: List[str] = []
    current = ""

    for word in normalized.split(" "):
        candidate = f"{current} {word}" if current else word
        if measure(candidate) <= safe_max_width:
            current = candidate
            continue

        if current:
            lines.append(current)
            current = ""

        if measure(word) <= safe_max_width:
            current = word
            continue

        piece = ""
        for character in word:
            extended = piece + character
            if not piece or measure(extended) <= safe_max_width:
                piece = extended
                continue
            lines.append(piece)
            piece = character
        current = piece

    if current:
        lines.append(current)
    return lines or [""]


def truncate_text(measure: Measure, text: object, max_width: float, max_lines: int = 2) -> List[str]:
    """Wrap ``text`` and clamp it to ``max_lines`` lines, ending in an ellipsis."""
    safe_max_lines = max(1, int(max_lines or 1))
    lines = wrap_text(measure, text, max_width)
    if len(lines) <= safe_max_lines:
        return lines

    kept = lines[:safe_max_lines]
    last_line = kept[-1]
    while last_line and measure(last_line + ELLIPSIS) > max_width:
        last_line = last_line[:-1]
    kept[-1] = last_line + ELLIPSIS if last_line else ELLIPSIS
    return kept


@dataclass(frozen=True, slots=True)
class HelveticaMetrics:
    """Wrapping measured with the Base-14 Helvetica metrics."""

    font_size: float = 10.0
    font_name: str = "Helvetica"

    def measure(self, text: str) -> float:
        return float(pdfmetrics.stringWidth(text, self.font_name, self.font_size))

    def wrap(self, text: object, max_width: float) -> List[str]:
        return wrap_text(self.measure, text, max_width)

    def truncate(self, text: object, max_width: float, max_lines: int = 2) -> List[str]:
        return truncate_text(self.measure, text, max_width, max_lines)
