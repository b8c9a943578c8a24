"""Surface-bound text measurement on top of ``docsynth.utils.text``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..utils.text import ELLIPSIS, Measure, normalize_text, truncate_text, wrap_text
from .surface import DrawingSurface

__all__ = [
    "ELLIPSIS",
    "Measure",
    "TextMetrics",
    "normalize_text",
    "truncate_text",
    "wrap_text",
]


@dataclass(slots=True)
class TextMetrics:
    """Wrapping helpers bound to a surface with a font already applied."""

    surface: DrawingSurface

    def measure(self, text: str) -> float:
        return self.surface.measure_text(text)

    def wrap(self, text: object, max_width: float) -> List[str]:
        return wrap_text(self.surface.measure_text, text, max_width)

    def truncate(self, text: object, max_width: float, max_lines: int = 2) -> List[str]:
        return truncate_text(self.surface.measure_text, text, max_width, max_lines)

    def widest_line(self, lines: Sequence[str]) -> float:
        return max((self.surface.measure_text(line) for line in lines), default=0.0)

    def measure_lines(self, text: object, max_width: float, line_height: float) -> float:
        """Height of ``text`` wrapped to ``max_width``."""
        return len(self.wrap(text, max_width)) * line_height
