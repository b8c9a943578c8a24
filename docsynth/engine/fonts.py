"""
Font resolution for the raster drawing surface.

Looks up TrueType files for a small set of font families in configured
search directories and loads them through Pillow. When no file is found the
Pillow bundled scalable font is used, so layout keeps working on hosts
without system fonts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple, Union

from PIL import ImageFont

from ..exceptions import FontError

logger = logging.getLogger(__name__)

FONT_VARIANTS: Dict[str, Dict[str, Tuple[str, ...]]] = {
    "sans": {
        "regular": ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf", "arial.ttf"),
        "bold": ("DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf"),
    },
    "serif": {
        "regular": ("DejaVuSerif.ttf", "LiberationSerif-Regular.ttf", "Times New Roman.ttf", "times.ttf"),
        "bold": ("DejaVuSerif-Bold.ttf", "LiberationSerif-Bold.ttf", "Times New Roman Bold.ttf", "timesbd.ttf"),
    },
    "mono": {
        "regular": ("DejaVuSansMono.ttf", "LiberationMono-Regular.ttf", "cour.ttf"),
        "bold": ("DejaVuSansMono-Bold.ttf", "LiberationMono-Bold.ttf", "courbd.ttf"),
    },
}

_WEIGHT_NAMES = {
    "thin": 100,
    "light": 300,
    "normal": 400,
    "regular": 400,
    "medium": 500,
    "semibold": 600,
    "bold": 700,
    "bolder": 800,
    "black": 900,
}

BOLD_THRESHOLD = 600

PillowFont = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


def normalize_font_weight(value: Union[int, str, None]) -> int:
    """Map CSS-like weights ("bold", "700", 700) to an integer weight."""
    if value is None:
        return 400
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if not text:
        return 400
    if text in _WEIGHT_NAMES:
        return _WEIGHT_NAMES[text]
    try:
        return int(float(text))
    except ValueError as exc:
        raise FontError("Unrecognised font weight", details=repr(value)) from exc


@dataclass(frozen=True, slots=True)
class FontSpec:
    """Font applied to a surface before measuring or painting text."""

    size: float = 16.0
    weight: int = 400
    family: str = "sans"

    @property
    def bold(self) -> bool:
        return self.weight >= BOLD_THRESHOLD


class FontRegistry:
    """Resolves ``FontSpec`` values to loaded Pillow fonts.

    The directory index and loaded fonts are cached per registry instance.
    """

    def __init__(self, search_dirs: Iterable[str] = ()):
        self.search_dirs = [Path(d).expanduser() for d in search_dirs]
        self._index: Optional[Dict[str, Path]] = None
        self._fonts: Dict[Tuple[str, bool, int], PillowFont] = {}

    def _build_index(self) -> Dict[str, Path]:
        index: Dict[str, Path] = {}
        for root in self.search_dirs:
            if not root.is_dir():
                continue
            try:
                for candidate in root.rglob("*.tt[fc]"):
                    index.setdefault(candidate.name.lower(), candidate)
            except OSError as exc:
                logger.debug("Could not scan font directory %s: %s", root, exc)
        logger.debug("Indexed %d font files", len(index))
        return index

    def locate(self, family: str, bold: bool) -> Optional[Path]:
        """Return the font file for ``family`` or ``None``.

        ``family`` may be a known family key, a font file name or a path.
        """
        direct = Path(family).expanduser()
        if direct.suffix.lower() in (".ttf", ".otf", ".ttc") and direct.is_file():
            return direct

        if self._index is None:
            self._index = self._build_index()

        variants = FONT_VARIANTS.get(family.lower())
        if variants is None:
            candidates: Tuple[str, ...] = (family,)
        else:
            candidates = variants["bold" if bold else "regular"]
        for name in candidates:
            path = self._index.get(name.lower())
            if path:
                return path
        return None

    def load(self, spec: FontSpec) -> PillowFont:
        pixel_size = max(1, int(round(spec.size)))
        key = (spec.family, spec.bold, pixel_size)
        font = self._fonts.get(key)
        if font is not None:
            return font

        path = self.locate(spec.family, spec.bold)
        if path is not None:
            try:
                font = ImageFont.truetype(str(path), pixel_size)
            except OSError as exc:
                logger.warning("Failed to load font %s: %s", path, exc)
                font = None
        if font is None:
            logger.debug("No font file for %s (bold=%s), using Pillow default", spec.family, spec.bold)
            font = ImageFont.load_default(size=pixel_size)

        self._fonts[key] = font
        return font
