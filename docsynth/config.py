"""Immutable configuration for the layout engine and the PDF assembler.

Every option the engine recognises is enumerated here with its default.
Configuration values are passed explicitly into the components that need
them; nothing is read from module-level state.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields, is_dataclass, replace
from pathlib import Path
from typing import Any, Dict, Tuple, Type, TypeVar

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

T = TypeVar("T")

WRAP_MODES = ("width", "chars")

DEFAULT_FONT_SEARCH_DIRS: Tuple[str, ...] = (
    "/usr/share/fonts",
    "/usr/local/share/fonts",
    "~/.fonts",
    "~/.local/share/fonts",
    "C:/Windows/Fonts",
    "/System/Library/Fonts",
    "/Library/Fonts",
)


@dataclass(frozen=True, slots=True)
class FontDefaults:
    """Font settings applied when a style leaves a field unset."""

    family: str = "sans"
    size: float = 16.0
    weight: int = 400
    color: str = "#0f172a"
    search_dirs: Tuple[str, ...] = DEFAULT_FONT_SEARCH_DIRS


@dataclass(frozen=True, slots=True)
class PageGeometry:
    """Raster page size in pixels and the body area used by block flow."""

    width: int = 1240
    height: int = 1754
    margin_x: float = 120.0
    body_top: float = 96.0
    body_bottom: float = 1560.0
    background: str = "#ffffff"

    @property
    def body_width(self) -> float:
        return self.width - self.margin_x * 2


@dataclass(frozen=True, slots=True)
class PdfPageSize:
    """Page size of the generated PDF in points (A4 by default)."""

    width: float = 595.28
    height: float = 841.89


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    page: PageGeometry = field(default_factory=PageGeometry)
    fonts: FontDefaults = field(default_factory=FontDefaults)


@dataclass(frozen=True, slots=True)
class TextDocumentOptions:
    """Options of the plain ASCII text PDF path."""

    page_width: float = 595.0
    page_height: float = 842.0
    margin_x: float = 50.0
    title_size: float = 16.0
    title_y: float = 800.0
    line_size: float = 10.0
    first_line_y: float = 776.0
    line_height: float = 14.0
    bottom_margin: float = 50.0
    paginate: bool = True
    wrap_mode: str = "width"
    max_chars: int = 92

    def __post_init__(self):
        if self.wrap_mode not in WRAP_MODES:
            raise ConfigError("Unknown text wrap mode",
                              details=f"{self.wrap_mode!r}, expected one of {WRAP_MODES}")
        if self.max_chars < 2:
            raise ConfigError("max_chars must be at least 2", details=repr(self.max_chars))

    @property
    def text_width(self) -> float:
        return self.page_width - self.margin_x * 2


@dataclass(frozen=True, slots=True)
class DocSynthConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    pdf_page: PdfPageSize = field(default_factory=PdfPageSize)
    text: TextDocumentOptions = field(default_factory=TextDocumentOptions)
    jpeg_quality: float = 0.92
    compress_streams: bool = False
    producer: str = "docsynth"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DocSynthConfig":
        """Build a configuration from a nested dictionary.

        Unknown keys raise ``ConfigError`` instead of being ignored.
        """
        return _build(cls, data, path="config")

    def with_overrides(self, **changes: Any) -> "DocSynthConfig":
        return replace(self, **changes)


def _build(cls: Type[T], data: Any, path: str) -> T:
    if not isinstance(data, dict):
        raise ConfigError(f"Expected an object for '{path}'", details=type(data).__name__)

    known = {f.name: f for f in fields(cls)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ConfigError(f"Unknown option(s) in '{path}'", details=", ".join(unknown))

    defaults = cls()
    kwargs: Dict[str, Any] = {}
    for name, value in data.items():
        current = getattr(defaults, name)
        if is_dataclass(current):
            kwargs[name] = _build(type(current), value, path=f"{path}.{name}")
        elif isinstance(current, tuple):
            if not isinstance(value, (list, tuple)):
                raise ConfigError(f"Expected a list for '{path}.{name}'")
            kwargs[name] = tuple(str(item) for item in value)
        elif isinstance(current, bool):
            if not isinstance(value, bool):
                raise ConfigError(f"Expected true/false for '{path}.{name}'")
            kwargs[name] = value
        elif isinstance(current, (int, float)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"Expected a number for '{path}.{name}'", details=repr(value))
            kwargs[name] = type(current)(value)
        else:
            kwargs[name] = str(value)
    return cls(**kwargs)


def load_config(path: str | Path) -> DocSynthConfig:
    """Load a ``DocSynthConfig`` from a JSON file."""
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError("Config file not found", details=str(config_path)) from exc
    except json.JSONDecodeError as exc:
        raise ConfigError("Config file is not valid JSON", details=str(exc)) from exc

    config = DocSynthConfig.from_dict(raw)
    logger.debug("Loaded config from %s", config_path)
    return config
