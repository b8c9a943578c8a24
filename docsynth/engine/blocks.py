"""Typed content blocks consumed by the block-flow layout."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Sequence, Tuple, Union

from ..exceptions import LayoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TitleBlock:
    kind: ClassVar[str] = "title"
    text: str


@dataclass(frozen=True, slots=True)
class SectionBlock:
    kind: ClassVar[str] = "section"
    text: str


@dataclass(frozen=True, slots=True)
class ParagraphBlock:
    kind: ClassVar[str] = "paragraph"
    text: str


@dataclass(frozen=True, slots=True)
class ListBlock:
    kind: ClassVar[str] = "list"
    items: Tuple[str, ...]
    numbered: bool = False

    def marker(self, index: int) -> str:
        """Marker for the item at zero-based ``index``."""
        return f"{index + 1}. " if self.numbered else "• "


@dataclass(frozen=True, slots=True)
class SignatureBlock:
    kind: ClassVar[str] = "signature"
    left_name: str
    right_name: str
    left_role: str = "CHAIRPERSON"
    right_role: str = "SECRETARY"


ContentBlock = Union[TitleBlock, SectionBlock, ParagraphBlock, ListBlock, SignatureBlock]


def _text(data: Dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key, default)
    return default if value is None else str(value)


def block_from_dict(data: Dict[str, Any]) -> ContentBlock:
    """

    Build a block from its JSON form.

    Examples:
    {"type": "title", "text": "..."}
    {"type": "list", "style": "numbered", "items": ["a", "b"]}
    {"type": "signature", "left_name": "A", "right_name": "B"}

    """
    if not isinstance(data, dict):
        raise LayoutError("Block must be an object", details=type(data).__name__)

    kind = str(data.get("type", "")).strip().lower()
    if kind == "title":
        return TitleBlock(text=_text(data, "text"))
    if kind == "section":
        return SectionBlock(text=_text(data, "text"))
    if kind == "paragraph":
        return ParagraphBlock(text=_text(data, "text"))
    if kind == "list":
        items = data.get("items") or []
        if not isinstance(items, list):
            raise LayoutError("List block items must be an array")
        style = str(data.get("style", "bullet")).strip().lower()
        if style not in ("bullet", "numbered"):
            raise LayoutError("Unknown list style", details=style)
        return ListBlock(items=tuple(str(item) for item in items), numbered=style == "numbered")
    if kind == "signature":
        return SignatureBlock(
            left_name=_text(data, "left_name"),
            right_name=_text(data, "right_name"),
            left_role=_text(data, "left_role", "CHAIRPERSON"),
            right_role=_text(data, "right_role", "SECRETARY"),
        )
    raise LayoutError("Unknown block type", details=repr(kind))


def blocks_from_list(items: Sequence[Dict[str, Any]]) -> List[ContentBlock]:
    return [block_from_dict(item) for item in items]


def load_blocks(path: str | Path) -> List[ContentBlock]:
    """Read a JSON array of blocks (or an object with a ``blocks`` array)."""
    source = Path(path)
    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise LayoutError("Block file is not valid JSON", details=str(exc)) from exc
    if isinstance(raw, dict):
        raw = raw.get("blocks", [])
    if not isinstance(raw, list):
        raise LayoutError("Block file must contain an array of blocks")
    blocks = blocks_from_list(raw)
    logger.debug("Loaded %d blocks from %s", len(blocks), source)
    return blocks
