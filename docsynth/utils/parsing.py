"""Explicit parsing of loosely typed input values."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True, slots=True)
class ParsedNumber:
    """Result of ``parse_number``: ``ok`` tells "zero" apart from "unknown"."""

    ok: bool
    value: Optional[float] = None

    def or_default(self, default: float) -> float:
        return self.value if self.ok and self.value is not None else default


UNKNOWN = ParsedNumber(ok=False)


def parse_number(value: Any) -> ParsedNumber:
    """Parse ``value`` as a finite float.

    Booleans, ``None``, blank strings, NaN and infinities are unknown.
    """
    if value is None or isinstance(value, bool):
        return UNKNOWN
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return UNKNOWN
        try:
            number = float(text)
        except ValueError:
            return UNKNOWN
    else:
        return UNKNOWN

    if not math.isfinite(number):
        return UNKNOWN
    return ParsedNumber(ok=True, value=number)


def clamp_fraction(value: Any) -> float:
    """Clamp a loosely typed value into ``[0, 1]``; unknown values become 0."""
    parsed = parse_number(value)
    if not parsed.ok:
        return 0.0
    return max(0.0, min(1.0, parsed.or_default(0.0)))
