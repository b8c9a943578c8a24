"""Helper utilities."""

from .logger import configure_logging, set_log_level
from .parsing import ParsedNumber, clamp_fraction, parse_number
from .text import HelveticaMetrics, normalize_text, truncate_text, wrap_text

__all__ = [
    "configure_logging",
    "set_log_level",
    "ParsedNumber",
    "clamp_fraction",
    "parse_number",
    "HelveticaMetrics",
    "normalize_text",
    "truncate_text",
    "wrap_text",
]
