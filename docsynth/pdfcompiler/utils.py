"""Utility functions for PDF generation."""

import re

_NON_PRINTABLE = re.compile(r"[^\x20-\x7E]")
_WHITESPACE = re.compile(r"\s+")


def escape_pdf_string(text: str) -> str:
    """Escape special characters in PDF literal strings.

    Args:
        text: Input string (will be converted to str if not already)

    Returns:
        Escaped string for PDF
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)

    # Backslash first so the escapes added below are not doubled
    replacements = {
        "\\": "\\\\",
        "(": "\\(",
        ")": "\\)",
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
    }

    result = text
    for char, escaped in replacements.items():
        result = result.replace(char, escaped)

    return result


def to_pdf_ascii(value: object) -> str:
    """Reduce ``value`` to printable ASCII: other characters become spaces,
    whitespace runs collapse, ends are trimmed."""
    if value is None:
        return ""
    text = _NON_PRINTABLE.sub(" ", str(value))
    return _WHITESPACE.sub(" ", text).strip()


def escape_pdf_text(value: object) -> str:
    """ASCII-normalize ``value`` and escape it for a ``( ) Tj`` operand."""
    return (
        to_pdf_ascii(value)
        .replace("\\", "\\\\")
        .replace("(", "\\(")
        .replace(")", "\\)")
    )


def format_pdf_number(value: float) -> str:
    """Format number for PDF (limit decimal places).

    Args:
        value: Numeric value

    Returns:
        Formatted string
    """
    if isinstance(value, int):
        return str(value)
    return f"{value:.3f}".rstrip("0").rstrip(".")


def format_pdf_matrix(a: float, b: float, c: float, d: float, e: float, f: float) -> str:
    """Format a transformation matrix operand list for ``cm``."""
    return " ".join(format_pdf_number(value) for value in (a, b, c, d, e, f))
