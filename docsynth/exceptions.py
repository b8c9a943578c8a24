"""Custom exceptions for docsynth."""

from typing import Optional


class DocSynthError(Exception):
    """Base exception for docsynth errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class LayoutError(DocSynthError):
    """Exception raised during block measurement or pagination."""

    pass


class RenderingError(DocSynthError):
    """Exception raised while painting onto a drawing surface."""

    pass


class FontError(DocSynthError):
    """Exception raised during font resolution."""

    pass


class MediaError(DocSynthError):
    """Exception raised during image acquisition or decoding."""

    pass


class CompilationError(DocSynthError):
    """Exception raised during PDF assembly."""

    pass


class ConfigError(DocSynthError):
    """Exception raised for invalid configuration values."""

    pass
