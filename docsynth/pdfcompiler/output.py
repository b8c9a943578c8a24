"""Finished PDF file handed back to callers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True, slots=True)
class PdfFile:
    """A suggested file name plus the complete PDF bytes."""

    name: str
    data: bytes
    media_type: str = PDF_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.data)

    def save(self, path: str | Path | None = None) -> Path:
        """Write the file to ``path`` (a directory or file path; defaults to ``name`` in the cwd)."""
        target = Path(path) if path is not None else Path(self.name)
        if target.is_dir():
            target = target / self.name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.data)
        logger.info("Wrote %s (%d bytes)", target, self.size)
        return target
