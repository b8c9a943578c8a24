"""
Image acquisition for report headers (logos).

Loading is the single asynchronous step of a document build. Any failure
(network, HTTP status, undecodable bytes) is logged and reported as ``None``
so the caller can fall back to initials. A loaded ``ReportImage`` owns a
decoded Pillow image and must be released once the build is finished.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import AsyncIterator, Optional

import httpx
from PIL import Image, UnidentifiedImageError

from ..exceptions import MediaError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


@dataclass(slots=True)
class ReportImage:
    """Decoded raster image plus the source it came from."""

    image: Image.Image
    source: str
    released: bool = False

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def release(self) -> None:
        if not self.released:
            self.image.close()
            self.released = True


def decode_image_bytes(data: bytes, source: str = "<bytes>") -> ReportImage:
    """Decode raw image bytes with Pillow; raises ``MediaError`` on failure."""
    if not data:
        raise MediaError("Image payload is empty", details=source)
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except Image.DecompressionBombError as exc:
        raise MediaError("Image dimensions exceed the decode limit", details=f"{source}: {exc}") from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise MediaError("Failed to decode image", details=f"{source}: {exc}") from exc
    return ReportImage(image=image, source=source)


def _decode_data_url(source: str) -> bytes:
    header, _, payload = source.partition(",")
    if not payload or ";base64" not in header:
        raise MediaError("Only base64 data URLs are supported", details=header[:40])
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MediaError("Invalid base64 payload in data URL") from exc


async def _fetch(source: str, client: Optional[httpx.AsyncClient], timeout: float) -> bytes:
    if client is not None:
        response = await client.get(source, timeout=timeout)
    else:
        async with httpx.AsyncClient(follow_redirects=True, timeout=timeout) as owned:
            response = await owned.get(source)
    if response.status_code != 200:
        raise MediaError("Image request failed", details=f"HTTP {response.status_code}")
    return response.content


async def load_report_image(source: object, client: Optional[httpx.AsyncClient] = None,
                            timeout: float = DEFAULT_TIMEOUT) -> Optional[ReportImage]:
    """Fetch and decode an image from an http(s) URL, data URL or local path.

    Returns ``None`` for a blank source or on any failure.
    """
    location = str(source or "").strip()
    if not location:
        return None

    try:
        if location.startswith(("http://", "https://")):
            data = await _fetch(location, client, timeout)
        elif location.startswith("data:"):
            data = _decode_data_url(location)
        else:
            path = Path(location).expanduser()
            if not path.is_file():
                raise MediaError("Image file not found", details=str(path))
            data = path.read_bytes()
        image = decode_image_bytes(data, source=location[:80])
    except (MediaError, httpx.HTTPError, OSError) as exc:
        logger.warning("Report image unavailable (%s), using initials fallback: %s", location[:80], exc)
        return None

    logger.debug("Loaded report image %s (%dx%d)", location[:80], image.width, image.height)
    return image


def release_report_image(image: Optional[ReportImage]) -> None:
    if image is not None:
        image.release()


@asynccontextmanager
async def report_image(source: object, client: Optional[httpx.AsyncClient] = None,
                       timeout: float = DEFAULT_TIMEOUT) -> AsyncIterator[Optional[ReportImage]]:
    """Load an image for the duration of a build and release it on every exit path."""
    image = await load_report_image(source, client=client, timeout=timeout)
    try:
        yield image
    finally:
        release_report_image(image)
