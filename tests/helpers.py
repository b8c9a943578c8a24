"""Shared test doubles and sample data."""

import base64
import io

from PIL import Image

from docsynth.engine.fonts import FontSpec


def jpeg_bytes(width: int = 8, height: int = 8, color: str = "white") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="JPEG")
    return buffer.getvalue()


def png_bytes(width: int = 8, height: int = 4, color: str = "red") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeSurface:
    """Deterministic drawing surface: every character is ``size * 0.5`` wide.

    Drawing calls are recorded in ``calls`` as tuples starting with the
    operation name.
    """

    CHAR_RATIO = 0.5

    def __init__(self, width: int = 1240, height: int = 1754):
        self.width = width
        self.height = height
        self.font_spec = FontSpec()
        self.calls = []

    def set_font(self, spec):
        self.font_spec = spec

    def measure_text(self, text):
        return len(text or "") * self.font_spec.size * self.CHAR_RATIO

    def draw_text(self, text, x, y, color, align="left"):
        if text:
            self.calls.append(("text", text, x, y, color, align))

    def draw_line(self, x1, y1, x2, y2, color, line_width=1):
        self.calls.append(("line", x1, y1, x2, y2, color, line_width))

    def draw_rounded_rect(self, x, y, width, height, radius, fill=None, stroke=None, line_width=1):
        self.calls.append(("rect", x, y, width, height, radius, fill, stroke))

    def draw_arc(self, center_x, center_y, radius, start, end, color, line_width, round_caps=False):
        self.calls.append(("arc", center_x, center_y, radius, start, end, color, round_caps))

    def draw_image(self, image, x, y, width, height):
        self.calls.append(("image", x, y, width, height))

    def to_data_url(self, mime="image/jpeg", quality=0.92):
        payload = base64.b64encode(jpeg_bytes(self.width, self.height)).decode("ascii")
        return f"data:image/jpeg;base64,{payload}"

    # helpers for assertions
    def texts(self):
        return [call for call in self.calls if call[0] == "text"]

    def lines(self):
        return [call for call in self.calls if call[0] == "line"]

    def text_values(self):
        return [call[1] for call in self.texts()]
