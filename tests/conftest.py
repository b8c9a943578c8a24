"""
Pytest configuration for docsynth
"""

import logging
import sys

import pytest

from docsynth.pdfcompiler.image_document import PageBuffer
from tests.helpers import FakeSurface, jpeg_bytes


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests

    formatter = logging.Formatter(
        '%(name)s - %(levelname)s - %(message)s'
    )
    console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def fake_surface():
    return FakeSurface()


@pytest.fixture
def fake_surface_factory():
    created = []

    def factory():
        surface = FakeSurface()
        created.append(surface)
        return surface

    factory.created = created
    return factory


@pytest.fixture
def blank_page_buffer():
    """One blank 1240x1754 JPEG page."""
    return PageBuffer(width=1240, height=1754, data=jpeg_bytes(1240, 1754))


@pytest.fixture
def small_page_buffers():
    return [PageBuffer(width=16, height=24, data=jpeg_bytes(16, 24, color)) for color in ("white", "black", "blue")]


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    # Ignore logging errors during tests
    logging.raiseExceptions = False
