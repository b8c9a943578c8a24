"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from docsynth.utils.logger import configure_logging, set_log_level


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def test_rich_handler(self):
        configure_logging("DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RichHandler)

    def test_plain_handler(self):
        configure_logging("info", use_rich=False)
        (handler,) = logging.getLogger().handlers
        assert type(handler) is logging.StreamHandler
        assert handler.level == logging.INFO

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")

    def test_set_log_level(self):
        configure_logging("WARNING", use_rich=False)
        set_log_level("ERROR")
        root = logging.getLogger()
        assert root.level == logging.ERROR
        assert all(handler.level == logging.ERROR for handler in root.handlers)
