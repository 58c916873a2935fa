"""Tests for script logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from cidzor.logging_utils import setup_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_verbose_is_debug(self, restore_root):
        setup_logging(verbose=True)
        assert restore_root.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in restore_root.handlers)

    def test_default_level(self, restore_root, monkeypatch):
        monkeypatch.setattr("cidzor.logging_utils.LOG_LEVEL", "WARNING")
        setup_logging()
        assert restore_root.level == logging.WARNING
