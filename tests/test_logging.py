"""Tests for logging setup and session events."""

import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from filetransport.utils.events import LoggingSessionListener
from filetransport.utils.logging import configure_logging


@pytest.fixture
def package_logger():
    """Restore the package logger after each test."""
    log = logging.getLogger("filetransport")
    handlers, level = list(log.handlers), log.level
    yield log
    log.handlers[:] = handlers
    log.setLevel(level)


def test_configure_logging(package_logger):
    """Test a single rich handler is installed."""
    configure_logging("debug")
    configure_logging("debug")

    rich_handlers = [h for h in package_logger.handlers if isinstance(h, RichHandler)]
    assert len(rich_handlers) == 1
    assert package_logger.level == logging.DEBUG


def test_configure_logging_output(package_logger):
    """Test records reach the given console."""
    console = Console(record=True, width=120)
    configure_logging("INFO", console=console)

    logging.getLogger("filetransport.providers.provider").info("copying tree")

    assert "copying tree" in console.export_text()


def test_logging_session_listener(caplog):
    caplog.set_level(logging.DEBUG, logger="filetransport.session")

    LoggingSessionListener().debug("session note")

    assert "session note" in caplog.text
