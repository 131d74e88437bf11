"""Session event reporting."""

import logging
from typing import Protocol


logger = logging.getLogger("filetransport.session")


class SessionListener(Protocol):
    """Protocol for receiving session debug notes."""
    def debug(self, message: str) -> None: ...


class LoggingSessionListener:
    """Forward session debug notes to the ``filetransport.session`` logger."""

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logger

    def debug(self, message: str) -> None:
        self.log.debug(message)
