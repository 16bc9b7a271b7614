"""User-facing notification sinks."""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Abstract base for anything that can show an error to the user."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show message as an error."""


class LoggingNotifier(Notifier):
    """Notifier that logs messages and remembers them in order."""

    def __init__(self):
        self.messages: list[str] = []

    def error(self, message: str) -> None:
        self.messages.append(message)
        logger.error(message)
